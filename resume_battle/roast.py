"""Commentary ("roast") generation for a finished resume battle.

The model is an opaque text generator: it receives a prompt with both resume
texts and their computed scores and must answer with a JSON object holding
``winner``, ``roast`` and ``advice``.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import BattleConfig
from .domain import ComparisonResult, ScoreSet
from .providers import ChatProvider, GenerationConfig, Message

logger = logging.getLogger(__name__)

BRUTAL_TONE = "brutal and savage"
DEFAULT_TONE = "professional but witty"

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class RoastError(Exception):
    """The commentary service failed or returned an unusable reply."""


@dataclass(frozen=True)
class RoastResult:
    winner: str
    roast: str
    advice: str

    def to_dict(self) -> Dict[str, str]:
        return {"winner": self.winner, "roast": self.roast, "advice": self.advice}


def _format_scores(scores: ScoreSet) -> str:
    return (
        f"experience {scores.experience}/20, projects {scores.projects}/20, skills {scores.skills}/20, "
        f"structure {scores.structure}/20, keywords {scores.keywords}/20, total {scores.total}/100, "
        f"ATS {scores.ats}/100"
    )


def build_roast_prompt(
    first_text: str,
    second_text: str,
    comparison: ComparisonResult,
    first_name: str = "Player 1",
    second_name: str = "Player 2",
    brutal: bool = False,
    char_limit: int = 1500,
) -> str:
    """Build the prompt asking the model to roast the losing resume."""
    tone = BRUTAL_TONE if brutal else DEFAULT_TONE
    names = {"first": first_name, "second": second_name}
    return f"""You are a {tone} hiring manager and resume expert.
Compare these two resumes.

{first_name}: "{first_text[:char_limit]}"
{second_name}: "{second_text[:char_limit]}"

Computed scores (ATS decides the battle):
{first_name}: {_format_scores(comparison.scores_first)}
{second_name}: {_format_scores(comparison.scores_second)}
Scoring winner: {names[comparison.winner]}

Output a JSON object with:
- winner: "{first_name}" or "{second_name}"
- roast: A sharp, specific roast of the loser (3-4 sentences). Target: weak bullet points, lack of metrics, buzzword overuse, poor formatting, or missing sections. Use their name ({first_name} or {second_name}) explicitly.
- advice: Two sentences of high-impact resume advice for the loser. Focus on: adding metrics, strengthening action verbs, improving ATS compatibility, or fixing structure.
"""


def parse_roast_reply(text: str, default_winner: str, allowed_winners: Optional[tuple] = None) -> RoastResult:
    """Parse the model's JSON reply.

    A missing or unknown ``winner`` falls back to *default_winner*.
    Raises :class:`RoastError` when the reply is not a JSON object with
    ``roast`` and ``advice`` strings.
    """
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        data: Any = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise RoastError(f"Commentary reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise RoastError("Commentary reply must be a JSON object")

    roast = data.get("roast")
    advice = data.get("advice")
    if not isinstance(roast, str) or not isinstance(advice, str):
        raise RoastError("Commentary reply is missing 'roast' or 'advice'")

    winner = data.get("winner")
    if not isinstance(winner, str) or (allowed_winners and winner not in allowed_winners):
        winner = default_winner

    return RoastResult(winner=winner, roast=roast.strip(), advice=advice.strip())


class RoastClient:
    """Asks a chat provider for commentary on a comparison.

    Each roast is a single provider call; failures surface as :class:`RoastError`
    and are not retried.
    """

    def __init__(
        self,
        provider: ChatProvider,
        config: Optional[BattleConfig] = None,
    ):
        self.provider = provider
        self.config = config or BattleConfig()

    async def roast(
        self,
        first_text: str,
        second_text: str,
        comparison: ComparisonResult,
        first_name: str = "Player 1",
        second_name: str = "Player 2",
        brutal: bool = False,
    ) -> RoastResult:
        prompt = build_roast_prompt(
            first_text,
            second_text,
            comparison,
            first_name=first_name,
            second_name=second_name,
            brutal=brutal,
            char_limit=self.config.prompt_char_limit,
        )
        gen_config = GenerationConfig(
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            json_mode=True,
        )

        try:
            response = await self.provider.generate([Message.user(prompt)], gen_config)
        except Exception as e:
            logger.error("Commentary service error: %s", e)
            raise RoastError("AI service error") from e

        default_winner = first_name if comparison.winner == "first" else second_name
        return parse_roast_reply(
            response.text or "{}",
            default_winner=default_winner,
            allowed_winners=(first_name, second_name),
        )
