"""Tests for roast prompt building, reply parsing and the roast client."""

import json

import pytest

from resume_battle.config import BattleConfig
from resume_battle.domain import compare_documents, parse_document
from resume_battle.providers import LLMResponse
from resume_battle.roast import (
    BRUTAL_TONE,
    DEFAULT_TONE,
    RoastClient,
    RoastError,
    build_roast_prompt,
    parse_roast_reply,
)

STRONG = "Experience\n2022-2024 Engineer\n- built scalable systems\n- increased throughput 20%\nSkills\nPython, AWS, Docker\n"
WEAK = "Experience\nDid stuff\n"


class FakeProvider:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def generate(self, messages, config):
        self.calls.append((messages, config))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(text=reply)


@pytest.fixture
def comparison():
    return compare_documents(parse_document(STRONG), parse_document(WEAK))


class TestBuildRoastPrompt:
    def test_default_tone(self, comparison):
        prompt = build_roast_prompt(STRONG, WEAK, comparison, "Alice", "Bob")
        assert f"You are a {DEFAULT_TONE} hiring manager" in prompt
        assert BRUTAL_TONE not in prompt

    def test_brutal_tone(self, comparison):
        prompt = build_roast_prompt(STRONG, WEAK, comparison, "Alice", "Bob", brutal=True)
        assert f"You are a {BRUTAL_TONE} hiring manager" in prompt

    def test_includes_names_and_scores(self, comparison):
        prompt = build_roast_prompt(STRONG, WEAK, comparison, "Alice", "Bob")
        assert 'winner: "Alice" or "Bob"' in prompt
        assert "Scoring winner: Alice" in prompt
        assert "ATS 35/100" in prompt

    def test_texts_are_truncated(self, comparison):
        long_text = "x" * 5000
        prompt = build_roast_prompt(long_text, WEAK, comparison, char_limit=100)
        assert f'Player 1: "{"x" * 100}"' in prompt
        assert "x" * 101 not in prompt


class TestParseRoastReply:
    def test_plain_json(self):
        reply = json.dumps({"winner": "Alice", "roast": " Bob's resume is a haiku. ", "advice": "Add metrics."})
        result = parse_roast_reply(reply, default_winner="Alice", allowed_winners=("Alice", "Bob"))
        assert result.winner == "Alice"
        assert result.roast == "Bob's resume is a haiku."
        assert result.advice == "Add metrics."

    def test_fenced_json(self):
        reply = '```json\n{"winner": "Bob", "roast": "r", "advice": "a"}\n```'
        result = parse_roast_reply(reply, default_winner="Alice", allowed_winners=("Alice", "Bob"))
        assert result.winner == "Bob"

    def test_unknown_winner_falls_back(self):
        reply = json.dumps({"winner": "Carol", "roast": "r", "advice": "a"})
        result = parse_roast_reply(reply, default_winner="Alice", allowed_winners=("Alice", "Bob"))
        assert result.winner == "Alice"

    def test_missing_winner_falls_back(self):
        result = parse_roast_reply('{"roast": "r", "advice": "a"}', default_winner="Bob")
        assert result.winner == "Bob"

    @pytest.mark.parametrize(
        "reply",
        ["not json", "[1, 2]", '{"roast": "r"}', '{"roast": 1, "advice": "a"}'],
    )
    def test_unusable_reply(self, reply):
        with pytest.raises(RoastError):
            parse_roast_reply(reply, default_winner="Alice")


class TestRoastClient:
    @pytest.mark.asyncio
    async def test_roast(self, comparison):
        provider = FakeProvider([json.dumps({"winner": "Alice", "roast": "Ouch.", "advice": "Quantify."})])
        client = RoastClient(provider, config=BattleConfig(api_key="k", prompt_char_limit=50, temperature=0.3))

        result = await client.roast(STRONG, WEAK, comparison, first_name="Alice", second_name="Bob", brutal=True)

        assert result.to_dict() == {"winner": "Alice", "roast": "Ouch.", "advice": "Quantify."}
        messages, gen_config = provider.calls[0]
        assert len(messages) == 1
        assert messages[0].role == "user"
        assert BRUTAL_TONE in messages[0].text
        assert gen_config.json_mode
        assert gen_config.temperature == 0.3

    @pytest.mark.asyncio
    async def test_provider_error_becomes_roast_error(self, comparison):
        provider = FakeProvider([RuntimeError("invalid api key")])
        client = RoastClient(provider)

        with pytest.raises(RoastError, match="AI service error"):
            await client.roast(STRONG, WEAK, comparison)

    @pytest.mark.asyncio
    async def test_transient_failure_is_not_retried(self, comparison):
        provider = FakeProvider(
            [ConnectionError("reset"), json.dumps({"winner": "Player 1", "roast": "r", "advice": "a"})]
        )
        client = RoastClient(provider)

        with pytest.raises(RoastError, match="AI service error"):
            await client.roast(STRONG, WEAK, comparison)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_reply_is_an_error(self, comparison):
        client = RoastClient(FakeProvider([""]))
        with pytest.raises(RoastError):
            await client.roast(STRONG, WEAK, comparison)
