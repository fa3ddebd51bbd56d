"""Resume scoring tool - score a single resume file."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from ..domain import collect_details, format_score_report, parse_document, score_document
from ..observability import BattleObserver
from .base import BaseTool, ToolResult
from .resume_reader import ResumeReaderTool


class ResumeScoreTool(BaseTool):
    """Score a resume on five categories plus ATS compatibility."""

    name = "resume_score"
    description = """Score a resume file. Returns five category scores (experience, projects,
skills, structure, keywords; 0-20 each), their total (0-100) and an
independent ATS compatibility score (0-100)."""
    parameters = {
        "path": {
            "type": "string",
            "description": "Path to the resume file to score",
            "required": True,
        },
    }

    def __init__(self, workspace_dir: str = ".", observer: Optional[BattleObserver] = None):
        super().__init__(workspace_dir, observer)
        self.reader = ResumeReaderTool(workspace_dir, self.observer)

    async def execute(self, path: str) -> ToolResult:
        read = await self.reader.execute(path=path)
        if not read.success:
            return read

        try:
            with self.observer.track("parse", path=path) as event:
                parsed = parse_document(read.data["text"])
                event["sections"] = len(parsed.sections)
            with self.observer.track("score", path=path) as event:
                scores = score_document(parsed)
                details = collect_details(parsed)
                event["total"] = scores.total
                event["ats"] = scores.ats

            return ToolResult(
                success=True,
                output=format_score_report(scores, details),
                data={
                    "path": read.data["path"],
                    "scores": asdict(scores),
                    "details": asdict(details),
                    "sections": [s.title for s in parsed.sections],
                },
            )
        except Exception as e:
            return ToolResult.failure(str(e))
