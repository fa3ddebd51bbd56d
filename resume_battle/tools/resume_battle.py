"""Resume battle tool - compare two resume files head to head."""

from __future__ import annotations

from typing import Optional

from ..domain import compare_documents, format_comparison_report, parse_document
from ..observability import BattleObserver
from .base import BaseTool, ToolResult
from .resume_reader import ResumeReaderTool


class ResumeBattleTool(BaseTool):
    """Compare two resumes metric by metric and declare a winner."""

    name = "resume_battle"
    description = """Compare two resume files. Scores both, compares experience, projects,
skills, structure, keywords and ATS score, and declares an overall winner
by ATS score (ties go to the first resume)."""
    parameters = {
        "first_path": {
            "type": "string",
            "description": "Path to the first resume",
            "required": True,
        },
        "second_path": {
            "type": "string",
            "description": "Path to the second resume",
            "required": True,
        },
        "first_name": {
            "type": "string",
            "description": "Display name for the first resume",
        },
        "second_name": {
            "type": "string",
            "description": "Display name for the second resume",
        },
    }

    def __init__(self, workspace_dir: str = ".", observer: Optional[BattleObserver] = None):
        super().__init__(workspace_dir, observer)
        self.reader = ResumeReaderTool(workspace_dir, self.observer)

    async def execute(
        self,
        first_path: str,
        second_path: str,
        first_name: str = "Player 1",
        second_name: str = "Player 2",
    ) -> ToolResult:
        first = await self.reader.execute(path=first_path)
        if not first.success:
            return first
        second = await self.reader.execute(path=second_path)
        if not second.success:
            return second

        try:
            with self.observer.track("parse", documents=2):
                parsed_first = parse_document(first.data["text"])
                parsed_second = parse_document(second.data["text"])
            with self.observer.track("compare") as event:
                result = compare_documents(parsed_first, parsed_second)
                event["winner"] = result.winner

            return ToolResult(
                success=True,
                output=format_comparison_report(result, first_name, second_name),
                data={
                    "first": {"name": first_name, "path": first.data["path"], "text": first.data["text"]},
                    "second": {"name": second_name, "path": second.data["path"], "text": second.data["text"]},
                    "comparison": result.to_dict(),
                },
            )
        except Exception as e:
            return ToolResult.failure(str(e))
