"""Shared plumbing for the resume tools.

Every tool reads résumé files relative to a workspace directory, reports
pipeline steps to a :class:`BattleObserver` and answers with a
:class:`ToolResult` whose ``data`` is JSON-ready for the CLI and web layers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..observability import BattleObserver


@dataclass
class ToolResult:
    """Outcome of reading, scoring or battling résumé files.

    ``output`` is the human-readable report; ``data`` carries the same
    result as plain dicts and lists.
    """
    success: bool
    output: str
    error: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, output="", error=error)

    def to_message(self) -> str:
        """Report text, or the error line when the tool failed."""
        if self.success:
            return self.output
        return f"Error: {self.error}\n{self.output}" if self.output else f"Error: {self.error}"


class BaseTool(ABC):
    """A résumé operation callable from the CLI, the web API or a model."""

    name: str
    description: str
    parameters: Dict[str, Any]

    def __init__(self, workspace_dir: str = ".", observer: Optional[BattleObserver] = None):
        self.workspace_dir = Path(workspace_dir).resolve()
        self.observer = observer or BattleObserver()

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Run the tool; failures come back as ``ToolResult.failure``."""

    def to_schema(self) -> Dict[str, Any]:
        """Describe the tool for a function-calling chat model."""
        required = [k for k, v in self.parameters.items() if v.get("required", False)]
        properties = {
            k: {key: value for key, value in v.items() if key != "required"}
            for k, v in self.parameters.items()
        }
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {"type": "object", "properties": properties, "required": required},
            },
        }

    def _resolve_path(self, path: str) -> Path:
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.workspace_dir / p
