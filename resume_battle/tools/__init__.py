"""Resume Battle Tools - read resume files and run the battle pipeline on them."""

from .base import BaseTool, ToolResult
from .resume_battle import ResumeBattleTool
from .resume_reader import SUPPORTED_FORMATS, ResumeReaderTool, UnsupportedFormatError, extract_text
from .resume_score import ResumeScoreTool

__all__ = [
    "BaseTool",
    "ToolResult",
    "ResumeReaderTool",
    "ResumeScoreTool",
    "ResumeBattleTool",
    "SUPPORTED_FORMATS",
    "UnsupportedFormatError",
    "extract_text",
]
