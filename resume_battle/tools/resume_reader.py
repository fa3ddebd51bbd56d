"""Resume reader tool - turn resume files into plain text for the battle pipeline."""

from __future__ import annotations

import io
from typing import Tuple

from ..domain import detect_sections
from .base import BaseTool, ToolResult

SUPPORTED_FORMATS = (".pdf", ".docx", ".md", ".txt")


class UnsupportedFormatError(ValueError):
    """Raised for file types the reader cannot extract."""


def extract_text(data: bytes, suffix: str) -> Tuple[str, dict]:
    """Extract plain text from raw file *data* of type *suffix*.

    Returns ``(text, metadata)``.
    """
    suffix = suffix.lower()
    if suffix == ".pdf":
        return _extract_pdf(data)
    if suffix == ".docx":
        return _extract_docx(data)
    if suffix in (".md", ".txt"):
        return _extract_plain(data)
    raise UnsupportedFormatError(
        f"Unsupported file format: {suffix or '(none)'}. Supported: {', '.join(SUPPORTED_FORMATS)}"
    )


def _extract_pdf(data: bytes) -> Tuple[str, dict]:
    """Extract PDF text using PyMuPDF."""
    try:
        import fitz  # PyMuPDF
    except ImportError:
        raise ImportError("PyMuPDF not installed. Run: pip install pymupdf")

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        metadata = {
            "pages": len(doc),
            "title": (doc.metadata or {}).get("title", ""),
        }
        text_parts = [page.get_text() for page in doc]
    finally:
        doc.close()
    return "\n".join(text_parts), metadata


def _extract_docx(data: bytes) -> Tuple[str, dict]:
    """Extract DOCX text using python-docx."""
    try:
        from docx import Document
    except ImportError:
        raise ImportError("python-docx not installed. Run: pip install python-docx")

    doc = Document(io.BytesIO(data))
    text_parts = [para.text for para in doc.paragraphs if para.text.strip()]

    # Tables come after body paragraphs; cells are tab-joined
    for table in doc.tables:
        for row in table.rows:
            row_text = "\t".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                text_parts.append(row_text)

    metadata = {
        "paragraphs": len(doc.paragraphs),
        "tables": len(doc.tables),
    }
    return "\n".join(text_parts), metadata


def _extract_plain(data: bytes) -> Tuple[str, dict]:
    content = data.decode("utf-8")
    metadata = {
        "lines": content.count("\n") + 1,
        "characters": len(content),
    }
    return content, metadata


class ResumeReaderTool(BaseTool):
    """Read a resume file into plain text."""

    name = "resume_read"
    description = """Read a resume file (PDF, DOCX, MD, TXT) and return its plain text
together with the sections the battle parser detects.
Supported formats: .pdf, .docx, .md, .txt"""
    parameters = {
        "path": {
            "type": "string",
            "description": "Path to the resume file",
            "required": True,
        },
    }

    async def execute(self, path: str) -> ToolResult:
        try:
            file_path = self._resolve_path(path)
            if not file_path.exists():
                return ToolResult.failure(f"File not found: {path}")

            suffix = file_path.suffix.lower()
            if suffix not in SUPPORTED_FORMATS:
                return ToolResult.failure(
                    f"Unsupported file format: {suffix}. Supported: {', '.join(SUPPORTED_FORMATS)}"
                )

            text, metadata = extract_text(file_path.read_bytes(), suffix)
            if not text.strip():
                return ToolResult.failure(f"File is empty: {path}")

            sections = detect_sections(text)
            output = f"=== Resume Content ===\n{text}\n\n=== Detected Sections ===\n"
            for section in sections:
                preview = section.content[:200]
                output += f"\n[{section.title}]\n{preview}{'...' if len(section.content) > 200 else ''}\n"

            return ToolResult(
                success=True,
                output=output,
                data={
                    "path": str(file_path),
                    "format": suffix,
                    "text": text,
                    "sections": [s.title for s in sections],
                    "metadata": metadata,
                },
            )
        except Exception as e:
            return ToolResult.failure(str(e))
