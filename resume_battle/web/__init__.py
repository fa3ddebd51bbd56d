"""FastAPI surface for resume battles."""
