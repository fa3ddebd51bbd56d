"""Logging setup and timed pipeline events for resume battles."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stream handler to the ``resume_battle`` logger once."""
    root = logging.getLogger("resume_battle")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.INFO if verbose else logging.WARNING)
    return root


@dataclass
class PipelineEvent:
    """A single step of a battle run."""

    timestamp: datetime
    event_type: str  # "parse", "score", "compare", "roast", "error"
    data: Dict[str, Any] = field(default_factory=dict)
    duration_ms: Optional[float] = None


class BattleObserver:
    """Collects timed events for one scoring or comparison run.

    An observer belongs to a single run; create a new one per request.
    """

    def __init__(self, run_id: Optional[str] = None):
        self.events: List[PipelineEvent] = []
        self.run_id = run_id
        self.logger = logging.getLogger("resume_battle.pipeline")

    def _prefix(self) -> str:
        return f"[{self.run_id}] " if self.run_id else ""

    @contextmanager
    def track(self, event_type: str, **data: Any) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block and record it as *event_type*.

        The yielded dict can be filled with extra event data.
        """
        extra: Dict[str, Any] = dict(data)
        start = time.perf_counter()
        try:
            yield extra
        except Exception as e:
            self.log_error(event_type, str(e), extra)
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        self.events.append(
            PipelineEvent(timestamp=datetime.now(), event_type=event_type, data=extra, duration_ms=duration_ms)
        )
        details = " ".join(f"{k}={v}" for k, v in extra.items())
        self.logger.info(f"{self._prefix()}{event_type} ({duration_ms:.2f}ms) {details}".rstrip())

    def log_error(self, error_type: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.events.append(
            PipelineEvent(
                timestamp=datetime.now(),
                event_type="error",
                data={"error_type": error_type, "message": message, "context": context or {}},
            )
        )
        self.logger.error(f"{self._prefix()}Error ({error_type}): {message}")

    def get_stats(self) -> Dict[str, Any]:
        """Aggregate counts and durations for the run."""
        errors = [e for e in self.events if e.event_type == "error"]
        return {
            "event_count": len(self.events),
            "errors": len(errors),
            "total_duration_ms": sum(e.duration_ms or 0 for e in self.events),
            "steps": [e.event_type for e in self.events if e.event_type != "error"],
        }
