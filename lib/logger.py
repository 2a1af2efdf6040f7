"""
Session event log - Recent hint session requests kept in memory for /logs.

Each entry records what a request did to its session: the hint count it left
behind, whether the hint cycle reported done, and how the request ended.
"""

import time
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class SessionEvent:
    """One request against the hint session endpoints."""

    endpoint: str
    session_id: Optional[str] = None
    preview: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    status: str = "pending"
    status_code: Optional[int] = None
    hint_count: Optional[int] = None
    done: Optional[bool] = None
    error: Optional[str] = None
    response_time_ms: Optional[int] = None
    _started: float = field(default_factory=time.perf_counter, repr=False)

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("_started")
        return data


class RequestLogger:
    """Bounded in-memory log of session events, most recent last."""

    def __init__(self, max_logs: int = 1000):
        self._events: deque[SessionEvent] = deque(maxlen=max_logs)

    def log_request(
        self,
        endpoint: str,
        session_id: Optional[str] = None,
        preview: str = "",
    ) -> SessionEvent:
        """Open an event for an incoming request; finish it with log_response."""
        event = SessionEvent(endpoint=endpoint, session_id=session_id, preview=preview[:100])
        self._events.append(event)
        return event

    def log_response(
        self,
        event: SessionEvent,
        status_code: int,
        session_id: Optional[str] = None,
        hint_count: Optional[int] = None,
        done: Optional[bool] = None,
        error: Optional[str] = None,
    ) -> None:
        """Close an event with the outcome and the session state it produced."""
        event.response_time_ms = int((time.perf_counter() - event._started) * 1000)
        event.status_code = status_code
        event.status = "success" if status_code < 400 else "error"
        if session_id:
            event.session_id = session_id
        event.hint_count = hint_count
        event.done = done
        event.error = error

    def get_logs(self, limit: int = 100) -> list[dict]:
        """Most recent events first."""
        return [event.to_dict() for event in reversed(self._events)][:limit]

    def clear_logs(self) -> None:
        self._events.clear()
