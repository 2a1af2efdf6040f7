"""Models for hint sessions and their HTTP endpoints."""

from .session import Role, Message, HintSession
from .hints import (
    StartRequest,
    StartResponse,
    SessionInfoResponse,
    NextHintRequest,
    NextHintResponse,
    SolutionResponse,
)

__all__ = [
    # Session state
    "Role",
    "Message",
    "HintSession",
    # Endpoints
    "StartRequest",
    "StartResponse",
    "SessionInfoResponse",
    "NextHintRequest",
    "NextHintResponse",
    "SolutionResponse",
]
