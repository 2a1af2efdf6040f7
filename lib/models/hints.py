"""Request and response models for the hint session endpoints."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class StartRequest(BaseModel):
    """Request body for POST /start."""
    question: str = Field(..., description="Problem text captured from the page selection")


class StartResponse(BaseModel):
    """First hint for a newly created session."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Opaque session identifier")
    hint: str = Field(..., description="First hint")


class SessionInfoResponse(BaseModel):
    """Question and latest transcript entry of a live session."""
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., description="Original question")
    last_hint: Optional[str] = Field(None, alias="lastHint", description="Content of the last transcript entry")


class NextHintRequest(BaseModel):
    """Request body for POST /session/{id}/next."""
    model_config = ConfigDict(populate_by_name=True)

    user_attempt: Optional[str] = Field(None, alias="userAttempt", description="User's attempt or reasoning so far")


class NextHintResponse(BaseModel):
    """Next hint and whether the hint cycle is over."""
    hint: str = Field(..., description="Next hint")
    done: bool = Field(..., description="True when solved or the hint cap was exceeded")


class SolutionResponse(BaseModel):
    """Full solution; the session is closed afterwards."""
    solution: str = Field(..., description="Complete explanation and answer")
