"""Hint session endpoints.

POST /start                  -> first hint for a new session
GET  /session/{id}           -> question and last transcript entry
POST /session/{id}/next      -> next hint for the user's attempt
GET  /session/{id}/solution  -> full solution, closes the session
DELETE /session/{id}         -> drop a session without a solution
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from lib.errors import HintTutorError, InternalError, UpstreamError
from lib.hint_session import HintSessionMachine
from lib.logger import RequestLogger, SessionEvent
from lib.models import (
    NextHintRequest,
    NextHintResponse,
    SessionInfoResponse,
    SolutionResponse,
    StartRequest,
    StartResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hints"])

request_logger = RequestLogger()


def get_hint_sessions(request: Request) -> HintSessionMachine:
    """The state machine wired up in the app lifespan."""
    hint_sessions = getattr(request.app.state, "hint_sessions", None)
    if hint_sessions is None:
        raise HTTPException(status_code=503, detail="Hint sessions not initialised")
    return hint_sessions


def _fail(event: SessionEvent, endpoint: str, error: Exception) -> HTTPException:
    """Log a failed request and translate it to an HTTP error.

    Upstream details stay in the server log and never reach the caller.
    """
    if not isinstance(error, HintTutorError):
        logger.exception("%s unexpected error", endpoint, exc_info=error)
        error = InternalError(str(error))
    elif isinstance(error, UpstreamError):
        logger.error(
            "%s upstream error: %s (status=%s)", endpoint, error, error.upstream_status
        )

    request_logger.log_response(event, error.status_code, error=str(error))
    return HTTPException(status_code=error.status_code, detail=error.public_message)


@router.post("/start", response_model=StartResponse)
async def start_session(
    body: StartRequest,
    hint_sessions: HintSessionMachine = Depends(get_hint_sessions),
):
    """Start a hint session for a question and return the first hint."""
    event = request_logger.log_request("/start", preview=body.question)
    try:
        session_id, hint = await hint_sessions.begin(body.question)
    except Exception as e:
        raise _fail(event, "/start", e) from e

    request_logger.log_response(event, 200, session_id=session_id, hint_count=1)
    return StartResponse(session_id=session_id, hint=hint)


@router.get("/session/{session_id}", response_model=SessionInfoResponse)
async def get_session(
    session_id: str,
    hint_sessions: HintSessionMachine = Depends(get_hint_sessions),
):
    """Return the question and the latest transcript entry of a session."""
    event = request_logger.log_request("/session/{id}", session_id=session_id)
    try:
        question, last_hint = hint_sessions.inspect(session_id)
    except Exception as e:
        raise _fail(event, "/session/{id}", e) from e

    request_logger.log_response(event, 200)
    return SessionInfoResponse(question=question, last_hint=last_hint)


@router.post("/session/{session_id}/next", response_model=NextHintResponse)
async def next_hint(
    session_id: str,
    body: Optional[NextHintRequest] = None,
    hint_sessions: HintSessionMachine = Depends(get_hint_sessions),
):
    """Send the user's attempt along with the history and return the next hint."""
    user_attempt = body.user_attempt if body else None
    event = request_logger.log_request(
        "/session/{id}/next", session_id=session_id, preview=user_attempt or ""
    )
    try:
        hint, done = await hint_sessions.advance(session_id, user_attempt)
    except Exception as e:
        raise _fail(event, "/session/{id}/next", e) from e

    session = hint_sessions.store.get(session_id)
    request_logger.log_response(
        event, 200, hint_count=session.hint_count if session else None, done=done
    )
    return NextHintResponse(hint=hint, done=done)


@router.get("/session/{session_id}/solution", response_model=SolutionResponse)
async def get_solution(
    session_id: str,
    hint_sessions: HintSessionMachine = Depends(get_hint_sessions),
):
    """Return the full solution for the conversation so far and close the session."""
    event = request_logger.log_request("/session/{id}/solution", session_id=session_id)
    try:
        solution = await hint_sessions.resolve(session_id)
    except Exception as e:
        raise _fail(event, "/session/{id}/solution", e) from e

    request_logger.log_response(event, 200)
    return SolutionResponse(solution=solution)


@router.delete("/session/{session_id}")
async def delete_session(
    session_id: str,
    hint_sessions: HintSessionMachine = Depends(get_hint_sessions),
):
    """Drop a session, e.g. after the hint cycle reported done."""
    event = request_logger.log_request("DELETE /session/{id}", session_id=session_id)
    try:
        await hint_sessions.abandon(session_id)
    except Exception as e:
        raise _fail(event, "DELETE /session/{id}", e) from e

    request_logger.log_response(event, 200)
    return {"status": "deleted"}
