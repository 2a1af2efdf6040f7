"""Error taxonomy for hint sessions.

Every failure raised by the state machine or the completion client is a
HintTutorError. The API layer maps each kind to an HTTP status.
"""

from typing import Optional


class HintTutorError(Exception):
    """Base class for all hint session failures."""

    status_code: int = 500
    public_message: str = "Internal server error"


class ValidationError(HintTutorError):
    """Bad or missing input, e.g. an empty question."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class NotFoundError(HintTutorError):
    """No live session exists for the given id."""

    status_code = 404
    public_message = "Session not found"

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class UpstreamError(HintTutorError):
    """The completion call failed or returned unusable content.

    Carries the upstream status and body for server-side diagnostics only.
    """

    public_message = "Failed to get a response from the language model"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.upstream_status = status_code
        self.upstream_body = body


class CompletionTimeoutError(UpstreamError):
    """The completion call did not finish within the configured deadline."""

    public_message = "The language model timed out"


class InternalError(HintTutorError):
    """Unexpected fault."""
