"""Hint escalation state machine.

One question becomes a short sequence of hints, optionally ending in a full
solution. A session moves AWAITING_FIRST_HINT -> ACTIVE -> TERMINAL; TERMINAL
sessions are removed from the store.

Stored state only changes after the completion call succeeds, and every turn
against one session holds that session's lock.
"""

import logging
from typing import Optional, Protocol, Sequence

from lib.errors import NotFoundError, ValidationError
from lib.models.session import HintSession, Message, Role
from lib.prompts.hints import (
    FIRST_HINT_SYSTEM_PROMPT,
    NEXT_HINT_SYSTEM_PROMPT,
    SOLUTION_SYSTEM_PROMPT,
    build_attempt_prompt,
    build_first_hint_prompt,
)
from lib.session_store import SessionStore

logger = logging.getLogger(__name__)

# Hints allowed before a session is reported done regardless of the model
HINT_CAP = 12

# Matched case-insensitively anywhere in a hint. Heuristic: "undone" matches too.
DONE_SENTINEL = "done"

FIRST_HINT_MAX_TOKENS = 200
NEXT_HINT_MAX_TOKENS = 250
SOLUTION_MAX_TOKENS = 1024
TEMPERATURE = 0.7


class Completer(Protocol):
    async def complete(
        self,
        messages: Sequence[Message],
        max_tokens: int = 256,
        temperature: float = 0.7,
    ) -> str: ...


def is_done(hint: str, hint_count: int) -> bool:
    """Whether the hint cycle is over: the model signalled it or the cap was passed."""
    return DONE_SENTINEL in hint.lower() or hint_count > HINT_CAP


class HintSessionMachine:
    """Runs hint sessions against a completion client and a session store."""

    def __init__(self, client: Completer, store: SessionStore):
        self.client = client
        self.store = store

    async def begin(self, question) -> tuple[str, str]:
        """Open a session for a question and return (session_id, first_hint).

        Nothing is stored if the completion call fails.
        """
        if not isinstance(question, str) or not question:
            raise ValidationError("Missing or invalid 'question' in body")

        seed = [
            Message(Role.SYSTEM, FIRST_HINT_SYSTEM_PROMPT),
            Message(Role.USER, build_first_hint_prompt(question)),
        ]
        first_hint = await self.client.complete(
            seed, max_tokens=FIRST_HINT_MAX_TOKENS, temperature=TEMPERATURE
        )

        session = HintSession(question=question, transcript=seed)
        session.transcript.append(Message(Role.ASSISTANT, first_hint))
        session.hint_count = 1
        session_id = self.store.create(session)

        logger.info("Started session %s", session_id)
        return session_id, first_hint

    async def advance(self, session_id: str, user_attempt: Optional[str]) -> tuple[str, bool]:
        """Send the user's attempt and return (hint, done).

        A done session stays in the store until it is resolved or abandoned.
        """
        self._require(session_id)
        async with self.store.lock(session_id):
            session = self._require(session_id)

            attempt = Message(Role.USER, build_attempt_prompt(user_attempt))
            messages = [
                Message(Role.SYSTEM, NEXT_HINT_SYSTEM_PROMPT),
                *session.transcript,
                attempt,
            ]
            hint = await self.client.complete(
                messages, max_tokens=NEXT_HINT_MAX_TOKENS, temperature=TEMPERATURE
            )

            session.append_exchange(attempt, hint)
            self.store.put(session_id, session)

            done = is_done(hint, session.hint_count)
            if done:
                logger.info("Session %s done after %d hints", session_id, session.hint_count)
            return hint, done

    async def resolve(self, session_id: str) -> str:
        """Return the full solution and close the session."""
        self._require(session_id)
        async with self.store.lock(session_id):
            session = self._require(session_id)

            messages = [Message(Role.SYSTEM, SOLUTION_SYSTEM_PROMPT), *session.transcript]
            solution = await self.client.complete(
                messages, max_tokens=SOLUTION_MAX_TOKENS, temperature=TEMPERATURE
            )

            self.store.delete(session_id)
            logger.info("Resolved session %s after %d hints", session_id, session.hint_count)
            return solution

    def inspect(self, session_id: str) -> tuple[str, Optional[str]]:
        """Return (question, content of the last transcript entry)."""
        session = self._require(session_id)
        return session.question, session.last_content

    async def abandon(self, session_id: str) -> None:
        """Drop a session without asking for a solution."""
        self._require(session_id)
        async with self.store.lock(session_id):
            self._require(session_id)
            self.store.delete(session_id)
            logger.info("Abandoned session %s", session_id)

    def _require(self, session_id: str) -> HintSession:
        session = self.store.get(session_id)
        if session is None:
            raise NotFoundError(session_id)
        return session
