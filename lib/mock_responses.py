"""
Mock Responses - Scripted completion client for running without the real API.

Used when LLM_MOCK is set, and as the completion stub in tests.
"""

import asyncio
from collections import deque
from typing import Optional, Sequence, Union

from lib.models.session import Message, Role
from lib.prompts.hints import FIRST_HINT_SYSTEM_PROMPT, NEXT_HINT_SYSTEM_PROMPT, SOLUTION_SYSTEM_PROMPT

# Canned replies keyed by conversation phase
MOCK_RESPONSES = {
    "first_hint": "What is the problem really asking you to find? Try restating it in your own words.",
    "next_hint": "You're getting closer. Which quantity do you already know, and how does it relate to the unknown?",
    "solution": "Here is the full reasoning step by step, followed by the final answer. (mock solution)",
}

_PHASE_BY_PROMPT = {
    FIRST_HINT_SYSTEM_PROMPT: "first_hint",
    NEXT_HINT_SYSTEM_PROMPT: "next_hint",
    SOLUTION_SYSTEM_PROMPT: "solution",
}

ScriptedReply = Union[str, Exception]


class ScriptedCompletionClient:
    """Completion client that replays queued replies instead of calling an API.

    Queued strings are returned in order and queued exceptions are raised.
    Once the queue is empty, a canned reply for the current phase is returned.
    """

    def __init__(self, replies: Optional[Sequence[ScriptedReply]] = None, delay: float = 0.0):
        """
        Args:
            replies: Replies to hand out before falling back to canned ones
            delay: Seconds to sleep per call, to simulate upstream latency
        """
        self._replies: deque = deque(replies or [])
        self.delay = delay
        self.calls: list[dict] = []

    def queue(self, *replies: ScriptedReply) -> None:
        """Append replies to the script."""
        self._replies.extend(replies)

    async def complete(
        self,
        messages: Sequence[Message],
        max_tokens: int = 256,
        temperature: float = 0.7,
    ) -> str:
        self.calls.append({
            "messages": list(messages),
            "max_tokens": max_tokens,
            "temperature": temperature,
        })

        if self.delay:
            await asyncio.sleep(self.delay)

        if self._replies:
            reply = self._replies.popleft()
            if isinstance(reply, Exception):
                raise reply
            return reply

        return MOCK_RESPONSES[self._phase(messages)]

    @staticmethod
    def _phase(messages: Sequence[Message]) -> str:
        if messages and messages[0].role == Role.SYSTEM:
            return _PHASE_BY_PROMPT.get(messages[0].content, "next_hint")
        return "next_hint"

    async def close(self):
        pass
