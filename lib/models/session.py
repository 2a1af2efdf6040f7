"""In-memory models for hint sessions."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Role of a transcript message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single role-tagged transcript entry."""

    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}


@dataclass
class HintSession:
    """Server-side state for one question's hint conversation."""

    question: str
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Sole memory of the conversation, sent back to the model every turn
    transcript: list[Message] = field(default_factory=list)
    hint_count: int = 0

    # Lifecycle
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)

    def append_exchange(self, user_message: Message, hint: str) -> None:
        """Commit a user turn and the hint that answered it."""
        self.transcript.append(user_message)
        self.transcript.append(Message(Role.ASSISTANT, hint))
        self.hint_count += 1
        self.last_activity = time.time()

    @property
    def last_content(self) -> str | None:
        """Content of the most recent transcript entry, if any."""
        if not self.transcript:
            return None
        return self.transcript[-1].content
