from dataclasses import dataclass, field
from datetime import datetime

from .config import TRANSCRIPT_MAX_MESSAGES


@dataclass
class Message:
    text: str
    is_user: bool
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "is_user": self.is_user,
            "timestamp": self.timestamp.isoformat(),
        }


class Transcript:
    def __init__(self, max_messages: int = TRANSCRIPT_MAX_MESSAGES):
        self.max_messages = max_messages
        self._messages: list[Message] = []

    def add(self, text: str, is_user: bool) -> Message:
        msg = Message(text=text, is_user=is_user)
        self._messages.append(msg)
        if len(self._messages) > self.max_messages:
            self._messages = self._messages[-self.max_messages :]
        return msg

    def last(self) -> Message | None:
        if not self._messages:
            return None
        return self._messages[-1]

    def messages(self) -> list[Message]:
        return list(self._messages)

    def clear(self):
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
