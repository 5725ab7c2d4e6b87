"""Conversation state.

Hides how messages and the current report are stored for one chat session.
"""

from ..responses.messages import WELCOME_MESSAGE
from ..responses.models import Message, ReportPayload


class ConversationSession:
    """Ordered messages, the current report and the busy flag.

    Created with a seeded welcome message; reset() goes back to that state.
    """

    def __init__(self, welcome_text: str = WELCOME_MESSAGE) -> None:
        self._welcome_text = welcome_text
        self._messages: list[Message] = []
        self.report: ReportPayload | None = None
        self.busy = False
        self.reset()

    @property
    def welcome_text(self) -> str:
        return self._welcome_text

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the messages, oldest first."""
        return list(self._messages)

    def append(self, sender: str, text: str) -> Message:
        message = Message(sender=sender, text=text)
        self._messages.append(message)
        return message

    def reset(self) -> Message:
        """Drop everything and seed the welcome message again."""
        self._messages = []
        self.report = None
        return self.append("bot", self._welcome_text)
