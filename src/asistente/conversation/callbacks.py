"""Callback interface for conversation updates.

Hides how a front end learns about conversation changes. Every method is a
no-op so front ends override only what they render.
"""

from ..responses.models import Message, ReportPayload


class ConversationCallback:
    """Receives conversation events from ConversationController."""

    def message_added(self, message: Message) -> None:
        """Called after a message is appended."""

    def busy_changed(self, busy: bool) -> None:
        """Called when a request starts or finishes."""

    def report_changed(self, report: ReportPayload | None) -> None:
        """Called when the current report is replaced or cleared."""

    def conversation_cleared(self) -> None:
        """Called after the conversation is reset, before the welcome message is added."""
