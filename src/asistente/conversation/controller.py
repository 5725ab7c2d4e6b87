"""Request/response cycle of the chat.

Hides the ordering rules of one exchange with the webhook:
- A single request in flight per session
- Narration of a new answer always cancels the stale utterance first
- Transport failures become a conversational warning, never an exception
"""

from typing import Any

from ..responses.messages import CONNECTION_ERROR_MESSAGE
from ..responses.models import Message, ReportPayload
from ..responses.normalizer import normalize
from ..speech.narration import NarrationPipeline
from ..webhook.base import WebhookClient, WebhookError
from .callbacks import ConversationCallback
from .session import ConversationSession


class ConversationController:
    """Orchestrates submit/clear for one ConversationSession."""

    def __init__(
        self,
        client: WebhookClient,
        narration: NarrationPipeline,
        session: ConversationSession | None = None,
        callback: ConversationCallback | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Webhook the questions are sent to
            narration: Pipeline that speaks bot messages
            session: Conversation state (a fresh seeded one if omitted)
            callback: Receiver of conversation events
        """
        self._client = client
        self._narration = narration
        self._session = session or ConversationSession()
        self._callback = callback or ConversationCallback()
        self._generation = 0
        self._debug_callback: Any | None = None

    def set_callback(self, callback: ConversationCallback) -> None:
        self._callback = callback

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed logging.

        Propagated to the narration pipeline and, when supported, the client.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._narration.set_debug_callback(callback)
        if hasattr(self._client, "set_debug_callback"):
            self._client.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    @property
    def messages(self) -> list[Message]:
        return self._session.messages

    @property
    def report(self) -> ReportPayload | None:
        return self._session.report

    @property
    def busy(self) -> bool:
        return self._session.busy

    @property
    def narration(self) -> NarrationPipeline:
        return self._narration

    def _add(self, sender: str, text: str) -> Message:
        message = self._session.append(sender, text)
        self._callback.message_added(message)
        return message

    def _set_busy(self, busy: bool) -> None:
        self._session.busy = busy
        self._callback.busy_changed(busy)

    def _set_report(self, report: ReportPayload | None) -> None:
        self._session.report = report
        self._callback.report_changed(report)

    def _announce(self, text: str) -> None:
        self._narration.reset()
        self._narration.speak(text)

    def _reply(self, text: str) -> None:
        self._add("bot", text)
        self._announce(text)

    async def submit(self, text: str) -> bool:
        """Send user text to the webhook and append the answer.

        Args:
            text: Raw user input

        Returns:
            True if the submission was accepted, False if it was ignored
            (blank input, or another request still in flight)
        """
        question = text.strip()
        if not question:
            return False
        if self._session.busy:
            self._debug("warning", "Request in flight, submission ignored")
            return False

        self._add("user", question)
        self._set_busy(True)
        generation = self._generation
        self._debug("info", f"Asking: '{question[:50]}'")

        try:
            try:
                payload = await self._client.ask(question)
            except WebhookError as e:
                self._debug("error", f"Webhook failed: {e}")
                if generation == self._generation:
                    self._reply(CONNECTION_ERROR_MESSAGE)
                return True

            if generation != self._generation:
                self._debug("info", "Conversation cleared while waiting, answer discarded")
                return True

            result = normalize(payload)
            self._set_report(result.report)
            if result.report is not None:
                self._debug("info", f"Report received: {len(result.report.rows)} rows")
            self._reply(result.display_text)
            return True
        finally:
            self._set_busy(False)

    def clear(self) -> None:
        """Reset the conversation to the welcome message and announce it."""
        self._generation += 1
        welcome = self._session.reset()
        self._callback.conversation_cleared()
        self._callback.message_added(welcome)
        self._callback.report_changed(None)
        self._announce(welcome.text)
        self._debug("info", "Conversation cleared")

    def set_voice_enabled(self, enabled: bool) -> None:
        self._narration.set_voice_enabled(enabled)
        self._debug("info", f"Voice {'enabled' if enabled else 'disabled'}")
