"""Callback bridge between ConversationController and the TUI.

Hides the details of how the TUI receives conversation updates.
Uses thread-safe methods so updates may come from worker threads too.
"""

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..conversation.callbacks import ConversationCallback
from ..responses.models import Message, ReportPayload

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import ChatHistoryWidget, ChatInputBar, ReportPanel, StatusPanel


class TUIConversationCallback(ConversationCallback):
    """Renders conversation events into the chat, report and status widgets."""

    def __init__(
        self,
        chat: "ChatHistoryWidget",
        report_panel: "ReportPanel",
        status: "StatusPanel",
        input_bar: "ChatInputBar | None" = None,
        app: "App | None" = None,
        on_layout_change: Callable[[], None] | None = None,
    ) -> None:
        self.chat = chat
        self.report_panel = report_panel
        self.status = status
        self.input_bar = input_bar
        self.app = app
        self.on_layout_change = on_layout_change

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def message_added(self, message: Message) -> None:
        self._call_thread_safe(self.chat.add_message, message)
        self._call_thread_safe(self._refresh_count)

    def _refresh_count(self) -> None:
        self.status.update_status(messages=self.chat.message_count)

    def busy_changed(self, busy: bool) -> None:
        self._call_thread_safe(self.chat.set_busy, busy)
        self._call_thread_safe(self.status.update_status, busy=busy)
        if self.input_bar is not None:
            self._call_thread_safe(self._set_send_disabled, busy)

    def _set_send_disabled(self, disabled: bool) -> None:
        from textual.widgets import Button

        self.input_bar.query_one("#send-btn", Button).disabled = disabled

    def report_changed(self, report: ReportPayload | None) -> None:
        self._call_thread_safe(self.report_panel.show_report, report)
        rows = None if report is None else len(report.rows)
        self._call_thread_safe(self.status.update_status, report_rows=rows)
        if self.on_layout_change is not None:
            self._call_thread_safe(self.on_layout_change)

    def conversation_cleared(self) -> None:
        self._call_thread_safe(self.chat.clear_history)
