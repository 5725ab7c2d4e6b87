"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Status display formatting
- Log rendering and scrolling
- Chat message rendering
- Report table and chart display
"""

from datetime import datetime

from rich.console import Group
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Input, RichLog, Static

from ..reports.charts import build_chart
from ..responses.models import Message as ChatMessage
from ..responses.models import ReportPayload
from .config import (
    BOT_LABEL,
    BUSY_LABEL,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    USER_LABEL,
    LogLevel,
)
from .formatting import render_chart, render_message_text, report_table


def _copy_to_clipboard(widget, text: str, what: str) -> None:
    """Copy text with pyperclip, falling back to Textual's OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{what} copiado", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{what} copiado (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        """Copy message content to system clipboard when clicked."""
        event.stop()
        _copy_to_clipboard(self, self._content, "Mensaje")


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        """Handle paste events - convert newlines to spaces for single-line input."""
        from textual.events import Paste

        if isinstance(event, Paste) and event.text:
            clean_text = " ".join(event.text.split())
            self.insert_text_at_cursor(clean_text)
            event.prevent_default()
            event.stop()

    def _on_key(self, event) -> None:
        """Handle key events for history navigation."""
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, command: str) -> None:
        """Add a command to history."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Chat input bar with a single-line input and Send button.

    Enter or the Send button submits; the input is cleared on submit.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(id="chat-input", placeholder="Escribe tu pregunta...")
        yield Button("Enviar", id="send-btn", variant="success").with_tooltip(
            "Enviar pregunta (Enter)"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value.strip()
        if value:
            text_input.add_to_history(value)
            text_input.value = ""
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class StatusPanel(Static):
    """One-line status: voice, request state, conversation size, report rows."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._voice_enabled = True
        self._voice_available = True
        self._busy = False
        self._messages = 0
        self._report_rows: int | None = None

    def on_mount(self) -> None:
        self._update_display()

    def update_status(
        self,
        voice_enabled: bool | None = None,
        voice_available: bool | None = None,
        busy: bool | None = None,
        messages: int | None = None,
        report_rows: int | None = -1,
    ) -> None:
        """Update any subset of the status fields.

        Args:
            voice_enabled: Narration on/off
            voice_available: Whether the host can speak at all
            busy: Request in flight
            messages: Number of chat messages
            report_rows: Rows of the current report, None for no report
        """
        if voice_enabled is not None:
            self._voice_enabled = voice_enabled
        if voice_available is not None:
            self._voice_available = voice_available
        if busy is not None:
            self._busy = busy
        if messages is not None:
            self._messages = messages
        if report_rows != -1:
            self._report_rows = report_rows
        self._update_display()

    def _update_display(self) -> None:
        if not self._voice_available:
            voice = "[dim]Voz: no disponible[/]"
        elif self._voice_enabled:
            voice = "[bold green]Voz:[/] activada"
        else:
            voice = "[bold yellow]Voz:[/] silenciada"

        state = f"[bold yellow]{BUSY_LABEL}[/]" if self._busy else "[bold cyan]Listo[/]"
        report = "sin informe" if self._report_rows is None else f"{self._report_rows:,} filas"

        parts = [
            voice,
            state,
            f"[bold magenta]Mensajes:[/] {self._messages}",
            f"[bold blue]Informe:[/] {report}",
        ]
        self.update("  ".join(parts))

    def get_plain_text(self) -> str:
        """Get status as plain text for clipboard."""
        report = "none" if self._report_rows is None else str(self._report_rows)
        return (
            f"Voice: {'on' if self._voice_enabled else 'off'}  "
            f"Busy: {self._busy}  "
            f"Messages: {self._messages}  "
            f"Report rows: {report}"
        )


class ReportPanel(VerticalScroll):
    """Panel showing the current report as a table and a text chart.

    Hidden until a report arrives.
    """

    BORDER_TITLE = "Informe"
    BORDER_SUBTITLE = ""
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._report: ReportPayload | None = None

    def compose(self):
        yield Static(id="report-body")

    def on_mount(self) -> None:
        """Hide panel by default until a report is shown."""
        self.display = False

    @property
    def report(self) -> ReportPayload | None:
        return self._report

    def show_report(self, report: ReportPayload | None) -> None:
        """Display a report, or hide the panel when report is None."""
        self._report = report
        body = self.query_one("#report-body", Static)
        if report is None:
            body.update("")
            self.border_subtitle = ""
            self.display = False
            return

        renderables = []
        if report.question:
            renderables.append(f"[bold]{report.question}[/]")
        if report.is_empty:
            renderables.append("[dim]El informe no trae filas.[/]")
        else:
            renderables.append(report_table(report))
            chart = build_chart(report)
            if chart is not None:
                renderables.append(render_chart(chart))

        body.update(Group(*renderables))
        self.border_subtitle = f"{len(report.rows)} filas  F2 Excel  F3 PDF"
        self.display = True
        self.scroll_home(animate=False)


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        """Set log level threshold."""
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        """Update subtitle to show current log level."""
        if self.display:
            level_name = LogLevel.name(self._log_level)
            self.border_subtitle = f"Level: {level_name}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Chat, Voice, Webhook, ...)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        from rich.markup import escape

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        level_color = level_colors.get(level, "white")
        level_name = LogLevel.name(level)

        component_colors = {
            "TUI": "cyan",
            "Chat": "green",
            "Voice": "magenta",
            "Webhook": "blue",
            "Report": "bright_yellow",
            "Version": "bright_cyan",
        }
        comp_color = component_colors.get(component, "white")

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level_name:<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        else:
            self.show()
            return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        lines_text = []
        for line in self.lines:
            if hasattr(line, 'text'):
                lines_text.append(line.text)
            elif hasattr(line, '__iter__'):
                text = "".join(seg.text for seg in line if hasattr(seg, 'text'))
                lines_text.append(text)
        return "\n".join(lines_text)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("El log está vacío", timeout=2)
            return
        _copy_to_clipboard(self, text, "Log")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history with text selection support."""

    BORDER_TITLE = "Asistente de Ventas"
    BORDER_SUBTITLE = "Conversación"
    ALLOW_MAXIMIZE = True
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: ChatMessage) -> None:
        """Add a message to the chat history."""
        self._messages.append(message)
        self._render_message(message)
        self.border_subtitle = f"{len(self._messages)} mensajes"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last bot response as plain text."""
        for msg in reversed(self._messages):
            if msg.sender == "bot":
                return render_message_text(msg.text).plain
        return None

    def clear_history(self) -> None:
        """Clear the chat history."""
        self._messages.clear()
        self.remove_children()
        self.border_subtitle = "Conversación"

    def set_busy(self, busy: bool) -> None:
        """Show or remove the processing indicator below the last message."""
        for indicator in self.query("#busy-indicator"):
            indicator.remove()
        if busy:
            self.mount(Static(f"[dim]⏳ {BUSY_LABEL}[/]", id="busy-indicator"))
            self.scroll_end(animate=False)

    def _render_message(self, msg: ChatMessage) -> None:
        """Render a single message to the display."""
        if msg.sender == "user":
            prefix = USER_LABEL
            border_class = "user-message"
            icon = ">"
        else:
            prefix = BOT_LABEL
            border_class = "assistant-message"
            icon = "<"

        timestamp = msg.timestamp.strftime("%H:%M:%S")
        header_text = f"{icon} {prefix} \\[{timestamp}]"

        content = render_message_text(msg.text)
        container = ClickableMessage(content=content.plain, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, classes="message-header"))
        container.compose_add_child(Static(content, classes="message-content"))

        indicators = self.query("#busy-indicator")
        if indicators:
            self.mount(container, before=indicators.first())
        else:
            self.mount(container)
