"""Main Textual TUI application.

Orchestrates the UI components and hands user actions to the
ConversationController.
"""

import asyncio
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..conversation.controller import ConversationController
from ..conversation.uploads import upload_spreadsheet
from ..reports.exporter import default_export_path, export_report
from ..version import RELOAD_EXIT_CODE, VersionChecker
from ..webhook.base import WebhookClient
from .callbacks import TUIConversationCallback
from .config import LogLevel
from .screens import UpdateScreen, UploadScreen
from .styles import APP_CSS
from .themes import VENTAS_DARK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ReportPanel,
    StatusPanel,
)


class AsistenteApp(App):
    """Textual TUI for the sales assistant chat."""

    CSS = APP_CSS
    TITLE = "Asistente de Ventas"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Salir"),
        Binding("ctrl+k", "clear_chat", "Limpiar"),
        Binding("ctrl+t", "toggle_voice", "Voz"),
        Binding("f2", "export('xlsx')", "Excel"),
        Binding("f3", "export('pdf')", "PDF"),
        Binding("f4", "upload", "Subir Excel"),
        Binding("ctrl+r", "copy_last_response", "Copiar"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        controller: ConversationController,
        client: WebhookClient,
        version_checker: VersionChecker | None = None,
        log_level: str | None = None,
        export_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._client = client
        self._version_checker = version_checker
        self._log_level = log_level
        self._export_dir = export_dir

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ChatHistoryWidget(id="chat-history")

        with Vertical(id="right-panel"):
            yield ReportPanel(id="report-panel")
            yield DebugPanel(id="debug-panel")

        with Vertical(id="bottom-bar"):
            yield StatusPanel(id="status")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    def on_mount(self) -> None:
        """Wire the controller to the widgets and render the seeded conversation."""
        self.register_theme(VENTAS_DARK)
        self.theme = "ventas-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        status = self.query_one("#status", StatusPanel)
        callback = TUIConversationCallback(
            chat=chat,
            report_panel=self.query_one("#report-panel", ReportPanel),
            status=status,
            input_bar=self.query_one("#chat-input-bar", ChatInputBar),
            app=self,
            on_layout_change=self._sync_layout,
        )
        self._controller.set_callback(callback)
        self._controller.set_debug_callback(self._route_debug)
        if self._version_checker is not None:
            self._version_checker.set_debug_callback(self._route_debug)

        for message in self._controller.messages:
            chat.add_message(message)

        narration = self._controller.narration
        status.update_status(
            voice_enabled=narration.voice_enabled,
            voice_available=narration.available,
            messages=chat.message_count,
        )
        if not narration.available:
            log_panel.warning("Voice", "No speech engine available, narration disabled")

        self.sub_title = getattr(self._client, "url", "")
        self.call_after_refresh(self._sync_layout)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

        if self._version_checker is not None:
            self._check_version()

    def on_unmount(self) -> None:
        """Silence any utterance still playing."""
        self._controller.narration.reset()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def _sync_layout(self) -> None:
        """Collapse the right column when neither report nor log is visible."""
        report_panel = self.query_one("#report-panel", ReportPanel)
        log_panel = self.query_one("#debug-panel", DebugPanel)
        empty = not (report_panel.display or log_panel.display)
        self.query_one("#right-panel").set_class(empty, "-empty")
        self.query_one("#chat-history").set_class(empty, "-wide")

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._controller.busy:
            self.notify("Espera la respuesta en curso", severity="warning", timeout=2)
            return
        self._submit(event.value)

    @work(group="webhook")
    async def _submit(self, text: str) -> None:
        """Run one exchange with the webhook as a background async worker."""
        await self._controller.submit(text)

    @work(group="version", exit_on_error=False)
    async def _check_version(self) -> None:
        if await self._version_checker.check():
            self.push_screen(UpdateScreen(), callback=self._on_update_choice)

    def _on_update_choice(self, reload: bool | None) -> None:
        if reload:
            self.exit(return_code=RELOAD_EXIT_CODE)

    def action_clear_chat(self) -> None:
        """Reset the conversation to the welcome message."""
        self._controller.clear()
        self.notify("Conversación reiniciada", timeout=2)

    def action_toggle_voice(self) -> None:
        """Mute or unmute narration."""
        narration = self._controller.narration
        if not narration.available:
            self.notify("Voz no disponible en este equipo", severity="warning", timeout=3)
            return
        enabled = not narration.voice_enabled
        self._controller.set_voice_enabled(enabled)
        self.query_one("#status", StatusPanel).update_status(voice_enabled=enabled)
        self.notify(f"Voz {'activada' if enabled else 'silenciada'}", timeout=2)

    def action_export(self, fmt: str) -> None:
        """Export the current report as xlsx or pdf."""
        report = self._controller.report
        if report is None or report.is_empty:
            self.notify("No hay informe para exportar", severity="warning", timeout=3)
            return
        try:
            path = export_report(report, default_export_path(fmt, self._export_dir))
        except (ValueError, OSError) as e:
            self._route_debug("error", "Report", f"Export failed: {e}")
            self.notify(f"Error al exportar: {e}", severity="error", timeout=5)
            return
        self._route_debug("info", "Report", f"Exported to {path}")
        self.notify(f"Informe guardado en {path}", timeout=4)

    def action_upload(self) -> None:
        """Ask for a spreadsheet path and upload it."""
        self.push_screen(UploadScreen(), callback=self._upload)

    @work(group="upload")
    async def _upload(self, path: str | None) -> None:
        notice = await upload_spreadsheet(self._client, path)
        self._route_debug("info", "Webhook", f"Upload: {notice}")
        severity = "warning" if notice.startswith(("⚠️", "Por favor")) else "information"
        self.notify(notice, severity=severity, timeout=4)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self._sync_layout()
        self.notify(f"Log {'visible' if is_visible else 'oculto'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Respuesta copiada", timeout=2)
        else:
            self.notify("No hay respuesta para copiar", severity="warning")


async def run_textual_tui(
    controller: ConversationController,
    client: WebhookClient,
    version_checker: VersionChecker | None = None,
    log_level: str | None = None,
    export_dir: Path | None = None,
) -> int:
    """Run the Textual TUI.

    Args:
        controller: Conversation controller bound to the webhook client
        client: Webhook client, also used for spreadsheet uploads
        version_checker: Optional update checker
        log_level: Log level for panel (debug/info/warning/error), None to hide
        export_dir: Directory for exported reports (cwd if None)

    Returns:
        The app's return code; RELOAD_EXIT_CODE asks the caller to restart
    """
    app = AsistenteApp(
        controller=controller,
        client=client,
        version_checker=version_checker,
        log_level=log_level,
        export_dir=export_dir,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        controller.narration.reset()
        await client.close()
    return app.return_code or 0
