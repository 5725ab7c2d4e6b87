"""Modal screens for the TUI.

This module hides the design decisions about:
- Dialog appearance (CSS, layout)
- Keyboard shortcuts for dialogs
- How the update prompt and the file prompt are presented
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

DIALOG_CSS = """
{name} {{
    align: center middle;
    background: $background 70%;
}}

{name} .dialog {{
    width: 64;
    height: auto;
    max-height: 20;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}}

{name} .dialog-title {{
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $accent;
    padding: 0 0 1 0;
    border-bottom: solid $border;
    margin-bottom: 1;
}}

{name} .dialog-body {{
    width: 100%;
    text-align: center;
    padding: 0 1;
    margin-bottom: 1;
}}

{name} .dialog-buttons {{
    width: 100%;
    height: 3;
    align: center middle;
}}

{name} .dialog-buttons Button {{
    margin: 0 1;
    min-width: 12;
}}
"""


class UpdateScreen(ModalScreen[bool]):
    """Prompt shown when a newer build is published.

    Dismisses with True when the user chooses to reload.
    """

    CSS = DIALOG_CSS.format(name="UpdateScreen")

    BINDINGS = [
        Binding("enter", "reload", "Actualizar", show=False),
        Binding("escape", "later", "Más tarde", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static("🔄 Nueva actualización disponible", classes="dialog-title")
            yield Static(
                "Hay una nueva versión del asistente. Reinicia para usarla.",
                classes="dialog-body",
            )
            with Horizontal(classes="dialog-buttons"):
                yield Button("Actualizar ahora", id="btn-reload", variant="success")
                yield Button("Más tarde", id="btn-later", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-reload")

    def action_reload(self) -> None:
        self.dismiss(True)

    def action_later(self) -> None:
        self.dismiss(False)


class UploadScreen(ModalScreen[str | None]):
    """Ask for the path of an Excel file to upload.

    Dismisses with the entered path, or None if cancelled.
    """

    CSS = DIALOG_CSS.format(name="UploadScreen")

    BINDINGS = [
        Binding("escape", "cancel", "Cancelar", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static("📤 Subir Excel", classes="dialog-title")
            yield Input(placeholder="ruta/al/archivo.xlsx", id="upload-path")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Subir", id="btn-upload", variant="primary")
                yield Button("Cancelar", id="btn-cancel", variant="default")

    def on_mount(self) -> None:
        self.query_one("#upload-path", Input).focus()

    def _submit(self) -> None:
        value = self.query_one("#upload-path", Input).value.strip()
        self.dismiss(value or None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-upload":
            self._submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
