"""Main CLI application using Typer."""
import asyncio
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from ..conversation.callbacks import ConversationCallback
from ..conversation.uploads import upload_spreadsheet
from ..reports.exporter import export_report
from ..responses.messages import UPLOAD_ERROR_MESSAGE, UPLOAD_SELECT_FILE_MESSAGE
from ..responses.models import Message, ReportPayload
from ..speech.narration import prepare_for_speech
from ..version import RELOAD_EXIT_CODE
from .providers import (
    get_controller,
    get_narration,
    get_speech_engine,
    get_version_checker,
    get_webhook_client,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="asistente",
    help="Terminal chat client for the sales assistant webhook",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _print_bot_message(text: str) -> None:
    from ..ui.formatting import render_message_text

    console.print(Panel(render_message_text(text), title="Asistente", title_align="left", border_style="magenta"))


def _print_report(report: ReportPayload) -> None:
    from ..reports.charts import build_chart
    from ..ui.formatting import render_chart, report_table

    if report.is_empty:
        return
    console.print(report_table(report))
    chart = build_chart(report)
    if chart is not None:
        console.print(render_chart(chart))


class ConsoleCallback(ConversationCallback):
    """Prints bot messages and reports as they arrive."""

    def __init__(self, verbose: bool = False) -> None:
        self._verbose = verbose

    def message_added(self, message: Message) -> None:
        if message.sender == "bot":
            _print_bot_message(message.text)

    def busy_changed(self, busy: bool) -> None:
        if busy and self._verbose:
            console.print("[dim]Consultando al asistente...[/dim]")

    def report_changed(self, report: ReportPayload | None) -> None:
        if report is not None:
            _print_report(report)


def _debug_printer(level: str, component: str, message: str) -> None:
    color = {"warning": "yellow", "error": "red"}.get(level, "dim")
    console.print(f"[{color}]\\[{component}] {message}[/{color}]")


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the assistant"),
    speak: bool = typer.Option(
        False,
        "--speak",
        "-s",
        help="Read the answer aloud"
    ),
    export: Path | None = typer.Option(
        None,
        "--export",
        "-e",
        help="Save the report to this .xlsx or .pdf file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print request traces"
    ),
):
    """Ask one question and print the answer."""
    async def _ask():
        controller, client = get_controller(console, voice_enabled=speak)
        controller.set_callback(ConsoleCallback(verbose=verbose))
        if verbose:
            controller.set_debug_callback(_debug_printer)

        try:
            await controller.submit(question)
        finally:
            await client.close()

        if speak:
            await asyncio.to_thread(controller.narration.wait)

        if export is not None:
            report = controller.report
            if report is None or report.is_empty:
                console.print("[yellow]La respuesta no trae un informe para exportar[/yellow]")
                raise typer.Exit(code=1)
            try:
                path = export_report(report, export)
            except (ValueError, OSError) as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(code=1)
            console.print(f"[green]Informe guardado en {path}[/green]")

    asyncio.run(_ask())


@app.command()
def chat(
    speak: bool = typer.Option(
        True,
        "--speak/--mute",
        help="Read answers aloud"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print request traces"
    ),
):
    """Line-based chat session. Type /limpiar to reset, /voz to toggle voice, /salir to quit."""
    async def _chat():
        controller, client = get_controller(console, voice_enabled=speak)
        controller.set_callback(ConsoleCallback(verbose=verbose))
        if verbose:
            controller.set_debug_callback(_debug_printer)

        for message in controller.messages:
            _print_bot_message(message.text)
        controller.narration.speak(controller.messages[0].text)

        try:
            while True:
                try:
                    line = await asyncio.to_thread(console.input, "[bold green]Tú>[/] ")
                except EOFError:
                    break

                command = line.strip().lower()
                if command in ("/salir", "/exit", "/quit"):
                    break
                if command in ("/limpiar", "/clear"):
                    controller.clear()
                    continue
                if command == "/voz":
                    enabled = not controller.narration.voice_enabled
                    controller.set_voice_enabled(enabled)
                    console.print(f"[dim]Voz {'activada' if enabled else 'silenciada'}[/dim]")
                    continue

                await controller.submit(line)
        finally:
            controller.narration.reset()
            await client.close()
            console.print("\n[dim]¡Hasta luego![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def upload(
    path: Path = typer.Argument(..., help="Excel file (.xlsx or .xls) to upload"),
):
    """Upload a spreadsheet to the assistant."""
    async def _upload():
        client = get_webhook_client(console)
        try:
            notice = await upload_spreadsheet(client, path)
        finally:
            await client.close()

        if notice in (UPLOAD_SELECT_FILE_MESSAGE, UPLOAD_ERROR_MESSAGE):
            console.print(f"[red]{notice}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[green]{notice}[/green]")

    asyncio.run(_upload())


@app.command()
def say(
    text: str = typer.Argument(..., help="Text to read aloud"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Print the spoken form instead of speaking it"
    ),
):
    """Speak text the way bot messages are narrated."""
    spoken = prepare_for_speech(text)
    if dry_run:
        console.print(spoken)
        return

    narration = get_narration(console)
    if not narration.available:
        console.print("[red]Error: no speech engine available (install espeak-ng)[/red]")
        raise typer.Exit(code=1)
    console.print(f"[dim]{spoken}[/dim]")
    narration.speak(text)
    try:
        narration.wait()
    except KeyboardInterrupt:
        narration.reset()


@app.command()
def health():
    """Check configuration, speech engine and published version."""
    async def _health():
        all_healthy = True

        webhook_url = os.getenv("ASISTENTE_WEBHOOK_URL")
        if webhook_url:
            console.print(f"[green]+[/green] Webhook URL: {webhook_url}")
        else:
            console.print("[red]x[/red] Webhook URL: NOT SET (ASISTENTE_WEBHOOK_URL)")
            all_healthy = False

        if os.getenv("ASISTENTE_UPLOAD_URL"):
            console.print("[green]+[/green] Upload URL: SET")
        else:
            console.print("[yellow]![/yellow] Upload URL: NOT SET, uploads disabled")

        engine = get_speech_engine(console)
        if engine.available:
            voices = engine.voices()
            console.print(f"[green]+[/green] Speech engine: OK ({len(voices)} voices)")
        else:
            console.print("[yellow]![/yellow] Speech engine: NOT AVAILABLE, narration disabled")

        checker = get_version_checker()
        if checker is None:
            console.print("[yellow]![/yellow] Version URL: NOT SET, update check disabled")
        elif await checker.check():
            console.print("[yellow]![/yellow] Version: a newer build is published")
        else:
            console.print("[green]+[/green] Version: up to date")

        if not all_healthy:
            raise typer.Exit(code=1)

    asyncio.run(_health())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    mute: bool = typer.Option(
        False,
        "--mute",
        "-m",
        help="Start with narration silenced"
    ),
    export_dir: Path | None = typer.Option(
        None,
        "--export-dir",
        help="Directory for exported reports (default: current directory)"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui() -> int:
        from ..ui import run_textual_tui

        controller, client = get_controller(console, voice_enabled=not mute)
        return await run_textual_tui(
            controller=controller,
            client=client,
            version_checker=get_version_checker(),
            log_level=log_level,
            export_dir=export_dir,
        )

    try:
        code = asyncio.run(_tui())
    except KeyboardInterrupt:
        code = 0

    if code == RELOAD_EXIT_CODE:
        console.print("[dim]Reiniciando...[/dim]")
        os.execv(sys.executable, [sys.executable, "-m", "asistente.cli.app", *sys.argv[1:]])
    console.print("\n[dim]¡Hasta luego![/dim]")
    if code:
        raise typer.Exit(code=code)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
