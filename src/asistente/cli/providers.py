"""Component factory functions for CLI.

Centralizes creation of the webhook client, speech engine and narration
pipeline from environment variables. Hides configuration details from
command implementations.
"""

import os

import typer
from rich.console import Console

from .. import __version__
from ..conversation.controller import ConversationController
from ..speech import NarrationPipeline, SpeechEngine, create_speech_engine
from ..version import VersionChecker
from ..webhook import WebhookClient, create_webhook_client

# Default console for output
_console = Console()


def get_webhook_client(console: Console | None = None) -> WebhookClient:
    """Create the webhook client from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        HTTP webhook client instance

    Raises:
        typer.Exit: If ASISTENTE_WEBHOOK_URL is not set

    Environment variables:
        ASISTENTE_WEBHOOK_URL: Question endpoint (required)
        ASISTENTE_UPLOAD_URL: Spreadsheet upload endpoint (optional)
        ASISTENTE_QUESTION_FIELD: JSON field holding the question (default: question)
        ASISTENTE_TIMEOUT: Request timeout in seconds (default: 30)
    """
    con = console or _console
    url = os.getenv("ASISTENTE_WEBHOOK_URL")
    if not url:
        con.print("[red]Error: ASISTENTE_WEBHOOK_URL not set in environment[/red]")
        raise typer.Exit(code=1)

    try:
        timeout = float(os.getenv("ASISTENTE_TIMEOUT", "30"))
    except ValueError:
        con.print("[red]Error: ASISTENTE_TIMEOUT must be a number of seconds[/red]")
        raise typer.Exit(code=1)

    transport = "https" if url.startswith("https") else "http"
    return create_webhook_client(
        transport,
        url=url,
        upload_url=os.getenv("ASISTENTE_UPLOAD_URL") or None,
        question_field=os.getenv("ASISTENTE_QUESTION_FIELD", "question"),
        timeout=timeout,
    )


def get_speech_engine(console: Console | None = None) -> SpeechEngine:
    """Create the speech engine from environment variables.

    An unknown engine name disables narration with a warning instead of
    failing, since the chat works without audio.

    Environment variables:
        ASISTENTE_TTS_ENGINE: espeak (default) or none
        ASISTENTE_TTS_BINARY: espeak-ng executable (default: espeak-ng)
        ASISTENTE_TTS_RATE: Words per minute (default: 165)

    Raises:
        typer.Exit: If ASISTENTE_TTS_RATE is not a whole number
    """
    con = console or _console
    engine = os.getenv("ASISTENTE_TTS_ENGINE", "espeak").lower()
    if engine in ("none", "off", "null"):
        return create_speech_engine("none")

    config = {"binary": os.getenv("ASISTENTE_TTS_BINARY", "espeak-ng")}
    rate = os.getenv("ASISTENTE_TTS_RATE")
    if rate:
        try:
            config["rate"] = int(rate)
        except ValueError:
            con.print("[red]Error: ASISTENTE_TTS_RATE must be a whole number of words per minute[/red]")
            raise typer.Exit(code=1)

    try:
        return create_speech_engine(engine, **config)
    except ValueError as e:
        con.print(f"[yellow]Warning: {e}, voice disabled[/yellow]")
        return create_speech_engine("none")


def get_narration(console: Console | None = None, voice_enabled: bool = True) -> NarrationPipeline:
    """Create a narration pipeline over the configured speech engine.

    Environment variables:
        ASISTENTE_VOICE_LOCALE: Preferred voice locale (default: es-CL)
    """
    return NarrationPipeline(
        get_speech_engine(console),
        voice_enabled=voice_enabled,
        locale=os.getenv("ASISTENTE_VOICE_LOCALE", "es-CL"),
    )


def get_controller(
    console: Console | None = None,
    voice_enabled: bool = True,
) -> tuple[ConversationController, WebhookClient]:
    """Create a controller and the client it talks to."""
    client = get_webhook_client(console)
    controller = ConversationController(client, get_narration(console, voice_enabled))
    return controller, client


def get_version_checker() -> VersionChecker | None:
    """Create the update checker, or None when no version URL is configured.

    Environment variables:
        ASISTENTE_VERSION_URL: URL of the published version.json (optional)
    """
    url = os.getenv("ASISTENTE_VERSION_URL")
    if not url:
        return None
    return VersionChecker(url, __version__)
