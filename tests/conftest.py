"""Pytest configuration and shared fixtures."""
import asyncio
from pathlib import Path
from typing import Any

import pytest

from asistente.conversation import ConversationController, ConversationSession
from asistente.speech import NarrationPipeline, SpeechEngine, Voice
from asistente.webhook import WebhookClient, WebhookError


class FakeSpeechEngine(SpeechEngine):
    """Records every call instead of producing audio.

    An utterance counts as playing until cancel() or finish() is called.
    """

    def __init__(self, available: bool = True, voices: list[Voice] | None = None) -> None:
        self._available = available
        self._voices = voices or []
        self.spoken: list[tuple[str, Voice | None]] = []
        self.cancel_count = 0
        self.events: list[str] = []
        self._speaking = False

    @property
    def available(self) -> bool:
        return self._available

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def voices(self) -> list[Voice]:
        return self._voices

    def speak(self, text: str, voice: Voice | None = None) -> None:
        self.spoken.append((text, voice))
        self.events.append(f"speak {text}")
        self._speaking = True

    def cancel(self) -> None:
        self.cancel_count += 1
        self.events.append("cancel")
        self._speaking = False

    def finish(self) -> None:
        """Simulate the utterance ending on its own."""
        self._speaking = False

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]


class FakeWebhookClient(WebhookClient):
    """Returns queued responses; an Exception in the queue is raised instead.

    With hold=True, ask() blocks until release() is called.
    """

    def __init__(self, *responses: Any, hold: bool = False) -> None:
        self.responses = list(responses)
        self.questions: list[str] = []
        self.uploads: list[Path] = []
        self.closed = False
        self._gate = asyncio.Event()
        if not hold:
            self._gate.set()

    def release(self) -> None:
        self._gate.set()

    async def ask(self, question: str) -> Any:
        self.questions.append(question)
        await self._gate.wait()
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, Exception):
            raise response
        return response

    async def upload(self, path: Path) -> Any:
        self.uploads.append(Path(path))
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def speech_engine():
    """Return an available fake speech engine."""
    return FakeSpeechEngine()


@pytest.fixture
def narration(speech_engine):
    """Return a narration pipeline over the fake engine."""
    return NarrationPipeline(speech_engine)


@pytest.fixture
def make_controller(narration):
    """Return a factory building a controller around a fake webhook."""
    def _make(*responses: Any, hold: bool = False):
        client = FakeWebhookClient(*responses, hold=hold)
        controller = ConversationController(client, narration, ConversationSession())
        return controller, client
    return _make


@pytest.fixture
def connection_error():
    """Return the error the fake webhook raises for transport failures."""
    return WebhookError("connection refused")


@pytest.fixture
def sales_rows():
    """Return report rows as the webhook sends them."""
    return [
        {"id_cliente": 1, "cliente": "Ferretería Sur", "total": 1250000, "fecha": "2025-01-03"},
        {"id_cliente": 2, "cliente": "Comercial Andes", "total": 830500, "fecha": "2025-01-04"},
        {"id_cliente": 3, "cliente": "Distribuidora Norte", "total": "420.000", "fecha": "2025-01-05"},
    ]
