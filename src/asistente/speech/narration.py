"""Narration of bot messages.

Hides how a display string becomes speech:
- Markup is stripped and peso amounts are read out in words
- One utterance at a time; a new one always preempts the previous
- Text that arrives while voice is off waits in a single pending slot
"""

import re
from typing import Any

from ..responses.markup import strip_markup
from .base import SpeechEngine, Voice
from .numbers import number_to_words

SPOKEN_CURRENCY_PATTERN = re.compile(r"\$\s?(\d{1,3}(?:\.\d{3})+|\d+)(?!\.?\d)(?:,\d+)?")


def prepare_for_speech(text: str) -> str:
    """Clean display text for the speech engine.

    "<strong>$12.345</strong> en ventas" -> "doce mil trescientos cuarenta y cinco pesos en ventas"
    """
    text = strip_markup(text)

    def _currency(match: re.Match) -> str:
        value = int(match.group(1).replace(".", ""))
        return f"{number_to_words(value)} pesos"

    text = SPOKEN_CURRENCY_PATTERN.sub(_currency, text)
    return " ".join(text.split())


class NarrationPipeline:
    """Speaks bot messages through a SpeechEngine.

    States are Idle and Speaking (read from the engine); the pending slot is
    independent of both.
    """

    def __init__(
        self,
        engine: SpeechEngine,
        voice_enabled: bool = True,
        locale: str = "es-CL",
    ) -> None:
        """Initialize the narration pipeline.

        Args:
            engine: Speech engine that produces audio
            voice_enabled: Whether narration starts enabled
            locale: Preferred voice locale
        """
        self._engine = engine
        self._voice_enabled = voice_enabled
        self._locale = locale
        self._pending_text: str | None = None
        self._active_text: str | None = None
        self._voice: Voice | None = None
        self._voice_resolved = False
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Voice", message)

    @property
    def voice_enabled(self) -> bool:
        return self._voice_enabled

    @property
    def pending_text(self) -> str | None:
        return self._pending_text

    @property
    def is_speaking(self) -> bool:
        return self._active_text is not None and self._engine.is_speaking

    @property
    def available(self) -> bool:
        return self._engine.available

    def _resolve_voice(self) -> Voice | None:
        if not self._voice_resolved:
            self._voice = self._engine.select_voice(self._locale)
            self._voice_resolved = True
            if self._voice is None:
                self._debug("info", f"No {self._locale} voice found, using engine default")
            else:
                self._debug("info", f"Using voice {self._voice.name} ({self._voice.locale})")
        return self._voice

    def _cancel(self) -> None:
        if self._engine.available:
            self._engine.cancel()
        self._active_text = None

    def speak(self, text: str) -> None:
        """Speak text, or park it in the pending slot while voice is off."""
        if not self._voice_enabled:
            self._pending_text = text
            self._debug("debug", "Voice disabled, message queued")
            return

        self._cancel()
        if not self._engine.available:
            return

        spoken = prepare_for_speech(text)
        if not spoken:
            return

        try:
            self._engine.speak(spoken, self._resolve_voice())
        except OSError as e:
            self._debug("warning", f"Speech engine failed: {e}")
            return

        self._active_text = text
        self._debug("debug", f"Speaking: '{spoken[:50]}'")

    def set_voice_enabled(self, enabled: bool) -> None:
        """Turn narration on or off.

        Turning it off mid-utterance keeps the interrupted text as pending;
        turning it back on replays the pending text once.
        """
        if not enabled:
            if self.is_speaking:
                self._pending_text = self._active_text
                self._debug("debug", "Voice disabled mid-utterance, message kept")
            self._cancel()
            self._voice_enabled = False
            return

        self._voice_enabled = True
        pending = self._pending_text
        self._pending_text = None
        if pending:
            self.speak(pending)

    def wait(self, timeout: float | None = None) -> None:
        """Block until the current utterance ends (for one-shot CLI use)."""
        if self._active_text is not None and self._engine.available:
            self._engine.wait(timeout)
        self._active_text = None

    def reset(self) -> None:
        """Stop speaking and forget any pending text."""
        self._cancel()
        self._pending_text = None
