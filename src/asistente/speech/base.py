from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class Voice(BaseModel):
    """A voice offered by a speech engine."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Value the engine expects to select this voice")
    name: str = Field(description="Human readable voice name")
    locale: str = Field(description="BCP 47 style locale, e.g. 'es-CL' or 'es'")

    @property
    def language(self) -> str:
        return self.locale.split("-")[0].lower()


class SpeechEngine(ABC):
    """Abstract base class for text-to-speech engines.

    This module hides the design decision of which speech backend to use.
    Implementations must handle backend-specific details like:
    - Locating the synthesizer in the host
    - Voice enumeration
    - Starting and stopping playback

    speak() must return immediately; playback runs in the background and is
    stopped outright by cancel(). At most one utterance plays at a time.
    """

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether the host can actually produce speech."""
        pass

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        """Whether an utterance is currently playing."""
        pass

    @abstractmethod
    def voices(self) -> list[Voice]:
        """List the voices the engine offers (may be empty)."""
        pass

    @abstractmethod
    def speak(self, text: str, voice: Voice | None = None) -> None:
        """Start speaking text, using the engine default voice if voice is None."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Stop the current utterance, if any."""
        pass

    def wait(self, timeout: float | None = None) -> None:
        """Block until the current utterance finishes (used by the CLI)."""
        return None

    def select_voice(self, locale: str) -> Voice | None:
        """Pick the voice that best matches a locale.

        Prefers an exact locale match, then any voice of the same language.
        Returns None (engine default) when nothing matches.
        """
        wanted = locale.lower()
        language = wanted.split("-")[0]
        voices = self.voices()

        for voice in voices:
            if voice.locale.lower() == wanted:
                return voice
        for voice in voices:
            if voice.language == language:
                return voice
        return None
