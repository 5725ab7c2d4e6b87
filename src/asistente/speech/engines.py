import shutil
import subprocess
import threading

from .base import SpeechEngine, Voice


class EspeakSpeechEngine(SpeechEngine):
    """Speech engine backed by the espeak-ng command line synthesizer.

    Hidden design decisions:
    - Synthesizer runs as a subprocess that plays audio directly
    - Text is fed on stdin so it is never parsed as options
    - Cancellation kills the tracked subprocess (scoped, no global pkill)
    - A missing binary turns every call into a no-op
    """

    def __init__(
        self,
        binary: str = "espeak-ng",
        rate: int = 165,
        language: str = "es",
    ) -> None:
        """Initialize the espeak engine.

        Args:
            binary: Executable name or path ("espeak-ng" or "espeak")
            rate: Speaking rate in words per minute
            language: Language used to filter the voice list
        """
        self._binary = shutil.which(binary)
        self._rate = rate
        self._language = language
        self._proc: subprocess.Popen | None = None
        self._proc_lock = threading.Lock()
        self._voices: list[Voice] | None = None

    @property
    def available(self) -> bool:
        return self._binary is not None

    @property
    def is_speaking(self) -> bool:
        with self._proc_lock:
            return self._proc is not None and self._proc.poll() is None

    def voices(self) -> list[Voice]:
        """List voices reported by `espeak-ng --voices=<language>`.

        The result is cached; a failing listing yields an empty list.
        """
        if self._voices is not None:
            return self._voices
        if not self.available:
            self._voices = []
            return self._voices

        try:
            result = subprocess.run(
                [self._binary, f"--voices={self._language}"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            self._voices = parse_voice_listing(result.stdout)
        except (OSError, subprocess.SubprocessError):
            self._voices = []
        return self._voices

    def speak(self, text: str, voice: Voice | None = None) -> None:
        if not self.available or not text.strip():
            return

        self.cancel()

        cmd = [self._binary, "-s", str(self._rate)]
        if voice is not None:
            cmd += ["-v", voice.identifier]

        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        try:
            proc.stdin.write(text.encode("utf-8"))
            proc.stdin.close()
        except (BrokenPipeError, OSError):
            proc.kill()
            proc.wait()
            return

        with self._proc_lock:
            self._proc = proc

    def cancel(self) -> None:
        with self._proc_lock:
            proc = self._proc
            self._proc = None
        if proc is not None and proc.poll() is None:
            proc.kill()
            proc.wait(timeout=2)

    def wait(self, timeout: float | None = None) -> None:
        with self._proc_lock:
            proc = self._proc
        if proc is None:
            return
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            self.cancel()


class NullSpeechEngine(SpeechEngine):
    """Engine for hosts without speech: never speaks, never fails."""

    @property
    def available(self) -> bool:
        return False

    @property
    def is_speaking(self) -> bool:
        return False

    def voices(self) -> list[Voice]:
        return []

    def speak(self, text: str, voice: Voice | None = None) -> None:
        pass

    def cancel(self) -> None:
        pass


def parse_voice_listing(output: str) -> list[Voice]:
    """Parse the table printed by `espeak-ng --voices`.

    Example line:
        " 5  es-419          --/M      Spanish_(Latin_America) roa/es-419"
    """
    voices = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 4 or parts[0] == "Pty":
            continue
        locale = parts[1]
        name = parts[3].replace("_", " ")
        voices.append(Voice(identifier=locale, name=name, locale=locale))
    return voices
