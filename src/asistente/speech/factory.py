from typing import Any

from .base import SpeechEngine
from .engines import EspeakSpeechEngine, NullSpeechEngine


def create_speech_engine(engine: str, **config: Any) -> SpeechEngine:
    """Create a speech engine instance.

    This factory function hides the instantiation logic for different engines.

    Args:
        engine: Engine type ('espeak', 'none')
        **config: Engine-specific configuration
            For espeak:
                - binary: str (default: 'espeak-ng')
                - rate: int (default: 165)
                - language: str (default: 'es')

    Returns:
        Initialized speech engine. An espeak engine whose binary is missing
        is still returned; it reports available == False.

    Raises:
        ValueError: If engine type is not supported

    Examples:
        >>> engine = create_speech_engine("espeak", binary="espeak", rate=150)
        >>> engine = create_speech_engine("none")
    """
    engine_lower = engine.lower()

    if engine_lower in ("espeak", "espeak-ng"):
        return EspeakSpeechEngine(**config)

    if engine_lower in ("none", "off", "null"):
        return NullSpeechEngine()

    raise ValueError(
        f"Unsupported speech engine: {engine}. "
        f"Supported engines: 'espeak', 'none'"
    )
