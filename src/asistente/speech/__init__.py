from .base import SpeechEngine, Voice
from .engines import EspeakSpeechEngine, NullSpeechEngine
from .factory import create_speech_engine
from .narration import NarrationPipeline, prepare_for_speech
from .numbers import number_to_words

__all__ = [
    "EspeakSpeechEngine",
    "NarrationPipeline",
    "NullSpeechEngine",
    "SpeechEngine",
    "Voice",
    "create_speech_engine",
    "number_to_words",
    "prepare_for_speech",
]
