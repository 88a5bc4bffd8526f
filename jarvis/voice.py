import pyttsx3

from .config import SPEECH_BASE_WPM, SPEECH_PITCH, SPEECH_RATE
from .logui import debug, warn


class Voice:
    """Speaks responses through pyttsx3.

    When no synthesis engine can be started, every call is a silent no-op.
    """

    def __init__(self, rate: float = SPEECH_RATE, pitch: float = SPEECH_PITCH, engine=None):
        self.rate = rate
        # pyttsx3 has no pitch property; only default pitch is produced.
        self.pitch = pitch
        self.muted = False
        self.engine = engine if engine is not None else self._init_engine()
        if self.engine is not None:
            self.engine.setProperty("rate", int(SPEECH_BASE_WPM * self.rate))
            self.engine.setProperty("volume", 0.9)

    @staticmethod
    def _init_engine():
        try:
            return pyttsx3.init()
        except Exception as e:
            warn(f"Speech output unavailable: {e}")
            return None

    @property
    def available(self) -> bool:
        return self.engine is not None

    def speak(self, text: str) -> bool:
        if self.muted or self.engine is None or not (text or "").strip():
            return False
        try:
            self.engine.say(text)
            self.engine.runAndWait()
            return True
        except Exception as e:
            debug(f"TTS error: {e}")
            return False
