import json
import os
import queue
import sys
import threading
from dataclasses import dataclass

try:
    import pyaudio
    import vosk
    CAPTURE_OK = True
except Exception:
    CAPTURE_OK = False

from .config import CHUNK_SAMPLES, SAMPLE_RATE, VOSK_MODEL_DIR
from .logui import debug


class CaptureUnavailable(RuntimeError):
    pass


class CaptureError(RuntimeError):
    pass


@dataclass(frozen=True)
class Heard:
    text: str
    final: bool


def parse_result(payload: str, key: str = "text") -> str:
    try:
        r = json.loads(payload or "{}")
    except ValueError:
        return ""
    t = (r.get(key) or "").strip().lower()
    return " ".join(t.split())


class Listener:
    """Microphone capture with a vosk recognizer.

    ``poll()`` reads one audio chunk and returns what the recognizer made of
    it: an interim result while the user is still talking, a final one when
    the recognizer closes an utterance, or nothing.
    """

    def __init__(
        self,
        model_path: str = VOSK_MODEL_DIR,
        sample_rate: int = SAMPLE_RATE,
        chunk_samples: int = CHUNK_SAMPLES,
    ):
        self.model_path = model_path
        self.sample_rate = sample_rate
        self.chunk_samples = chunk_samples
        self.closed = False
        self.audio = None
        self.stream = None
        self.recognizer = None
        self._last_partial = ""

    def open(self):
        if not CAPTURE_OK:
            raise CaptureUnavailable("vosk or pyaudio is not installed")
        if not os.path.isdir(self.model_path):
            raise CaptureUnavailable(f"Vosk model not found: {self.model_path}")
        try:
            model = vosk.Model(self.model_path)
            self.recognizer = vosk.KaldiRecognizer(model, self.sample_rate)
            self.audio = pyaudio.PyAudio()
            self.stream = self.audio.open(
                format=pyaudio.paInt16,
                channels=1,
                rate=self.sample_rate,
                input=True,
                frames_per_buffer=self.chunk_samples,
            )
            self.stream.start_stream()
        except Exception as e:
            self.close()
            raise CaptureUnavailable(str(e)) from e
        self.closed = False
        debug("Audio stream started")

    def poll(self) -> list[Heard]:
        if self.stream is None or self.recognizer is None:
            raise CaptureError("audio stream is not open")
        try:
            data = self.stream.read(self.chunk_samples, exception_on_overflow=False)
        except Exception as e:
            raise CaptureError(str(e)) from e

        if self.recognizer.AcceptWaveform(data):
            self._last_partial = ""
            text = parse_result(self.recognizer.Result(), "text")
            return [Heard(text, True)] if text else []

        partial = parse_result(self.recognizer.PartialResult(), "partial")
        if partial and partial != self._last_partial:
            self._last_partial = partial
            return [Heard(partial, False)]
        return []

    def close(self):
        if self.stream is not None:
            try:
                self.stream.stop_stream()
                self.stream.close()
            except Exception as e:
                debug(f"Audio stream close failed: {e}")
            self.stream = None
        if self.audio is not None:
            self.audio.terminate()
            self.audio = None
        self.recognizer = None
        self.closed = True
        debug("Audio stream stopped")


class TextListener:
    """Typed commands, one per line, for when the microphone is unavailable.

    Lines are read on a daemon thread so ``poll`` returns within
    ``poll_timeout`` even while nothing is typed, and the caller keeps
    firing its timers.
    """

    def __init__(self, stream=None, prompt: str = "> ", poll_timeout: float = 0.25):
        self.stream = stream or sys.stdin
        self.prompt = prompt
        self.poll_timeout = poll_timeout
        self.closed = False
        self._lines = queue.Queue()
        self._reader = None

    def open(self):
        self.closed = False
        if self._reader is None:
            self._reader = threading.Thread(target=self._read_lines, daemon=True)
            self._reader.start()

    def _read_lines(self):
        while True:
            self._show_prompt()
            try:
                line = self.stream.readline()
            except (OSError, ValueError) as e:
                debug(f"Text input stopped: {e}")
                line = ""
            if line == "":
                self._lines.put(None)
                return
            self._lines.put(line)

    def _show_prompt(self):
        if self.prompt and self.stream is sys.stdin:
            print(self.prompt, end="", flush=True)

    def poll(self) -> list[Heard]:
        if self.closed:
            return []
        if self._reader is None:
            self.open()
        try:
            line = self._lines.get(timeout=self.poll_timeout)
        except queue.Empty:
            return []
        if line is None:
            self.closed = True
            return []
        text = " ".join(line.strip().split())
        return [Heard(text, True)] if text else []

    def close(self):
        self.closed = True
