from .config import EXAMPLE_COMMANDS, NOTICES
from .interpreter import Interpreter, Outcome, ShowApp, Speak
from .listener import CaptureError, CaptureUnavailable, Heard, Listener, TextListener
from .logui import (
    LOG_LEVEL,
    UI_MODE,
    debug,
    error,
    info,
    ui_action,
    ui_app,
    ui_command,
    ui_levels,
    ui_partial,
    ui_response,
    ui_state,
    warn,
)
from .transcript import Transcript
from .voice import Voice


class Jarvis:
    def __init__(
        self,
        interpreter: Interpreter | None = None,
        voice: Voice | None = None,
        transcript: Transcript | None = None,
        listener=None,
        text_only: bool = False,
        input_stream=None,
    ):
        self.interpreter = interpreter or Interpreter()
        self.voice = voice if voice is not None else Voice()
        self.transcript = transcript or Transcript()
        self.listener = listener
        self.text_only = text_only
        self.input_stream = input_stream
        self.current_action = ""

    @property
    def state(self):
        return self.interpreter.state

    def notice(self, text: str):
        self.transcript.add(text, is_user=False)
        info(text)

    def start_listening(self):
        if self.listener is not None:
            self.listener.open()
            return self.listener

        if not self.text_only:
            listener = Listener()
            try:
                listener.open()
                self.listener = listener
                self.notice(NOTICES["listening"])
                ui_state("LISTENING")
                return self.listener
            except CaptureUnavailable as e:
                warn(f"Speech capture unavailable: {e}")
                self.notice(NOTICES["capture_unavailable"])

        self.listener = TextListener(stream=self.input_stream)
        self.listener.open()
        ui_state("LISTENING")
        return self.listener

    def stop_listening(self):
        if self.listener is not None:
            self.listener.close()
        ui_state("IDLE")

    def handle_heard(self, heard: Heard) -> Outcome | None:
        if not heard.final:
            ui_partial(heard.text)
            return None
        text = " ".join(heard.text.strip().lower().split())
        if not text:
            return None
        return self._safe_process_command(text)

    def process_command(self, text: str) -> Outcome:
        ui_command(text)
        info(f'Heard: "{text}"')
        self.transcript.add(text, is_user=True)

        outcome = self.interpreter.process(text)

        self.current_action = outcome.action
        if outcome.action:
            ui_action(outcome.action)
        self.transcript.add(outcome.response, is_user=False)
        ui_response(outcome.response)
        info(f'Response: "{outcome.response}"')

        for effect in outcome.side_effects:
            if isinstance(effect, ShowApp):
                ui_app(effect.app.name)
                debug(f"Showing {effect.app.name} for {effect.seconds:g}s")
            elif isinstance(effect, Speak):
                ui_state("SPEAKING")
                self.voice.speak(effect.text)

        ui_levels(self.state.brightness, self.state.volume)
        ui_state("LISTENING")
        return outcome

    def _safe_process_command(self, text: str) -> Outcome | None:
        try:
            return self.process_command(text)
        except Exception as e:
            ui_state("ERROR")
            error(f"Command failed: {e}")
            self.transcript.add(NOTICES["exec_error"], is_user=False)
            self.voice.speak(NOTICES["exec_error"])
            ui_state("LISTENING")
            return None

    def _handle_due_timers(self) -> list:
        closed = self.interpreter.tick()
        for app in closed:
            ui_app(None)
            debug(f"{app.name} view closed")
        return closed

    def run(self):
        info("JARVIS start")
        info(f"Mode: {'UI bridge' if UI_MODE else 'Console'} | log={LOG_LEVEL}")
        info("Try saying: " + ", ".join(f'"{c}"' for c in EXAMPLE_COMMANDS))

        ui_state("STARTING")
        listener = self.start_listening()
        ui_levels(self.state.brightness, self.state.volume)

        try:
            while not listener.closed:
                self._handle_due_timers()
                try:
                    heard = listener.poll()
                except CaptureError as e:
                    warn(f"Speech capture error: {e}")
                    self.notice(NOTICES["capture_error"].format(error=e))
                    self.stop_listening()
                    self.listener = None
                    self.text_only = True
                    listener = self.start_listening()
                    continue
                for h in heard:
                    self.handle_heard(h)
        except KeyboardInterrupt:
            info("Shutdown: Ctrl+C")
        finally:
            self._handle_due_timers()
            self.stop_listening()
            info("JARVIS stopped")
