import unittest
import os
import sys
from datetime import datetime
from unittest import mock

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from jarvis.apps import find_app
from jarvis.intents import Intent
from jarvis.interpreter import Interpreter, InterpreterState, ShowApp, Speak, format_clock
from jarvis.scheduler import TaskScheduler


class FakeClock:
    def __init__(self, t: float = 1000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float):
        self.t += seconds


def make_interpreter(clock: FakeClock | None = None, **kwargs) -> Interpreter:
    clock = clock or FakeClock()
    return Interpreter(scheduler=TaskScheduler(max_tasks=5, max_delay_seconds=60, clock=clock), **kwargs)


UNKNOWN_TEXT = (
    "I can help you open apps, make calls, send messages, adjust settings, "
    "and more. What would you like me to do?"
)


class TestInterpreter(unittest.TestCase):
    def test_initial_state(self):
        state = InterpreterState()
        self.assertIsNone(state.active_app)
        self.assertEqual(state.brightness, 80)
        self.assertEqual(state.volume, 50)

    def test_open_camera(self):
        interp = make_interpreter()
        out = interp.process("open camera")
        self.assertEqual(out.intent, Intent.OPEN_APP)
        self.assertEqual(out.response, "Opening Camera")
        self.assertEqual(out.action, "Launched Camera app")
        self.assertEqual(interp.state.active_app, find_app("camera"))
        self.assertEqual(out.side_effects, [Speak("Opening Camera"), ShowApp(find_app("camera"), 3.0)])
        self.assertTrue(interp.has_pending_clear())

    def test_open_without_app_asks(self):
        interp = make_interpreter()
        out = interp.process("open something")
        self.assertEqual(out.response, "Which app would you like me to open?")
        self.assertEqual(out.action, "")
        self.assertIsNone(interp.state.active_app)
        self.assertEqual(out.side_effects, [Speak(out.response)])
        self.assertFalse(interp.has_pending_clear())

    def test_call(self):
        interp = make_interpreter()
        out = interp.process("call john")
        self.assertEqual(out.response, "Calling john...")
        self.assertEqual(out.action, "Initiating call to john")
        self.assertEqual(interp.state.active_app.name, "Phone")

    def test_call_fallback_name(self):
        out = make_interpreter().process("call")
        self.assertEqual(out.response, "Calling contact...")

    def test_call_and_text_is_a_call(self):
        interp = make_interpreter()
        out = interp.process("call and text Sarah")
        self.assertEqual(out.intent, Intent.CALL)
        self.assertEqual(out.response, "Calling and...")
        self.assertEqual(interp.state.active_app.name, "Phone")

    def test_send_message(self):
        interp = make_interpreter()
        out = interp.process("text to sarah")
        self.assertEqual(out.response, "Opening messages to sarah")
        self.assertEqual(out.action, "Composing message to sarah")
        out = interp.process("send message to sarah")
        self.assertEqual(out.response, "Opening messages to to")
        self.assertEqual(interp.state.active_app.name, "Messages")

    def test_take_photo(self):
        interp = make_interpreter()
        out = interp.process("take photo")
        self.assertEqual(out.response, "Opening camera")
        self.assertEqual(out.action, "Camera ready")
        self.assertEqual(interp.state.active_app.name, "Camera")

    def test_play_title(self):
        interp = make_interpreter()
        out = interp.process("play Bohemian Rhapsody")
        self.assertEqual(out.intent, Intent.PLAY_MUSIC)
        self.assertEqual(out.params, {"song": "Bohemian Rhapsody"})
        self.assertEqual(out.response, "Playing Bohemian Rhapsody")
        self.assertEqual(out.action, "Music player active")
        self.assertEqual(interp.state.active_app.name, "Music")

    def test_brightness_clamped_up(self):
        interp = make_interpreter()
        seen = []
        for _ in range(5):
            interp.process("increase brightness")
            seen.append(interp.state.brightness)
        self.assertEqual(seen, [100, 100, 100, 100, 100])
        self.assertEqual(interp.process("brightness up").response, "Brightness increased to 100%")

    def test_brightness_clamped_down(self):
        interp = make_interpreter()
        seen = []
        for _ in range(6):
            out = interp.process("brightness down")
            seen.append(interp.state.brightness)
        self.assertEqual(seen, [60, 40, 20, 0, 0, 0])
        self.assertEqual(out.response, "Brightness decreased to 0%")
        self.assertEqual(out.action, "Brightness adjusted")

    def test_volume_steps(self):
        interp = make_interpreter()
        out = interp.process("volume up")
        self.assertEqual(out.response, "Volume increased to 70%")
        self.assertEqual(out.action, "Volume adjusted")
        for text in ["volume up", "volume up", "decrease volume", "volume down"] + ["volume down"] * 5:
            interp.process(text)
            self.assertGreaterEqual(interp.state.volume, 0)
            self.assertLessEqual(interp.state.volume, 100)
        self.assertEqual(interp.state.volume, 0)
        self.assertEqual(interp.process("increase volume").response, "Volume increased to 20%")

    def test_levels_do_not_touch_active_app(self):
        interp = make_interpreter()
        interp.process("open maps")
        interp.process("volume up")
        self.assertEqual(interp.state.active_app.name, "Maps")

    def test_time_query_uses_injected_clock(self):
        interp = make_interpreter(clock=FakeClock())
        interp.clock = lambda: datetime(2026, 10, 19, 15, 4, 5)
        out = interp.process("what time is it")
        self.assertEqual(out.response, "It's 3:04:05 PM")
        self.assertEqual(out.action, "Time query")

    def test_format_clock(self):
        self.assertEqual(format_clock(datetime(2026, 1, 1, 0, 0, 9)), "12:00:09 AM")
        self.assertEqual(format_clock(datetime(2026, 1, 1, 11, 30, 0)), "11:30:00 AM")

    def test_canned_replies(self):
        interp = make_interpreter()
        self.assertEqual(interp.process("battery").response, "Battery is at 85% and charging")
        self.assertEqual(interp.process("wifi").response, "WiFi is connected")
        self.assertEqual(interp.process("hello").response, "Hello! How can I assist you today?")
        self.assertEqual(interp.process("battery").action, "Battery status check")

    def test_unknown_is_stable(self):
        interp = make_interpreter()
        before = interp.state.snapshot()
        responses = {interp.process(t).response for t in ("blah", "do a barrel roll", "blah", "")}
        self.assertEqual(responses, {UNKNOWN_TEXT})
        self.assertEqual(interp.state.snapshot(), before)
        self.assertEqual(interp.process("xyz").action, "Awaiting command")

    def test_handle_directly(self):
        interp = make_interpreter()
        out = interp.handle(Intent.SEND_MESSAGE)
        self.assertEqual(out.response, "Opening messages to contact")
        out = interp.handle(Intent.PLAY_MUSIC, {})
        self.assertEqual(out.response, "Playing music")
        out = interp.handle(Intent.OPEN_APP, {"app": "SETTINGS"})
        self.assertEqual(out.response, "Opening Settings")


class TestActiveAppTimer(unittest.TestCase):
    def test_clears_after_three_seconds(self):
        clock = FakeClock()
        interp = make_interpreter(clock)
        interp.process("open photos")
        clock.advance(2.5)
        self.assertEqual(interp.tick(), [])
        self.assertEqual(interp.state.active_app.name, "Photos")
        clock.advance(0.5)
        self.assertEqual([a.name for a in interp.tick()], ["Photos"])
        self.assertIsNone(interp.state.active_app)
        self.assertFalse(interp.has_pending_clear())

    def test_new_activation_supersedes_pending_clear(self):
        clock = FakeClock()
        interp = make_interpreter(clock)
        interp.process("open camera")
        clock.advance(1.0)
        interp.process("play music")
        self.assertEqual(interp.scheduler.count(), 1)

        fired = []
        clock.advance(2.0)
        fired += interp.tick()
        self.assertEqual(fired, [])
        self.assertEqual(interp.state.active_app.name, "Music")

        clock.advance(1.0)
        fired += interp.tick()
        clock.advance(10.0)
        fired += interp.tick()
        self.assertEqual([a.name for a in fired], ["Music"])
        self.assertIsNone(interp.state.active_app)

    def test_non_app_intent_keeps_timer(self):
        clock = FakeClock()
        interp = make_interpreter(clock)
        interp.process("call mom")
        clock.advance(1.5)
        interp.process("brightness up")
        clock.advance(1.5)
        self.assertEqual([a.name for a in interp.tick()], ["Phone"])

    def test_unresolved_open_keeps_current_app(self):
        clock = FakeClock()
        interp = make_interpreter(clock)
        interp.process("open music")
        clock.advance(2.0)
        interp.process("open")
        self.assertEqual(interp.state.active_app.name, "Music")
        clock.advance(1.0)
        self.assertEqual([a.name for a in interp.tick()], ["Music"])

    def test_timeout_must_fit_scheduler(self):
        with self.assertRaises(ValueError):
            make_interpreter(active_app_seconds=120)
        with self.assertRaises(ValueError):
            make_interpreter(active_app_seconds=0)

    def test_full_scheduler_warns_on_activation(self):
        clock = FakeClock()
        scheduler = TaskScheduler(max_tasks=1, max_delay_seconds=60, clock=clock)
        scheduler.schedule("reminder", 30)
        interp = Interpreter(scheduler=scheduler)
        with mock.patch("jarvis.interpreter.warn") as warned:
            out = interp.process("open camera")
        self.assertEqual(out.response, "Opening Camera")
        self.assertEqual(interp.state.active_app.name, "Camera")
        self.assertFalse(interp.has_pending_clear())
        warned.assert_called_once()
        self.assertIn("Camera", warned.call_args[0][0])


if __name__ == "__main__":
    unittest.main()
