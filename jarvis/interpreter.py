from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from .apps import App, find_app
from .config import (
    ACTIVE_APP_SECONDS,
    ACTION_LABELS,
    DEFAULT_CONTACT,
    DEFAULT_SONG,
    INITIAL_BRIGHTNESS,
    INITIAL_VOLUME,
    LEVEL_MAX,
    LEVEL_MIN,
    LEVEL_STEP,
    VOICE_RESPONSES,
)
from .intents import Classification, Intent, classify
from .logui import debug, warn
from .scheduler import TaskScheduler

CLEAR_ACTIVE_APP = "clear_active_app"


@dataclass
class InterpreterState:
    active_app: App | None = None
    brightness: int = INITIAL_BRIGHTNESS
    volume: int = INITIAL_VOLUME

    def snapshot(self) -> dict:
        return {
            "active_app": self.active_app.name if self.active_app else None,
            "brightness": self.brightness,
            "volume": self.volume,
        }


@dataclass(frozen=True)
class Speak:
    text: str


@dataclass(frozen=True)
class ShowApp:
    """Show the app view for ``seconds``, then go back to the grid."""

    app: App
    seconds: float


@dataclass
class Outcome:
    intent: Intent
    response: str
    action: str
    params: dict = field(default_factory=dict)
    side_effects: list = field(default_factory=list)


def clamp_level(value: int) -> int:
    return max(LEVEL_MIN, min(LEVEL_MAX, int(value)))


def format_clock(now: datetime) -> str:
    return now.strftime("%I:%M:%S %p").lstrip("0")


class Interpreter:
    def __init__(
        self,
        state: InterpreterState | None = None,
        scheduler: TaskScheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
        active_app_seconds: float = ACTIVE_APP_SECONDS,
    ):
        self.state = state or InterpreterState()
        self.scheduler = scheduler or TaskScheduler(max_tasks=5, max_delay_seconds=60)
        self.clock = clock
        if not 0 < active_app_seconds <= self.scheduler.max_delay_seconds:
            raise ValueError(
                f"active_app_seconds must be in (0, {self.scheduler.max_delay_seconds}], got {active_app_seconds}"
            )
        self.active_app_seconds = active_app_seconds
        self._clear_task_id: int | None = None
        self._handlers = {
            Intent.OPEN_APP: self._open_app,
            Intent.CALL: self._call,
            Intent.SEND_MESSAGE: self._send_message,
            Intent.TAKE_PHOTO: self._take_photo,
            Intent.PLAY_MUSIC: self._play_music,
            Intent.BRIGHTNESS_UP: lambda p: self._adjust("brightness", LEVEL_STEP, "brightness up"),
            Intent.BRIGHTNESS_DOWN: lambda p: self._adjust("brightness", -LEVEL_STEP, "brightness down"),
            Intent.VOLUME_UP: lambda p: self._adjust("volume", LEVEL_STEP, "volume up"),
            Intent.VOLUME_DOWN: lambda p: self._adjust("volume", -LEVEL_STEP, "volume down"),
            Intent.TIME_QUERY: lambda p: self._reply("time", time=format_clock(self.clock())),
            Intent.BATTERY_QUERY: lambda p: self._reply("battery"),
            Intent.WIFI_QUERY: lambda p: self._reply("wifi"),
            Intent.GREETING: lambda p: self._reply("greeting"),
            Intent.UNKNOWN: lambda p: self._reply("unknown"),
        }

    def process(self, utterance: str) -> Outcome:
        return self.handle_classification(classify(utterance))

    def handle_classification(self, result: Classification) -> Outcome:
        return self.handle(result.intent, result.params)

    def handle(self, intent: Intent, params: dict | None = None) -> Outcome:
        params = dict(params or {})
        handler = self._handlers.get(Intent(intent), self._handlers[Intent.UNKNOWN])
        response, action, effects = handler(params)
        debug(f"Intent {Intent(intent).value} {params} -> {response!r}")
        return Outcome(
            intent=Intent(intent),
            response=response,
            action=action,
            params=params,
            side_effects=[Speak(response)] + effects,
        )

    def tick(self) -> list[App]:
        """Fire due timers; return the apps whose view just closed."""
        closed = []
        for task in self.scheduler.tick():
            if task.action != CLEAR_ACTIVE_APP or task.id != self._clear_task_id:
                continue
            self._clear_task_id = None
            if self.state.active_app is not None:
                closed.append(self.state.active_app)
                debug(f"Active app cleared: {self.state.active_app.name}")
            self.state.active_app = None
        return closed

    def has_pending_clear(self) -> bool:
        return self.scheduler.pending(self._clear_task_id)

    def _activate(self, app: App) -> list:
        self.scheduler.cancel(self._clear_task_id)
        self.state.active_app = app
        self._clear_task_id = self.scheduler.schedule(
            CLEAR_ACTIVE_APP, self.active_app_seconds, {"app": app.name}
        )
        if self._clear_task_id is None:
            warn(f"Could not schedule clear for {app.name}: scheduler full")
        return [ShowApp(app, self.active_app_seconds)]

    def _reply(self, key: str, **values) -> tuple[str, str, list]:
        return (
            VOICE_RESPONSES[key].format(**values),
            ACTION_LABELS[key].format(**values),
            [],
        )

    def _open_app(self, params: dict):
        app = find_app(params.get("app") or "")
        if app is None:
            return self._reply("open which")
        response, action, _ = self._reply("open app", app=app.name)
        return response, action, self._activate(app)

    def _call(self, params: dict):
        name = params.get("name") or DEFAULT_CONTACT
        response, action, _ = self._reply("call", name=name)
        return response, action, self._activate(find_app("phone"))

    def _send_message(self, params: dict):
        name = params.get("name") or DEFAULT_CONTACT
        response, action, _ = self._reply("send message", name=name)
        return response, action, self._activate(find_app("messages"))

    def _take_photo(self, params: dict):
        response, action, _ = self._reply("take photo")
        return response, action, self._activate(find_app("camera"))

    def _play_music(self, params: dict):
        song = params.get("song") or DEFAULT_SONG
        response, action, _ = self._reply("play music", song=song)
        return response, action, self._activate(find_app("music"))

    def _adjust(self, attr: str, delta: int, key: str):
        level = clamp_level(getattr(self.state, attr) + delta)
        setattr(self.state, attr, level)
        return self._reply(key, level=level)
