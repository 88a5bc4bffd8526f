import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .apps import extract_app_name, find_app
from .config import DEFAULT_CONTACT, DEFAULT_SONG


class Intent(str, Enum):
    OPEN_APP = "open_app"
    CALL = "call"
    SEND_MESSAGE = "send_message"
    TAKE_PHOTO = "take_photo"
    PLAY_MUSIC = "play_music"
    BRIGHTNESS_UP = "brightness_up"
    BRIGHTNESS_DOWN = "brightness_down"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    TIME_QUERY = "time_query"
    BATTERY_QUERY = "battery_query"
    WIFI_QUERY = "wifi_query"
    GREETING = "greeting"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Classification:
    intent: Intent
    params: dict = field(default_factory=dict)

    @property
    def needs_clarification(self) -> bool:
        return self.intent == Intent.OPEN_APP and not self.params.get("app")


_CALL_RE = re.compile(r"call\s+(\w+)", re.IGNORECASE)
_MESSAGE_RE = re.compile(r"(?:to|message)\s+(\w+)", re.IGNORECASE)
_PLAY_RE = re.compile(r"play\s+(.+)", re.IGNORECASE)


def _first_group(pattern: re.Pattern, text: str, default: str) -> str:
    m = pattern.search(text)
    if not m:
        return default
    value = m.group(1).strip()
    return value or default


def _extract_app(text: str) -> dict:
    token = extract_app_name(text)
    app = find_app(token) if token else None
    if app is None:
        return {}
    return {"app": app.name}


def _extract_contact(pattern: re.Pattern) -> Callable[[str], dict]:
    def extract(text: str) -> dict:
        return {"name": _first_group(pattern, text, DEFAULT_CONTACT)}
    return extract


def _extract_song(text: str) -> dict:
    return {"song": _first_group(_PLAY_RE, text, DEFAULT_SONG)}


@dataclass(frozen=True)
class Rule:
    intent: Intent
    phrases: tuple[str, ...]
    extract: Callable[[str], dict] | None = None
    prefixes: tuple[str, ...] = ()

    def matches(self, lowered: str) -> bool:
        if any(p in lowered for p in self.phrases):
            return True
        return any(lowered.startswith(p) for p in self.prefixes)


# Evaluated top to bottom, first match wins.
RULES = (
    Rule(Intent.OPEN_APP, ("open", "launch"), _extract_app),
    Rule(Intent.CALL, ("call",), _extract_contact(_CALL_RE)),
    Rule(Intent.SEND_MESSAGE, ("send message", "text"), _extract_contact(_MESSAGE_RE)),
    Rule(Intent.TAKE_PHOTO, ("take picture", "take photo")),
    Rule(Intent.PLAY_MUSIC, ("play music", "play song"), _extract_song, prefixes=("play ",)),
    Rule(Intent.BRIGHTNESS_UP, ("increase brightness", "brightness up")),
    Rule(Intent.BRIGHTNESS_DOWN, ("decrease brightness", "brightness down")),
    Rule(Intent.VOLUME_UP, ("volume up", "increase volume")),
    Rule(Intent.VOLUME_DOWN, ("volume down", "decrease volume")),
    Rule(Intent.TIME_QUERY, ("what time", "time is it")),
    Rule(Intent.BATTERY_QUERY, ("battery", "charge")),
    Rule(Intent.WIFI_QUERY, ("wifi", "wi-fi")),
    Rule(Intent.GREETING, ("hello", "hi jarvis")),
)


def normalize_utterance(text: str) -> str:
    return " ".join((text or "").strip().split())


def classify(utterance: str, rules: tuple[Rule, ...] = RULES) -> Classification:
    """Assign exactly one intent to *utterance*.

    Keywords are matched against the lowercased text; parameters are taken
    from the text as given, so a caller that keeps casing gets it back in
    names and song titles. A parameter that cannot be extracted falls back
    to its default token, never to an error.
    """
    text = normalize_utterance(utterance)
    lowered = text.lower()
    for rule in rules:
        if not rule.matches(lowered):
            continue
        params = rule.extract(text) if rule.extract else {}
        return Classification(rule.intent, params)
    return Classification(Intent.UNKNOWN)
