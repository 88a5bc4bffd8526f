import os
import sys
from datetime import datetime

UI_MODE = "--ui" in sys.argv


def _ui(tag: str, value: str):
    if UI_MODE:
        print(f"{tag}:{value}", flush=True)


def ui_state(name: str):
    _ui("STATE", name)


def ui_command(text: str):
    _ui("COMMAND", text)


def ui_partial(text: str):
    _ui("PARTIAL", text)


def ui_response(text: str):
    _ui("RESPONSE", text)


def ui_action(label: str):
    _ui("ACTION", label)


def ui_app(name: str | None):
    _ui("APP", name or "")


def ui_levels(brightness: int, volume: int):
    _ui("LEVELS", f"{brightness},{volume}")


LOG_LEVEL = os.environ.get("JARVIS_LOG", "INFO").upper()
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_THRESHOLD = LEVELS.get(LOG_LEVEL, LEVELS["INFO"])


def log(level: str, msg: str):
    """Print ``HH:MM:SS [LEVEL] msg`` when *level* reaches ``JARVIS_LOG``."""
    if LEVELS.get(level, LEVELS["INFO"]) < _THRESHOLD:
        return
    stamp = datetime.now().strftime("%H:%M:%S")
    print(f"{stamp} [{level:<5}] {msg}", flush=True)


def debug(msg: str):
    log("DEBUG", msg)


def info(msg: str):
    log("INFO", msg)


def warn(msg: str):
    log("WARN", msg)


def error(msg: str):
    log("ERROR", msg)
