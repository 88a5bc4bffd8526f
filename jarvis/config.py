import os

API_HOST = "127.0.0.1"
API_PORT = 8008

SAMPLE_RATE = 16000
CHUNK_SAMPLES = 4000
VOSK_MODEL_DIR = os.environ.get("JARVIS_VOSK_MODEL", "vosk-model-small-en-us-0.15")

SPEECH_BASE_WPM = 200
SPEECH_RATE = 1.1
SPEECH_PITCH = 1.0

ACTIVE_APP_SECONDS = 3.0

INITIAL_BRIGHTNESS = 80
INITIAL_VOLUME = 50
LEVEL_STEP = 20
LEVEL_MIN = 0
LEVEL_MAX = 100

TRANSCRIPT_MAX_MESSAGES = 200

DEFAULT_CONTACT = "contact"
DEFAULT_SONG = "music"


VOICE_RESPONSES = {
    "open app": "Opening {app}",
    "open which": "Which app would you like me to open?",
    "call": "Calling {name}...",
    "send message": "Opening messages to {name}",
    "take photo": "Opening camera",
    "play music": "Playing {song}",
    "brightness up": "Brightness increased to {level}%",
    "brightness down": "Brightness decreased to {level}%",
    "volume up": "Volume increased to {level}%",
    "volume down": "Volume decreased to {level}%",
    "time": "It's {time}",
    "battery": "Battery is at 85% and charging",
    "wifi": "WiFi is connected",
    "greeting": "Hello! How can I assist you today?",
    "unknown": (
        "I can help you open apps, make calls, send messages, adjust settings, "
        "and more. What would you like me to do?"
    ),
}

ACTION_LABELS = {
    "open app": "Launched {app} app",
    "open which": "",
    "call": "Initiating call to {name}",
    "send message": "Composing message to {name}",
    "take photo": "Camera ready",
    "play music": "Music player active",
    "brightness up": "Brightness adjusted",
    "brightness down": "Brightness adjusted",
    "volume up": "Volume adjusted",
    "volume down": "Volume adjusted",
    "time": "Time query",
    "battery": "Battery status check",
    "wifi": "WiFi status check",
    "greeting": "Greeting",
    "unknown": "Awaiting command",
}

NOTICES = {
    "listening": "Listening...",
    "capture_unavailable": "Speech recognition not available, type your commands instead",
    "capture_error": "Speech recognition stopped: {error}",
    "exec_error": "Sorry, something went wrong",
}

EXAMPLE_COMMANDS = (
    "open camera",
    "call john",
    "send message to sarah",
    "play music",
    "increase brightness",
    "what time is it",
)
