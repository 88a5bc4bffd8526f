from dataclasses import dataclass


@dataclass(frozen=True)
class App:
    name: str
    icon: str
    color: str


APP_CATALOG = (
    App("Phone", "📞", "#34C759"),
    App("Messages", "💬", "#007AFF"),
    App("Camera", "📷", "#5856D6"),
    App("Photos", "🖼️", "#FF9500"),
    App("Music", "🎵", "#FF2D55"),
    App("Settings", "⚙️", "#8E8E93"),
    App("Maps", "🗺️", "#30D158"),
    App("Calendar", "📅", "#FF3B30"),
)

# Scan order for "open <app>" commands.
APP_TOKENS = tuple(a.name.lower() for a in APP_CATALOG)


def find_app(name: str) -> App | None:
    q = " ".join((name or "").strip().lower().split())
    if not q:
        return None
    for app in APP_CATALOG:
        if app.name.lower() == q:
            return app
    return None


def extract_app_name(text: str) -> str | None:
    """Return the first catalog token contained in *text*, in catalog order."""
    t = (text or "").lower()
    for token in APP_TOKENS:
        if token in t:
            return token
    return None
