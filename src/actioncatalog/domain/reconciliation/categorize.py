"""Keyword classifier for action identifiers."""

from __future__ import annotations

from typing import Final

type CategoryTable = tuple[tuple[str, tuple[str, ...]], ...]

DEFAULT_CATEGORY: Final[str] = "general"

# Order matters: the first category with a matching keyword wins.
CATEGORY_PATTERNS: Final[CategoryTable] = (
    (
        "scripting",
        (
            "script", "variable", "calculate", "count", "random", "hash", "base64",
            "json", "dictionary", "list", "repeat", "conditional", "if", "choose",
            "menu", "exit", "nothing", "comment", "wait", "delay",
        ),
    ),
    (
        "text",
        ("text", "string", "replace", "split", "combine", "match", "case", "spell", "translate"),
    ),
    (
        "media",
        ("photo", "video", "image", "audio", "music", "play", "record", "camera", "gif", "media"),
    ),
    ("documents", ("file", "document", "pdf", "zip", "archive", "folder", "save", "create")),
    ("sharing", ("share", "airdrop", "clipboard", "copy", "paste")),
    ("web", ("url", "web", "safari", "http", "rss", "feed", "download")),
    ("location", ("location", "map", "direction", "address", "weather", "gps")),
    ("calendar", ("calendar", "event", "reminder", "date", "time", "alarm")),
    ("contacts", ("contact", "phone", "call", "message", "email", "facetime")),
    ("health", ("health", "workout", "sleep", "heart", "step", "fitness")),
    (
        "device",
        (
            "volume", "brightness", "wifi", "bluetooth", "airplane", "flashlight",
            "wallpaper", "vibrate", "dnd", "focus", "lowpower",
        ),
    ),
    ("apps", ("app", "open", "shortcut", "run")),
    ("notification", ("notification", "alert", "speak", "announce")),
)  # fmt: skip


def categorize(identifier: str, table: CategoryTable = CATEGORY_PATTERNS) -> str:
    """Return the first category whose keywords occur in ``identifier``."""

    lowered = identifier.lower()
    for category, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
