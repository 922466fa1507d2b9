"""Conversion between hotkey records, their text form and Textual key strings."""

from .models import Hotkey

# Modifier names as written in settings -> Textual key prefixes
_TEXTUAL_MODIFIERS = {
    "mod": "ctrl",
    "ctrl": "ctrl",
    "shift": "shift",
    "alt": "alt",
    "meta": "meta",
}

# Textual orders modifiers this way in key names (e.g. "ctrl+shift+n")
_MODIFIER_ORDER = ["ctrl", "alt", "meta", "shift"]


def format_hotkey(hotkeys: list[Hotkey]) -> str:
    """Text form of the first hotkey, e.g. ``"Mod+Shift+N"``; ``""`` if unbound."""
    if not hotkeys:
        return ""
    hotkey = hotkeys[0]
    return "+".join([*hotkey.modifiers, hotkey.key])


def parse_hotkey(value: str) -> list[Hotkey]:
    """Parse ``"Mod+Shift+N"`` into a hotkey list; blank text unbinds."""
    if not value.strip():
        return []
    parts = [p.strip() for p in value.split("+")]
    key = parts.pop()
    return [Hotkey(modifiers=[p for p in parts if p], key=key)]


def to_textual_key(hotkey: Hotkey) -> str:
    """Convert a hotkey to a Textual key string.

    Raises:
        ValueError: If a modifier is not recognized
    """
    modifiers = set()
    for modifier in hotkey.modifiers:
        textual = _TEXTUAL_MODIFIERS.get(modifier.lower())
        if textual is None:
            raise ValueError(f"Unknown modifier: {modifier}")
        modifiers.add(textual)

    ordered = [m for m in _MODIFIER_ORDER if m in modifiers]
    return "+".join([*ordered, hotkey.key.lower()])


def to_textual_keys(hotkeys: list[Hotkey]) -> str:
    """Comma-separated Textual key list for ``App.bind``; ``""`` if unbound."""
    return ",".join(to_textual_key(h) for h in hotkeys if h.key)
