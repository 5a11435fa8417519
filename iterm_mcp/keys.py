"""Key-name to character-code mapping for the send-key operation."""

from __future__ import annotations

from .exceptions import InvalidKeyError
from .models import ControlLetter, KeyDescriptor, ResolvedKey, SpecialKey

SPECIAL_KEYS: dict[str, int] = {
    # Enter/Return
    "ENTER": 13,
    "RETURN": 13,
    "CR": 13,
    "LF": 10,
    "NEWLINE": 10,
    # Escape
    "ESCAPE": 27,
    "ESC": 27,
    "TAB": 9,
    # Backspace sends DEL on most terminals; BS is the ASCII backspace.
    "BACKSPACE": 127,
    "BS": 8,
    "DELETE": 127,
    "DEL": 127,
    "SPACE": 32,
}

TELNET_ESCAPE = "]"
TELNET_ESCAPE_CODE = 29


def resolve_key(key: str) -> ResolvedKey:
    """Resolve a key name to the character it sends.

    Resolution order: special-key name (ASCII case-insensitive), the
    literal ']', then a single letter A-Z sent as Ctrl+letter.

    Raises:
        InvalidKeyError: If ``key`` matches none of the above.
    """
    if not key.isascii():
        raise InvalidKeyError(key)
    upper = key.upper()
    if upper in SPECIAL_KEYS:
        return SpecialKey(upper, SPECIAL_KEYS[upper])
    if key == TELNET_ESCAPE:
        return SpecialKey(TELNET_ESCAPE, TELNET_ESCAPE_CODE)
    if len(upper) == 1 and "A" <= upper <= "Z":
        return ControlLetter(upper, ord(upper) - ord("A") + 1)
    raise InvalidKeyError(key)


def describe_key(resolved: ResolvedKey) -> KeyDescriptor:
    """Build the code and confirmation label for a resolved key."""
    if isinstance(resolved, ControlLetter):
        return KeyDescriptor(code=resolved.code, label=f"Control-{resolved.letter}")
    return KeyDescriptor(code=resolved.code, label=resolved.name)
