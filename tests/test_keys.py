"""Tests for key-name resolution."""

import string

import pytest

from iterm_mcp.exceptions import InvalidKeyError
from iterm_mcp.keys import SPECIAL_KEYS, describe_key, resolve_key
from iterm_mcp.models import ControlLetter, SpecialKey


class TestSpecialKeys:
    """Special key names resolve case-insensitively."""

    @pytest.mark.parametrize(
        "name,code",
        [
            ("ENTER", 13),
            ("RETURN", 13),
            ("CR", 13),
            ("LF", 10),
            ("NEWLINE", 10),
            ("ESC", 27),
            ("ESCAPE", 27),
            ("TAB", 9),
            ("BACKSPACE", 127),
            ("DELETE", 127),
            ("DEL", 127),
            ("BS", 8),
            ("SPACE", 32),
        ],
    )
    def test_documented_codes(self, name, code):
        for variant in (name, name.lower(), name.capitalize()):
            resolved = resolve_key(variant)
            assert resolved == SpecialKey(name, code)

    def test_table_matches_documented_codes(self):
        """Every table entry is a 7-bit character code."""
        assert all(0 <= code <= 127 for code in SPECIAL_KEYS.values())

    def test_telnet_escape(self):
        """The literal ']' is Ctrl+]."""
        assert resolve_key("]") == SpecialKey("]", 29)

    def test_special_name_wins_over_letter_rule(self):
        """Two-letter names like CR and BS are special keys, not errors."""
        assert resolve_key("bs").code == 8
        assert resolve_key("cr").code == 13


class TestControlLetters:
    """Single letters become Ctrl+letter."""

    @pytest.mark.parametrize("letter", list(string.ascii_uppercase))
    def test_letter_position(self, letter):
        expected = string.ascii_uppercase.index(letter) + 1
        assert resolve_key(letter) == ControlLetter(letter, expected)
        assert resolve_key(letter.lower()) == ControlLetter(letter, expected)

    def test_common_letters(self):
        assert resolve_key("A").code == 1
        assert resolve_key("c").code == 3
        assert resolve_key("C").code == 3
        assert resolve_key("M").code == 13
        assert resolve_key("z").code == 26


class TestInvalidKeys:
    """Anything else is rejected."""

    @pytest.mark.parametrize("key", ["123", "", "AB", "1", "[", "F1", "é", "ctrl-c", " "])
    def test_rejected(self, key):
        with pytest.raises(InvalidKeyError) as exc_info:
            resolve_key(key)
        assert exc_info.value.key == key
        assert f'"{key}"' in str(exc_info.value)

    @pytest.mark.parametrize("key", ["\u0131", "\u017fpace", "\u212a"])
    def test_non_ascii_lookalikes_rejected(self, key):
        """Letters that upper-case into A-Z are not ASCII keys."""
        with pytest.raises(InvalidKeyError):
            resolve_key(key)

    def test_message_lists_accepted_forms(self):
        with pytest.raises(InvalidKeyError) as exc_info:
            resolve_key("123")
        message = str(exc_info.value)
        assert "A-Z" in message
        assert "ENTER" in message
        assert "']'" in message


class TestDescribeKey:
    def test_special_key_label(self):
        assert describe_key(resolve_key("enter")).label == "ENTER"

    def test_telnet_escape_label(self):
        assert describe_key(resolve_key("]")).label == "]"

    def test_control_letter_label(self):
        descriptor = describe_key(resolve_key("c"))
        assert descriptor.label == "Control-C"
        assert descriptor.code == 3
