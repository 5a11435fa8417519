"""Tests for the separator-based script output format."""

import pytest

from iterm_mcp.applescript.codec import (
    FIELD_SEP,
    PAIR_SEP,
    RECORD_SEP,
    decode_pair,
    decode_session_block,
    decode_session_records,
    encode_pair,
    encode_session_records,
    trim_preview,
)
from iterm_mcp.models import SessionRecord


def make_record(session_id: str = "w0t0p0:AAA", **overrides) -> SessionRecord:
    fields = dict(
        session_id=session_id,
        name="zsh",
        window_name="Main",
        window_id=1234,
        tab_index=0,
        tty="/dev/ttys001",
        profile="Default",
        is_current=True,
        is_processing=False,
        preview="$ ls\nfile.txt",
    )
    fields.update(overrides)
    return SessionRecord(**fields)


class TestSessionRecordRoundTrip:
    """Encoding then decoding yields the same records."""

    def test_no_records(self):
        assert decode_session_records(encode_session_records([])) == []

    def test_single_record(self):
        record = make_record()
        assert decode_session_records(encode_session_records([record])) == [record]

    def test_many_records(self):
        records = [
            make_record("w0t0p0:AAA"),
            make_record("w0t1p0:BBB", tab_index=1, is_current=False, is_processing=True),
            make_record("w1t0p0:CCC", window_id=99, window_name="Other", preview=""),
        ]
        assert decode_session_records(encode_session_records(records)) == records

    def test_multiline_preview_reduced_to_five_lines(self):
        """A long preview keeps only its last five lines."""
        preview = "\n".join(f"line {i}" for i in range(1, 11))
        encoded = encode_session_records([make_record(preview=preview)])
        [decoded] = decode_session_records(encoded)
        assert decoded.preview == "line 6\nline 7\nline 8\nline 9\nline 10"
        assert len(decoded.preview.split("\n")) <= 5


class TestDecodeSessionRecords:
    """Test tolerant decoding of listing output."""

    def test_empty_output(self):
        assert decode_session_records("") == []
        assert decode_session_records("   \n") == []

    def test_short_block_dropped_without_affecting_siblings(self):
        """A block with fewer than nine fields is skipped."""
        bad = FIELD_SEP.join(["bad", "zsh", "Main"]) + RECORD_SEP
        output = (
            encode_session_records([make_record("good-1")])
            + bad
            + encode_session_records([make_record("good-2")])
        )

        ids = [r.session_id for r in decode_session_records(output)]
        assert ids == ["good-1", "good-2"]

    def test_non_numeric_window_id_dropped(self):
        block = FIELD_SEP.join(
            ["s1", "n", "w", "abc", "0", "tty", "p", "true", "false", "pv"]
        )
        assert decode_session_records(block + RECORD_SEP) == []

    def test_exactly_nine_fields_has_empty_preview(self):
        block = FIELD_SEP.join(["s1", "n", "w", "7", "2", "tty", "p", "false", "true"])
        [record] = decode_session_records(block + RECORD_SEP)
        assert record.window_id == 7
        assert record.tab_index == 2
        assert record.is_current is False
        assert record.is_processing is True
        assert record.preview == ""

    def test_extra_separators_stay_in_preview(self):
        """Separator-like text in the content is folded back into the preview."""
        block = FIELD_SEP.join(
            ["s1", "n", "w", "7", "0", "tty", "p", "true", "false", "left", "right"]
        )
        [record] = decode_session_records(block + RECORD_SEP)
        assert record.preview == f"left{FIELD_SEP}right"

    def test_output_whitespace_and_trailing_newline(self):
        """osascript adds a trailing newline; it does not create a record."""
        output = "\n" + encode_session_records([make_record()]) + "\n"
        assert len(decode_session_records(output)) == 1

    def test_decode_block_returns_none_for_empty_id(self):
        block = FIELD_SEP.join(["  ", "n", "w", "7", "0", "tty", "p", "true", "false"])
        assert decode_session_block(block) is None

    def test_custom_preview_lines(self):
        record = make_record(preview="a\nb\nc")
        [decoded] = decode_session_records(encode_session_records([record]), preview_lines=2)
        assert decoded.preview == "b\nc"


class TestTrimPreview:
    def test_strips_surrounding_whitespace(self):
        assert trim_preview("\n\n  $ \n") == "$"

    def test_zero_lines(self):
        assert trim_preview("a\nb", 0) == ""


class TestPairs:
    """Test creator result encoding."""

    def test_decode_two_fields(self):
        assert decode_pair(encode_pair("sess", 12) + "\n", 2) == ["sess", "12"]

    def test_decode_three_fields(self):
        assert decode_pair(f"sess{PAIR_SEP}12{PAIR_SEP}3", 3) == ["sess", "12", "3"]

    def test_wrong_field_count_raises(self):
        with pytest.raises(ValueError):
            decode_pair("sess", 2)

    def test_empty_session_id_raises(self):
        with pytest.raises(ValueError):
            decode_pair(f"{PAIR_SEP}12", 2)
