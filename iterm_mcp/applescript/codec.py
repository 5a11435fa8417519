"""Private wire format between generated AppleScripts and the decoder.

AppleScript has no structured serialization, so multi-field results are
joined with marker tokens that real session names and content will not
contain. Scripts and decoders both take the markers from this module.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..models import SessionRecord

logger = logging.getLogger(__name__)

FIELD_SEP = "<<:FIELD:>>"
RECORD_SEP = "<<:RECORD:>>"
PAIR_SEP = "<<:SEP:>>"

SESSION_FIELD_COUNT = 9
DEFAULT_PREVIEW_LINES = 5


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() == "true"


def trim_preview(text: str, max_lines: int = DEFAULT_PREVIEW_LINES) -> str:
    """Keep the final ``max_lines`` lines of ``text``, trimmed."""
    if max_lines <= 0:
        return ""
    return "\n".join(text.split("\n")[-max_lines:]).strip()


def encode_session_records(records: Iterable[SessionRecord]) -> str:
    """Serialize records exactly as the listing script does."""
    blocks = []
    for record in records:
        fields = [
            record.session_id,
            record.name,
            record.window_name,
            str(record.window_id),
            str(record.tab_index),
            record.tty,
            record.profile,
            "true" if record.is_current else "false",
            "true" if record.is_processing else "false",
            record.preview,
        ]
        blocks.append(FIELD_SEP.join(fields) + RECORD_SEP)
    return "".join(blocks)


def decode_session_block(
    block: str, preview_lines: int = DEFAULT_PREVIEW_LINES
) -> SessionRecord | None:
    """Decode one record block, or return None when it is malformed."""
    parts = block.split(FIELD_SEP)
    if len(parts) < SESSION_FIELD_COUNT:
        logger.debug("Dropping session block with %d fields", len(parts))
        return None

    try:
        window_id = int(parts[3].strip())
        tab_index = int(parts[4].strip())
    except ValueError:
        logger.debug("Dropping session block with non-numeric ids: %r", parts[3:5])
        return None

    session_id = parts[0].strip()
    if not session_id:
        logger.debug("Dropping session block with empty session id")
        return None

    # Anything past the ninth separator belongs to the preview text.
    preview = FIELD_SEP.join(parts[SESSION_FIELD_COUNT:])

    return SessionRecord(
        session_id=session_id,
        name=parts[1].strip(),
        window_name=parts[2].strip(),
        window_id=window_id,
        tab_index=tab_index,
        tty=parts[5].strip(),
        profile=parts[6].strip(),
        is_current=_as_bool(parts[7]),
        is_processing=_as_bool(parts[8]),
        preview=trim_preview(preview, preview_lines),
    )


def decode_session_records(
    output: str, preview_lines: int = DEFAULT_PREVIEW_LINES
) -> list[SessionRecord]:
    """Decode listing-script output into session records.

    Malformed blocks are skipped, so a partial list is returned rather
    than failing the whole listing.
    """
    output = output.strip()
    if not output:
        return []

    records = []
    for block in output.split(RECORD_SEP):
        if not block.strip():
            continue
        record = decode_session_block(block, preview_lines)
        if record is not None:
            records.append(record)
    return records


def encode_pair(*values: object) -> str:
    """Join creator result fields with the pair separator."""
    return PAIR_SEP.join(str(v) for v in values)


def decode_pair(output: str, expected: int) -> list[str]:
    """Split creator output into exactly ``expected`` trimmed fields.

    Raises:
        ValueError: If the field count does not match.
    """
    parts = [p.strip() for p in output.strip().split(PAIR_SEP)]
    if len(parts) != expected or not parts[0]:
        raise ValueError(
            f"Expected {expected} fields in script output, got {len(parts)}: {output!r}"
        )
    return parts
