"""Utility helper functions."""

import re


_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


def offset_to_position(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair.

    Args:
        text: Text the offset points into
        offset: Character offset (clamped to the text length)

    Returns:
        Tuple of (line, column)
    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def excerpt_around(text: str, offset: int, radius: int = 40) -> str:
    """Build a one-line excerpt of ``text`` centered on ``offset``.

    The failure point is marked with ``>>>``; newlines are shown as ``\\n``.

    Args:
        text: Source text
        offset: Character offset of the failure
        radius: Number of characters to keep on each side

    Returns:
        Excerpt string
    """
    offset = max(0, min(offset, len(text)))
    start = max(0, offset - radius)
    end = min(len(text), offset + radius)

    before = text[start:offset].replace("\n", "\\n")
    after = text[offset:end].replace("\n", "\\n")
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(text) else ""
    return f"{prefix}{before}>>>{after}{suffix}"


def is_identifier(name: str) -> bool:
    """Check whether ``name`` can be written as a bare property key."""
    return bool(_IDENTIFIER.match(name))
