"""Comment-aware reader for JSON-like document text.

Turns JSON with ``//`` and ``/* */`` comments into plain Python data,
tolerating the usual authoring mistakes: single-quoted strings, unquoted
property names and trailing commas. Comment-like sequences inside quoted
strings are data and are never removed.
"""

import json
import logging
import re
from enum import Enum
from typing import Any

from schema_bridge.errors import MalformedInput
from schema_bridge.utils.helpers import excerpt_around, offset_to_position

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """States of the comment-stripping scanner."""

    DEFAULT = "default"
    IN_STRING = "in_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


_DANGLING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z0-9_$]+)(\s*:)")
_ANY_BARE_KEY = re.compile(r"(?<![\w$])([A-Za-z_$][\w$]*)(\s*:)")
_FOREIGN_LITERALS = {
    "True": "true",
    "False": "false",
    "None": "null",
    "undefined": "null",
}
_FOREIGN_LITERAL = re.compile(r"(?<![\w$])(True|False|None|undefined)(?![\w$])(?!\s*:)")
_TOP_LEVEL_KEY = re.compile(r"^\s*\"?[A-Za-z_$][\w$]*\"?\s*:")

# Characters that can end a value / start the next one, for comma repair
_VALUE_END = set('"}]') | set("0123456789") | set("el")
_VALUE_START = set('"{[-0123456789tfn')


def strip_comments(text: str, quotes: str = "\"'") -> str:
    """Remove line and block comments outside of quoted strings.

    Single quotes open a string too, since single-quoted strings are
    accepted and rewritten later by ``convert_single_quotes``.

    Newlines ending a line comment, and newlines inside block comments,
    are kept so that line numbers of the remaining text do not move.

    Args:
        text: Comment-bearing text
        quotes: Characters that open a string literal

    Returns:
        Comment-free text
    """
    result: list[str] = []
    state = ScanState.DEFAULT
    quote = ""
    escaped = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else ""

        if state == ScanState.DEFAULT:
            if char in quotes:
                state = ScanState.IN_STRING
                quote = char
                result.append(char)
            elif char == "/" and next_char == "/":
                state = ScanState.IN_LINE_COMMENT
                i += 1
            elif char == "/" and next_char == "*":
                state = ScanState.IN_BLOCK_COMMENT
                i += 1
            else:
                result.append(char)

        elif state == ScanState.IN_STRING:
            result.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                state = ScanState.DEFAULT

        elif state == ScanState.IN_LINE_COMMENT:
            if char in "\r\n":
                state = ScanState.DEFAULT
                result.append(char)

        elif state == ScanState.IN_BLOCK_COMMENT:
            if char == "*" and next_char == "/":
                state = ScanState.DEFAULT
                i += 1
            elif char == "\n":
                result.append(char)

        i += 1

    return "".join(result)


def convert_single_quotes(text: str) -> str:
    """Rewrite single-quoted string literals as double-quoted ones.

    Double-quoted strings are copied untouched. Inside converted strings
    bare ``"`` is escaped and ``\\'`` becomes a plain apostrophe.
    """
    result: list[str] = []
    quote = ""
    escaped = False

    for char in text:
        if not quote:
            if char in "\"'":
                quote = char
                result.append('"')
            else:
                result.append(char)
            continue

        if escaped:
            escaped = False
            if quote == "'" and char == "'":
                # \' -> ' (drop the backslash already written)
                result[-1] = "'"
            else:
                result.append(char)
        elif char == "\\":
            escaped = True
            result.append(char)
        elif char == quote:
            quote = ""
            result.append('"')
        elif quote == "'" and char == '"':
            result.append('\\"')
        else:
            result.append(char)

    return "".join(result)


def split_strings(text: str) -> list[tuple[bool, str]]:
    """Split text into alternating non-string and double-quoted string chunks.

    Returns:
        List of ``(is_string, chunk)`` pairs; string chunks include their quotes.
        An unterminated string runs to the end of the text.
    """
    chunks: list[tuple[bool, str]] = []
    start = 0
    i = 0
    length = len(text)

    while i < length:
        if text[i] != '"':
            i += 1
            continue

        if i > start:
            chunks.append((False, text[start:i]))
        end = i + 1
        escaped = False
        while end < length:
            char = text[end]
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                break
            end += 1
        chunks.append((True, text[i:end + 1]))
        start = i = end + 1

    if start < length:
        chunks.append((False, text[start:]))
    return chunks


def _rewrite_outside_strings(text: str, *rewrites: tuple[re.Pattern, Any]) -> str:
    parts = []
    for is_string, chunk in split_strings(text):
        if not is_string:
            for pattern, replacement in rewrites:
                chunk = pattern.sub(replacement, chunk)
        parts.append(chunk)
    return "".join(parts)


def normalize(text: str) -> str:
    """Repair common authoring mistakes in comment-free document text.

    Converts single-quoted strings, removes dangling commas before a
    closing bracket/brace and quotes bare property names that follow
    ``{`` or ``,``. Content of double-quoted strings is never modified.
    """
    text = convert_single_quotes(text)
    return _rewrite_outside_strings(
        text,
        (_DANGLING_COMMA, r"\1"),
        (_BARE_KEY, r'\1"\2"\3'),
    )


def _insert_missing_commas(text: str) -> str:
    """Insert commas between values separated only by a line break."""
    result: list[str] = []
    last_significant = ""

    for is_string, chunk in split_strings(text):
        if is_string:
            if last_significant in _VALUE_END and result:
                result[-1] = _comma_before_trailing_break(result[-1])
            result.append(chunk)
            last_significant = '"'
            continue

        out: list[str] = []
        i = 0
        while i < len(chunk):
            char = chunk[i]
            if char == "\n" and last_significant in _VALUE_END:
                rest = chunk[i:].lstrip()
                if rest and rest[0] in _VALUE_START:
                    out.append(",")
                    last_significant = ","
            out.append(char)
            if not char.isspace():
                last_significant = char
            i += 1
        result.append("".join(out))

    return "".join(result)


def _comma_before_trailing_break(chunk: str) -> str:
    stripped = chunk.rstrip()
    tail = chunk[len(stripped):]
    if "\n" not in tail:
        return chunk
    return stripped + "," + tail


def normalize_aggressive(text: str) -> str:
    """Second-chance repair pass, applied when the regular pass is not enough.

    On top of :func:`normalize`, converts Python/JS literal tokens
    (``True``, ``None``, ``undefined``...), quotes bare keys wherever they
    appear, inserts commas missing at line breaks and wraps a bare
    ``key: value`` body in braces.
    """
    text = normalize(text)
    text = _rewrite_outside_strings(
        text,
        (_FOREIGN_LITERAL, lambda m: _FOREIGN_LITERALS[m.group(1)]),
        (_ANY_BARE_KEY, r'"\1"\2'),
    )
    text = _insert_missing_commas(text)

    if _TOP_LEVEL_KEY.match(text):
        text = "{" + text + "}"

    return _rewrite_outside_strings(text, (_DANGLING_COMMA, r"\1"))


def decode_jsonc(text: str) -> Any:
    """Decode comment-bearing document text into plain Python data.

    Args:
        text: Document text, possibly with comments and authoring mistakes

    Returns:
        Decoded value (dict, list, str, int, float, bool or None)

    Raises:
        MalformedInput: If the text cannot be decoded after both repair passes
    """
    if not text or not text.strip():
        raise MalformedInput("Document is empty", line=1, column=1)

    cleaned = strip_comments(text)
    normalized = normalize(cleaned)

    try:
        return json.loads(normalized)
    except json.JSONDecodeError as error:
        first_error = error

    logger.debug("Standard normalization failed (%s), retrying aggressively", first_error.msg)

    try:
        return json.loads(normalize_aggressive(cleaned))
    except json.JSONDecodeError as retry_error:
        logger.debug("Aggressive normalization failed: %s", retry_error.msg)

    line, column = offset_to_position(normalized, first_error.pos)
    excerpt = excerpt_around(normalized, first_error.pos)
    logger.debug("Could not decode document at line %d, column %d: %s", line, column, first_error.msg)
    raise MalformedInput(first_error.msg, line, column, excerpt) from first_error
