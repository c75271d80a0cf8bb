"""Recursive field values and their parse/render routines.

A field value is either a leaf string or a list of field values. Which
separator joins a list is not stored on the list: it follows from how deep
the list sits in the tree (components at the top, subcomponents below). A
field holding repetitions is the one tagged case, a ``Repetitions`` list.

Example:
    >>> parse_field("xx^x&y&z^yy", DelimiterSet())
    ['xx', ['x', 'y', 'z'], 'yy']
"""

from __future__ import annotations

import re
from typing import Any, Union

from hl7codec.common.constants import EscapeCode
from hl7codec.common.errors import FieldNestingError
from hl7codec.model.delimiters import DelimiterSet

FieldValue = Union[str, list["FieldValue"]]

# Codes that may appear between two escape characters.
_ESCAPE_SEQUENCE = re.compile(
    r"[FSTRE]"
    r"|H|N"
    r"|X[0-9A-Fa-f]*"
    r"|Z[^\s]*"
    r"|C[0-9A-Fa-f]{4}"
    r"|M[0-9A-Fa-f]{4,6}"
    r"|\.(?:br|sp|fi|nf|in|ti|sk|ce)[+-]?\d*"
)

# Only these are decoded in a leaf; every other sequence, \E\ included,
# stays encoded so a leaf renders back to the text it came from.
_DECODED_CODES: frozenset[str] = frozenset(
    {EscapeCode.FIELD, EscapeCode.COMPONENT, EscapeCode.SUBCOMPONENT, EscapeCode.REPETITION}
)


_VALUE_LEVELS = len(DelimiterSet().value_separators)

class Repetitions(list):
    """Repeated occurrences of one field, each a component-level value."""

    def __repr__(self) -> str:
        return f"Repetitions({list.__repr__(self)})"


def _sequence_end(text: str, start: int, escape: str) -> int | None:
    """Index of the closing escape character of a sequence opening at ``start``."""
    end = text.find(escape, start + 1)
    if end == -1:
        return None
    if _ESCAPE_SEQUENCE.fullmatch(text, start + 1, end) is None:
        return None
    return end


def split_escaped(text: str, separator: str, escape: str) -> list[str]:
    """Split ``text`` on ``separator``, never inside an escape sequence."""
    parts: list[str] = []
    start = 0
    i = 0
    while i < len(text):
        char = text[i]
        if char == escape:
            end = _sequence_end(text, i, escape)
            if end is not None:
                i = end + 1
                continue
        elif char == separator:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return parts


def unescape(text: str, delimiters: DelimiterSet) -> str:
    """Replace separator escape sequences with the characters they stand for.

    Escape-character (``E``), formatting and hex sequences are left encoded.
    """
    esc = delimiters.escape
    if esc not in text:
        return text
    characters = delimiters.escaped_characters
    out: list[str] = []
    i = 0
    while i < len(text):
        end = _sequence_end(text, i, esc) if text[i] == esc else None
        if end is None:
            out.append(text[i])
            i += 1
            continue
        code = text[i + 1 : end]
        out.append(characters[code] if code in _DECODED_CODES else text[i : end + 1])
        i = end + 1
    return "".join(out)


def escape(text: str, delimiters: DelimiterSet) -> str:
    """Escape separator characters in a leaf value.

    Well-formed sequences other than the separator codes pass through; any
    other escape character becomes the escape-character sequence.
    """
    codes = delimiters.escape_codes
    esc = delimiters.escape
    out: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == esc:
            end = _sequence_end(text, i, esc)
            if end is not None and text[i + 1 : end] not in _DECODED_CODES:
                out.append(text[i : end + 1])
                i = end + 1
                continue
        if char in codes:
            out.append(f"{esc}{codes[char]}{esc}")
        else:
            out.append(char)
        i += 1
    return "".join(out)


def _parse_level(text: str, separators: tuple[str, ...], delimiters: DelimiterSet) -> FieldValue:
    if not separators:
        return unescape(text, delimiters)
    children = [
        _parse_level(part, separators[1:], delimiters)
        for part in split_escaped(text, separators[0], delimiters.escape)
    ]
    # A lone leaf collapses; a lone list keeps its wrapper so depth survives.
    if len(children) == 1 and isinstance(children[0], str):
        return children[0]
    return children


def parse_field(text: str, delimiters: DelimiterSet) -> FieldValue:
    """Parse raw field text into a field value tree."""
    levels = delimiters.value_separators
    repetitions = split_escaped(text, delimiters.repetition, delimiters.escape)
    if len(repetitions) > 1:
        return Repetitions(_parse_level(part, levels, delimiters) for part in repetitions)
    return _parse_level(text, levels, delimiters)


def _render_level(value: FieldValue, separators: tuple[str, ...], delimiters: DelimiterSet) -> str:
    if isinstance(value, str):
        return escape(value, delimiters)
    if isinstance(value, Repetitions):
        raise FieldNestingError("repetitions are only allowed at field level")
    if not separators:
        raise FieldNestingError("value is nested deeper than the available separators")
    return separators[0].join(_render_level(child, separators[1:], delimiters) for child in value)


def render_field(value: FieldValue, delimiters: DelimiterSet) -> str:
    """Render a field value tree back to field text."""
    levels = delimiters.value_separators
    if isinstance(value, Repetitions):
        return delimiters.repetition.join(_render_level(item, levels, delimiters) for item in value)
    return _render_level(value, levels, delimiters)


def _normalize(value: Any, levels: int) -> FieldValue:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        if isinstance(value, Repetitions):
            raise FieldNestingError("repetitions are only allowed at field level")
        if not value:
            return ""
        if levels == 0:
            raise FieldNestingError("value is nested deeper than the available separators")
        return [_normalize(child, levels - 1) for child in value]
    return str(value)


def normalize_field(value: Any) -> FieldValue:
    """Coerce a caller-supplied value into a field value tree.

    ``None`` and empty lists become ``""``; other scalars become strings.

    Raises:
        FieldNestingError: If the value nests deeper than components and
            subcomponents, or carries repetitions below field level.
    """
    if isinstance(value, Repetitions):
        if not value:
            return ""
        return Repetitions(_normalize(item, _VALUE_LEVELS) for item in value)
    return _normalize(value, _VALUE_LEVELS)


__all__ = [
    "FieldValue",
    "Repetitions",
    "split_escaped",
    "unescape",
    "escape",
    "parse_field",
    "render_field",
    "normalize_field",
]
