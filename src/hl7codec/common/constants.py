"""Constants and enums for hl7codec."""

import re
from enum import StrEnum
from typing import Final

SEGMENT_TERMINATOR: Final[str] = "\r"
FIELD_SEPARATOR: Final[str] = "|"
COMPONENT_SEPARATOR: Final[str] = "^"
REPETITION_SEPARATOR: Final[str] = "~"
ESCAPE_CHARACTER: Final[str] = "\\"
SUBCOMPONENT_SEPARATOR: Final[str] = "&"

TRUNCATION_CHARACTER: Final[str] = "#"

# MSH-2 order: component, repetition, escape, subcomponent
ENCODING_CHARACTERS: Final[str] = (
    COMPONENT_SEPARATOR + REPETITION_SEPARATOR + ESCAPE_CHARACTER + SUBCOMPONENT_SEPARATOR
)

PRETTY_TERMINATOR: Final[str] = "\n"

# Segments whose field 1 / field 2 declare the delimiters
HEADER_SEGMENTS: Final[frozenset[str]] = frozenset({"MSH", "BHS", "FHS"})

SEGMENT_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Z0-9]{3}")


class EscapeCode(StrEnum):
    """Escape sequence codes standing in for delimiter characters."""

    FIELD = "F"
    COMPONENT = "S"
    SUBCOMPONENT = "T"
    REPETITION = "R"
    ESCAPE = "E"


__all__ = [
    "SEGMENT_TERMINATOR",
    "FIELD_SEPARATOR",
    "COMPONENT_SEPARATOR",
    "REPETITION_SEPARATOR",
    "ESCAPE_CHARACTER",
    "SUBCOMPONENT_SEPARATOR",
    "ENCODING_CHARACTERS",
    "PRETTY_TERMINATOR",
    "HEADER_SEGMENTS",
    "SEGMENT_NAME_PATTERN",
    "TRUNCATION_CHARACTER",
    "EscapeCode",
]
