"""Delimiter set governing how a message is tokenized."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hl7codec.common.config import get_config
from hl7codec.common.constants import (
    COMPONENT_SEPARATOR,
    ESCAPE_CHARACTER,
    FIELD_SEPARATOR,
    HEADER_SEGMENTS,
    REPETITION_SEPARATOR,
    SEGMENT_TERMINATOR,
    SUBCOMPONENT_SEPARATOR,
    TRUNCATION_CHARACTER,
    EscapeCode,
)
from hl7codec.common.errors import MalformedMessageError

logger = logging.getLogger(__name__)

# MSH-2 character positions
_ENCODING_ORDER: tuple[str, ...] = ("component", "repetition", "escape", "subcomponent")

# MSH-2 length; since v2.7 a truncation character may follow
_ENCODING_LENGTH = len(_ENCODING_ORDER)


class DelimiterSet(BaseModel):
    """The characters used to split one message into segments, fields and values.

    A set is resolved per message from its header segment and passed
    explicitly to every parse and render call.
    """

    model_config = ConfigDict(frozen=True)

    terminator: str = Field(default=SEGMENT_TERMINATOR, min_length=1, max_length=1)
    field: str = Field(default=FIELD_SEPARATOR, min_length=1, max_length=1)
    component: str = Field(default=COMPONENT_SEPARATOR, min_length=1, max_length=1)
    subcomponent: str = Field(default=SUBCOMPONENT_SEPARATOR, min_length=1, max_length=1)
    repetition: str = Field(default=REPETITION_SEPARATOR, min_length=1, max_length=1)
    escape: str = Field(default=ESCAPE_CHARACTER, min_length=1, max_length=1)

    @classmethod
    def default(cls) -> DelimiterSet:
        """Build the default set from configuration."""
        config = get_config()
        base = cls(terminator=config.segment_terminator)
        return cls.from_header(config.field_separator, config.encoding_characters, base=base)

    @classmethod
    def from_header(
        cls,
        field_separator: Any,
        encoding_characters: Any,
        base: DelimiterSet | None = None,
    ) -> DelimiterSet:
        """Build a set from header field 1 (separator) and field 2 (encoding characters).

        Positions that are missing or unusable keep the value from ``base``.
        """
        if base is None:
            base = cls.default()
        updates: dict[str, str] = {}
        if isinstance(field_separator, str) and len(field_separator) == 1:
            updates["field"] = field_separator
        if isinstance(encoding_characters, str):
            for attr, char in zip(_ENCODING_ORDER, encoding_characters):
                updates[attr] = char
        if not updates:
            return base
        return base.model_copy(update=updates)

    @property
    def encoding_characters(self) -> str:
        """The 4-character header field 2 for this set."""
        return self.component + self.repetition + self.escape + self.subcomponent

    @property
    def separators(self) -> tuple[str, ...]:
        """Field, component, repetition, escape and subcomponent characters."""
        return (self.field, self.component, self.repetition, self.escape, self.subcomponent)

    @property
    def has_distinct_separators(self) -> bool:
        return len(set(self.separators)) == len(self.separators)

    @property
    def value_separators(self) -> tuple[str, ...]:
        """Separators below field level, outermost first."""
        return (self.component, self.subcomponent)

    @property
    def escape_codes(self) -> dict[str, str]:
        """Map of delimiter character to the code that stands in for it."""
        return {
            self.field: EscapeCode.FIELD,
            self.component: EscapeCode.COMPONENT,
            self.subcomponent: EscapeCode.SUBCOMPONENT,
            self.repetition: EscapeCode.REPETITION,
            self.escape: EscapeCode.ESCAPE,
        }

    @property
    def escaped_characters(self) -> dict[str, str]:
        """Map of escape code to the delimiter character it stands for."""
        return {code: char for char, code in self.escape_codes.items()}


def _is_encoding_field(encoding: str) -> bool:
    if len(encoding) == _ENCODING_LENGTH:
        return True
    return len(encoding) == _ENCODING_LENGTH + 1 and encoding[-1] == TRUNCATION_CHARACTER


def resolve_header_delimiters(segment_text: str, base: DelimiterSet) -> DelimiterSet:
    """Resolve the delimiter set declared by a raw header segment.

    Text that does not start with a header segment resolves to ``base``.

    Raises:
        MalformedMessageError: If the declared field separator is unusable, is
            not repeated after the encoding characters, or the encoding field is
            not four characters (plus an optional truncation character).
    """
    name = segment_text[:3]
    if name not in HEADER_SEGMENTS or len(segment_text) <= len(name):
        return base

    field_separator = segment_text[3]
    if field_separator.isalnum() or field_separator.isspace():
        raise MalformedMessageError(f"invalid field separator {field_separator!r}", name)

    encoding, repeated, _ = segment_text[4:].partition(field_separator)
    if not _is_encoding_field(encoding):
        if not repeated:
            raise MalformedMessageError(
                f"field separator {field_separator!r} not repeated after encoding characters",
                name,
            )
        raise MalformedMessageError(f"invalid encoding characters {encoding!r}", name)

    resolved = DelimiterSet.from_header(field_separator, encoding, base=base)
    logger.debug(
        "Resolved delimiters from %s: field=%r encoding=%r",
        name,
        resolved.field,
        resolved.encoding_characters,
    )
    return resolved


__all__ = ["DelimiterSet", "resolve_header_delimiters"]
