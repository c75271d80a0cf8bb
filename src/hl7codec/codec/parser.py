"""HL7 v2.x parse/serialize entry points."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from hl7codec.common.errors import MalformedMessageError
from hl7codec.model.delimiters import DelimiterSet
from hl7codec.model.message import Message
from hl7codec.model.segment import Segment

logger = logging.getLogger(__name__)


class HL7Codec:
    """Parses and renders messages against a default delimiter set.

    The defaults apply to messages without a header segment and to segments
    rendered on their own.
    """

    def __init__(self, delimiters: DelimiterSet | None = None) -> None:
        self._delimiters = delimiters or DelimiterSet.default()

    @property
    def delimiters(self) -> DelimiterSet:
        return self._delimiters

    def parse(self, raw_message: str) -> Message:
        """Parse a raw HL7 v2.x message string.

        Args:
            raw_message: Raw HL7 message with segment terminators.

        Returns:
            Parsed Message whose segments can be read and edited in place.

        Raises:
            MalformedMessageError: If the message is empty or its header is
                inconsistent.
        """
        if not raw_message or not raw_message.strip():
            raise MalformedMessageError("HL7 message cannot be empty")
        message = Message(raw_message, delimiters=self._delimiters)
        logger.debug("Parsed HL7 message: %r", message)
        return message

    def serialize(self, message: Message, pretty: bool = False) -> str:
        return message.to_string(pretty=pretty)

    def create_message(self) -> Message:
        return Message(delimiters=self._delimiters)

    def create_segment(self, name: str, fields: Iterable[Any] | None = None) -> Segment:
        return Segment(name, fields)

    def _segment_delimiters(self, segment: Segment, delimiters: DelimiterSet | None) -> DelimiterSet:
        return delimiters or segment.resolve_delimiters(self._delimiters)

    def segment_to_string(self, segment: Segment, delimiters: DelimiterSet | None = None) -> str:
        """Render a standalone segment with its trailing field separator."""
        return segment.to_string(self._segment_delimiters(segment, delimiters))

    def field_to_string(
        self, segment: Segment, index: int, delimiters: DelimiterSet | None = None
    ) -> str | None:
        """Render field ``index`` (1-based) of ``segment``; ``None`` if absent."""
        return segment.get_field_as_string(index, self._segment_delimiters(segment, delimiters))


def parse_hl7_message(raw_message: str) -> Message:
    """Parse a raw HL7 message string with the configured default delimiters."""
    return HL7Codec().parse(raw_message)


def serialize_hl7_message(message: Message, pretty: bool = False) -> str:
    return HL7Codec().serialize(message, pretty=pretty)


def segment_to_string(segment: Segment) -> str:
    return HL7Codec().segment_to_string(segment)


def field_to_string(segment: Segment, index: int) -> str | None:
    return HL7Codec().field_to_string(segment, index)


__all__ = [
    "HL7Codec",
    "parse_hl7_message",
    "serialize_hl7_message",
    "segment_to_string",
    "field_to_string",
]
