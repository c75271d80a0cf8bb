"""HL7 v2.x message: an ordered, index-addressable list of segments."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from hl7codec.common.config import get_config
from hl7codec.common.constants import PRETTY_TERMINATOR
from hl7codec.common.errors import InvalidSegmentNameError, MalformedMessageError
from hl7codec.model.delimiters import DelimiterSet, resolve_header_delimiters
from hl7codec.model.segment import Segment

logger = logging.getLogger(__name__)


class Message:
    """Parsed or hand-built HL7 message.

    Segment accessors return the stored ``Segment`` instances, so edits made
    through a handle show up in later retrievals and in ``to_string``.
    Delimiters are resolved from the first segment whenever the message is
    rendered; a message without a header segment uses ``delimiters`` (or the
    configured defaults).
    """

    def __init__(self, text: str | None = None, delimiters: DelimiterSet | None = None) -> None:
        self._base = delimiters or DelimiterSet.default()
        self._segments: list[Segment] = []
        if text:
            self._segments = self._parse_segments(text)

    @classmethod
    def parse(cls, text: str, delimiters: DelimiterSet | None = None) -> Message:
        """Parse message text.

        Raises:
            MalformedMessageError: If the header declaration is inconsistent or
                a segment does not start with a valid name.
        """
        return cls(text, delimiters)

    def _split_segments(self, text: str) -> list[str]:
        terminators = {self._base.terminator}
        if get_config().accept_newline_terminators:
            terminators |= {"\r\n", "\n"}
        pattern = "|".join(re.escape(t) for t in sorted(terminators, key=len, reverse=True))
        return [fragment for fragment in re.split(pattern, text) if fragment.strip()]

    def _parse_segments(self, text: str) -> list[Segment]:
        fragments = self._split_segments(text)
        if not fragments:
            return []

        delimiters = resolve_header_delimiters(fragments[0], self._base)
        if not delimiters.has_distinct_separators:
            logger.warning(
                "Message declares overlapping delimiters %r; values may not split as intended",
                delimiters.separators,
            )

        segments: list[Segment] = []
        for position, fragment in enumerate(fragments):
            try:
                segments.append(Segment.parse(fragment, delimiters))
            except InvalidSegmentNameError as exc:
                raise MalformedMessageError(f"segment {position}: {exc}") from exc
        logger.debug("Parsed %d segments", len(segments))
        return segments

    @property
    def delimiters(self) -> DelimiterSet:
        """Delimiters declared by the first segment, if it is a header."""
        if self._segments and self._segments[0].is_header:
            return self._segments[0].resolve_delimiters(self._base)
        return self._base

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def _in_range(self, index: int, upper: int) -> bool:
        return isinstance(index, int) and 0 <= index < upper

    def add_segment(self, segment: Segment) -> None:
        self._segments.append(segment)

    def get_segment_by_index(self, index: int) -> Segment | None:
        """Segment at ``index``, or ``None`` when out of range."""
        if not self._in_range(index, len(self._segments)):
            return None
        return self._segments[index]

    def get_segments_by_name(self, name: str) -> list[Segment]:
        """Get all segments matching the name, in message order."""
        return [seg for seg in self._segments if seg.name == name]

    def insert_segment(self, segment: Segment, index: int) -> bool:
        """Insert so that ``segment`` ends up at ``index`` (0 to len inclusive).

        Returns ``False`` and leaves the message unchanged otherwise.
        """
        if not self._in_range(index, len(self._segments) + 1):
            logger.warning("Cannot insert %s at index %r: message has %d segments", segment.name, index, len(self))
            return False
        self._segments.insert(index, segment)
        return True

    def set_segment(self, segment: Segment, index: int) -> bool:
        """Replace the segment at ``index``; ``False`` when out of range."""
        if not self._in_range(index, len(self._segments)):
            logger.warning("Cannot set %s at index %r: message has %d segments", segment.name, index, len(self))
            return False
        self._segments[index] = segment
        return True

    def remove_segment_by_index(self, index: int) -> bool:
        """Remove the segment at ``index``; ``False`` when out of range."""
        if not self._in_range(index, len(self._segments)):
            logger.warning("Cannot remove index %r: message has %d segments", index, len(self))
            return False
        del self._segments[index]
        return True

    def get_segment_as_string(self, index: int) -> str | None:
        segment = self.get_segment_by_index(index)
        if segment is None:
            return None
        return segment.to_string(self.delimiters)

    def get_segment_field_as_string(self, index: int, field_index: int) -> str | None:
        segment = self.get_segment_by_index(index)
        if segment is None:
            return None
        return segment.get_field_as_string(field_index, self.delimiters)

    def to_string(self, pretty: bool = False) -> str:
        """Render every segment, each followed by the terminator (or newline if pretty)."""
        delimiters = self.delimiters
        end = PRETTY_TERMINATOR if pretty else delimiters.terminator
        return "".join(segment.to_string(delimiters) + end for segment in self._segments)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        names = ",".join(seg.name for seg in self._segments)
        return f"Message([{names}])"


__all__ = ["Message"]
