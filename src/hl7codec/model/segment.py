"""HL7 segment: a named, ordered list of field values."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from hl7codec.common.constants import HEADER_SEGMENTS, SEGMENT_NAME_PATTERN
from hl7codec.common.errors import InvalidSegmentNameError
from hl7codec.model.delimiters import DelimiterSet
from hl7codec.model.field import (
    FieldValue,
    normalize_field,
    parse_field,
    render_field,
    split_escaped,
)

logger = logging.getLogger(__name__)


class Segment:
    """A single HL7 segment (e.g., MSH, PID, OBX).

    Field indices are 1-based (HL7 convention). For header segments field 1
    is the field separator and field 2 the encoding characters; both are
    kept verbatim.
    """

    def __init__(self, name: str, fields: Iterable[Any] | None = None) -> None:
        if not isinstance(name, str) or not SEGMENT_NAME_PATTERN.fullmatch(name):
            raise InvalidSegmentNameError(str(name))
        self._name = name
        self._fields: list[FieldValue] = [normalize_field(value) for value in fields or ()]

    @classmethod
    def parse(cls, text: str, delimiters: DelimiterSet) -> Segment:
        """Build a segment from one line of segment text.

        A trailing field separator does not produce an extra empty field.

        Raises:
            InvalidSegmentNameError: If the leading token is not a segment name.
        """
        name, has_fields, rest = text.partition(delimiters.field)
        name = name.strip()
        fields: list[str] = []
        if name in HEADER_SEGMENTS:
            encoding, has_fields, rest = rest.partition(delimiters.field)
            fields = [delimiters.field, encoding]
        segment = cls(name, fields)
        if has_fields:
            raw_fields = split_escaped(rest, delimiters.field, delimiters.escape)
            if raw_fields[-1] == "":
                raw_fields.pop()
            segment._fields.extend(parse_field(raw, delimiters) for raw in raw_fields)
        return segment

    @property
    def name(self) -> str:
        return self._name

    def get_name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        """Number of fields, not counting the name."""
        return len(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def is_header(self) -> bool:
        return self._name in HEADER_SEGMENTS

    def get_field(self, index: int) -> FieldValue | None:
        """Get field by 1-based index; ``None`` when absent."""
        if index < 1 or index > len(self._fields):
            return None
        return self._fields[index - 1]

    def set_field(self, index: int, value: Any) -> bool:
        """Set field by 1-based index, padding any gap with empty fields.

        Returns ``False`` without changing the segment when ``index < 1``.

        Raises:
            FieldNestingError: If ``value`` cannot be rendered with the
                component and subcomponent separators.
        """
        if index < 1:
            logger.warning("Ignoring set_field(%d) on %s: field indices start at 1", index, self._name)
            return False
        normalized = normalize_field(value)
        if index > len(self._fields):
            self._fields.extend("" for _ in range(index - len(self._fields)))
        self._fields[index - 1] = normalized
        return True

    def get_fields(self, start: int = 1, end: int | None = None) -> list[FieldValue]:
        """Fields ``start`` to ``end`` inclusive (1-based)."""
        start = max(start, 1)
        stop = len(self._fields) if end is None else end
        return self._fields[start - 1 : stop]

    def resolve_delimiters(self, base: DelimiterSet | None = None) -> DelimiterSet:
        """Delimiters this segment declares on top of ``base`` (defaults if omitted)."""
        if base is None:
            base = DelimiterSet.default()
        if not self.is_header:
            return base
        return DelimiterSet.from_header(self.get_field(1), self.get_field(2), base=base)

    @property
    def delimiters(self) -> DelimiterSet:
        return self.resolve_delimiters()

    def get_field_as_string(self, index: int, delimiters: DelimiterSet | None = None) -> str | None:
        """Render one field without name prefix or trailing separator."""
        value = self.get_field(index)
        if value is None:
            return None
        if self.is_header and index <= 2 and isinstance(value, str):
            return value
        return render_field(value, delimiters or self.delimiters)

    def to_string(self, delimiters: DelimiterSet | None = None) -> str:
        """Render the segment, every field followed by the field separator.

        Header segments skip field 1, since the separator after the name
        already is that field.
        """
        delimiters = delimiters or self.delimiters
        first = 2 if self.is_header else 1
        parts = [self._name]
        parts.extend(
            self.get_field_as_string(index, delimiters) or ""
            for index in range(first, len(self._fields) + 1)
        )
        return delimiters.field.join(parts) + delimiters.field

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Segment({self._name!r}, {self._fields!r})"


__all__ = ["Segment"]
