"""Message, segment and field value model."""

from hl7codec.model.delimiters import DelimiterSet, resolve_header_delimiters
from hl7codec.model.field import FieldValue, Repetitions, parse_field, render_field
from hl7codec.model.message import Message
from hl7codec.model.segment import Segment

__all__ = [
    "DelimiterSet",
    "resolve_header_delimiters",
    "FieldValue",
    "Repetitions",
    "parse_field",
    "render_field",
    "Message",
    "Segment",
]
