"""HL7 v2.x codec facade for hl7codec."""

from hl7codec.codec.parser import (
    HL7Codec,
    field_to_string,
    parse_hl7_message,
    segment_to_string,
    serialize_hl7_message,
)

__all__ = [
    "HL7Codec",
    "parse_hl7_message",
    "serialize_hl7_message",
    "segment_to_string",
    "field_to_string",
]
