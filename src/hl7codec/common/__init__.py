"""Common constants, configuration and errors for hl7codec."""

from hl7codec.common.config import HL7CodecConfig, get_config
from hl7codec.common.constants import (
    ENCODING_CHARACTERS,
    FIELD_SEPARATOR,
    HEADER_SEGMENTS,
    SEGMENT_TERMINATOR,
    EscapeCode,
)
from hl7codec.common.errors import (
    FieldNestingError,
    HL7Error,
    InvalidSegmentNameError,
    MalformedMessageError,
)

__all__ = [
    "HL7CodecConfig",
    "get_config",
    "SEGMENT_TERMINATOR",
    "FIELD_SEPARATOR",
    "ENCODING_CHARACTERS",
    "HEADER_SEGMENTS",
    "EscapeCode",
    "HL7Error",
    "MalformedMessageError",
    "InvalidSegmentNameError",
    "FieldNestingError",
]
