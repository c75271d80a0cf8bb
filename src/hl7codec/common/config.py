"""Codec configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from hl7codec.common.constants import (
    ENCODING_CHARACTERS,
    FIELD_SEPARATOR,
    SEGMENT_TERMINATOR,
)


class HL7CodecConfig(BaseSettings):
    """Default delimiters loaded from environment variables."""

    segment_terminator: str = Field(default=SEGMENT_TERMINATOR, min_length=1, max_length=1)
    field_separator: str = Field(default=FIELD_SEPARATOR, min_length=1, max_length=1)
    encoding_characters: str = Field(default=ENCODING_CHARACTERS, min_length=4, max_length=4)
    accept_newline_terminators: bool = True

    model_config = {"env_prefix": "HL7CODEC_", "case_sensitive": False}


@lru_cache(maxsize=1)
def get_config() -> HL7CodecConfig:
    """Return the process-wide configuration, loaded once."""
    return HL7CodecConfig()


__all__ = ["HL7CodecConfig", "get_config"]
