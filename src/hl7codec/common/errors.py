"""Exceptions raised by hl7codec.

Every error derives from ``HL7Error``, which is itself a ``ValueError`` so
callers that already guard parsing with ``except ValueError`` keep working.
Out-of-range segment mutations are not errors: they return ``False`` and
leave the message untouched.
"""


class HL7Error(ValueError):
    """Base exception for all hl7codec errors."""


class MalformedMessageError(HL7Error):
    """Raised when message text cannot be parsed.

    Example: the header declares ``|`` as field separator but the character
    after the encoding characters is ``*``.
    """

    def __init__(self, reason: str, segment_name: str | None = None) -> None:
        self.reason = reason
        self.segment_name = segment_name
        if segment_name:
            message = f"Malformed HL7 message (segment '{segment_name}'): {reason}"
        else:
            message = f"Malformed HL7 message: {reason}"
        super().__init__(message)


class InvalidSegmentNameError(HL7Error):
    """Raised when a segment name is not three upper-case alphanumerics."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid segment name '{name}'")


class FieldNestingError(HL7Error):
    """Raised when a field tree cannot be rendered with the available separators."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot render field: {reason}")


__all__ = [
    "HL7Error",
    "MalformedMessageError",
    "InvalidSegmentNameError",
    "FieldNestingError",
]
