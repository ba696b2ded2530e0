"""Exceptions raised while decoding and converting positions."""

from typing import Any, Dict, Optional


class PositionError(ValueError):
    """Base exception for position decoding and conversion errors."""

    pass


class DecodeError(PositionError):
    """Raised when a serialized record cannot be decoded as a position."""

    pass


class MalformedRecord(DecodeError):
    """Raised when a record is not an object or has the wrong number of fields."""

    pass


class MissingField(DecodeError):
    """Raised when a required field is absent from a record."""

    def __init__(self, field: str, encoding: str):
        self.field = field
        self.encoding = encoding
        super().__init__(f"Missing field '{field}' for {encoding}")


class WrongFieldType(DecodeError):
    """Raised when a field holds a value of the wrong type."""

    def __init__(self, field: str, encoding: str, value: Any = None):
        self.field = field
        self.encoding = encoding
        self.value = value
        super().__init__(
            f"Wrong type for field '{field}' for {encoding}: {value!r}"
        )


class OutOfRange(PositionError):
    """Raised when a geographic or projection bound is violated."""

    pass


class MissingZoneLetter(PositionError):
    """Raised when a UTM position without a zone letter is converted."""

    pass


class UnrecognizedEncoding(DecodeError):
    """Raised when a record matches none of the known position encodings.

    Attributes:
        record: The record that failed to decode
        errors: The error raised by each encoding's decoder, keyed by encoding name
    """

    def __init__(self, record: Any, errors: Optional[Dict[str, PositionError]] = None):
        self.record = record
        self.errors = dict(errors or {})
        super().__init__(f"Cannot decode position: {record!r}")


class TripFileError(ValueError):
    """Raised when a line of a trip file cannot be parsed."""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(f"line {line_number}: {message}")
