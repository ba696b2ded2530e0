#!/usr/bin/env python3
"""
Structural record helpers shared by the position decoders.

A serialized position is a flat JSON object whose field set identifies its
encoding. These helpers parse the object and enforce the exact field set and
the field types before a decoder builds a position from it.
"""

from typing import Any, Mapping, Sequence, Union
import json
import logging

from .exceptions import MalformedRecord, MissingField, WrongFieldType

logger = logging.getLogger(__name__)

RawRecord = Union[str, bytes, bytearray, Mapping[str, Any]]


def parse_record(raw: RawRecord) -> Mapping[str, Any]:
    """
    Parse a serialized record into a mapping.

    Args:
        raw: JSON text, or a mapping that has already been parsed

    Returns:
        The record as a mapping of field names to values

    Raises:
        MalformedRecord: If the text is not valid JSON or is not a JSON object
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MalformedRecord(f"Invalid JSON record: {e}") from e

    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"Record must be a JSON object, got {type(raw).__name__}")

    return raw


def load_record(
    raw: RawRecord, encoding: str, fields: Sequence[str]
) -> Mapping[str, Any]:
    """
    Parse a record and check that it holds exactly the given fields.

    Args:
        raw: JSON text or parsed mapping
        encoding: Name of the encoding, used in error messages
        fields: The field names the encoding requires

    Returns:
        The parsed record

    Raises:
        MalformedRecord: If the record is not an object or has a different field count
        MissingField: If one of the required fields is absent
    """
    record = parse_record(raw)

    if len(record) > len(fields):
        raise MalformedRecord(f"Too many fields for {encoding}")
    if len(record) < len(fields):
        raise MalformedRecord(f"Not enough fields for {encoding}")

    for field in fields:
        if field not in record:
            raise MissingField(field, encoding)

    return record


def is_number(value: Any) -> bool:
    """Return True for int and float values. bool is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_number(record: Mapping[str, Any], field: str, encoding: str) -> float:
    """Return a numeric field as a float, or raise WrongFieldType."""
    value = record[field]
    if not is_number(value):
        raise WrongFieldType(field, encoding, value)
    try:
        return float(value)
    except OverflowError as e:
        # JSON integers are unbounded; floats are not
        raise WrongFieldType(field, encoding, value) from e


def require_integral(record: Mapping[str, Any], field: str, encoding: str) -> int:
    """
    Return an integer-valued numeric field as an int.

    Floats are accepted when their fractional part is zero (JSON numbers such
    as ``31.0``); any other value raises WrongFieldType.
    """
    value = record[field]
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise WrongFieldType(field, encoding, value)


def require_string(record: Mapping[str, Any], field: str, encoding: str) -> str:
    """Return a string field, or raise WrongFieldType."""
    value = record[field]
    if not isinstance(value, str):
        raise WrongFieldType(field, encoding, value)
    return value
