"""Explicit value-kind classification.

Codecs decide whether they accept a value by its kind rather than by probing
attributes, so that bool never passes for a number and str never passes for
a sequence.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any


class ValueKind(enum.Enum):
    """Kinds of values the codecs distinguish."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    TEXT = "text"
    RECORD = "record"
    SEQUENCE = "sequence"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    Args:
        value: Any Python value

    Returns:
        The ValueKind of the value. Floats are NUMBER even when integral;
        use is_whole_number() to accept them as integers.
    """
    if value is None:
        return ValueKind.NULL
    # bool subclasses int, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER


def is_numeric(value: Any) -> bool:
    """True for int and float values (never bool)."""
    return kind_of(value) in (ValueKind.INTEGER, ValueKind.NUMBER)


def is_whole_number(value: Any) -> bool:
    """True for ints and for finite floats without a fractional part."""
    kind = kind_of(value)
    if kind is ValueKind.INTEGER:
        return True
    return kind is ValueKind.NUMBER and value.is_integer()
