"""Leaf codecs: text, integers, numbers and constants.

Every function here reads the live settings when it runs, not when the
codec is built.
"""

from __future__ import annotations

import reprlib
from typing import Any, Optional

from ..config import get_settings
from ..exceptions import EncodeError, SchemaError
from .base import RawCodec, create_type
from .kinds import ValueKind, is_numeric, is_whole_number, kind_of


def _check_length(owner: str, length: Optional[int]) -> None:
    if length is None:
        return
    if kind_of(length) is not ValueKind.INTEGER or length < 0:
        raise SchemaError(f"{owner}: length must be a non-negative int, got {length!r}")


def _read_fixed(text: str, length: int) -> tuple[str, int]:
    """Take up to length characters; a shorter remainder is taken whole."""
    body = text[:length]
    return body, len(body)


def _read_terminated(text: str, terminator: str) -> tuple[str, int]:
    """Take characters up to the first terminator.

    A missing terminator means the run was trimmed off the end of the
    output, so the rest of the input is the body.
    """
    end = text.find(terminator)
    if end == -1:
        return text, len(text)
    return text[:end], end + 1


@create_type
def string_type(length: Optional[int] = None) -> RawCodec:
    """Text codec.

    With a length, the escaped text must be exactly that many characters and
    is written without a terminator. Without one, the escaped text is followed
    by the terminator.

    Args:
        length: Exact escaped length, or None for variable length

    Example:
        >>> string_type(4).serialize("qwer")
        'qwer'
        >>> string_type().serialize("a b")
        'a%20b'
    """
    _check_length("string_type", length)

    def serialize(value: Any) -> str:
        if kind_of(value) is not ValueKind.TEXT:
            raise EncodeError(f"string_type: expected str, got {type(value).__name__}")
        settings = get_settings()
        escaped = settings.escape(value)
        if length is None:
            return escaped + settings.terminator
        if len(escaped) != length:
            raise EncodeError(
                f"string_type: expected {length} characters after escaping, got {len(escaped)}"
            )
        return escaped

    def deserialize(text: str) -> tuple[str, int]:
        settings = get_settings()
        if length is None:
            body, taken = _read_terminated(text, settings.terminator)
        else:
            body, taken = _read_fixed(text, length)
        return settings.unescape(body), taken

    return RawCodec(serialize, deserialize)


def fixed_width(max_value: int) -> int:
    """Number of radix digits needed for every integer up to max_value."""
    return len(get_settings().integer_to_text(max_value))


@create_type
def integer_type(max_value: Optional[int] = None) -> RawCodec:
    """Non-negative whole number codec in the configured radix.

    With max_value, every value takes the same number of digits (left-padded
    with the zero digit) and values above max_value are rejected. Without it,
    the digits are terminated like variable-length text.

    Args:
        max_value: Largest accepted value, or None for unbounded

    Example:
        >>> integer_type(100).serialize(1)
        '01'
        >>> integer_type().serialize(1234)
        'ya'
    """
    if max_value is not None and (kind_of(max_value) is not ValueKind.INTEGER or max_value < 0):
        raise SchemaError(f"integer_type: max_value must be a non-negative int, got {max_value!r}")

    variable_text = string_type()

    def serialize(value: Any) -> str:
        if not is_whole_number(value) or value < 0:
            raise EncodeError(
                f"integer_type: expected a non-negative whole number, got {reprlib.repr(value)}"
            )
        value = int(value)
        settings = get_settings()
        digits = settings.integer_to_text(value)
        if max_value is None:
            return variable_text.serialize_part(digits)
        if value > max_value:
            raise EncodeError(f"integer_type: {value} exceeds maximum {max_value}")
        width = fixed_width(max_value)
        padded = digits.rjust(width, settings.zero_digit())
        return string_type(width).serialize_part(padded)

    def deserialize(text: str) -> tuple[int, int]:
        if max_value is None:
            digits, taken = variable_text.deserialize_part(text)
        else:
            digits, taken = string_type(fixed_width(max_value)).deserialize_part(text)
        return get_settings().text_to_integer(digits), taken

    return RawCodec(serialize, deserialize)


@create_type
def number_type() -> RawCodec:
    """Codec for any int or float: negative, fractional or exponential.

    Example:
        >>> number_type().serialize(-1.5)
        '-1.5'
    """
    text = string_type()

    def serialize(value: Any) -> str:
        if not is_numeric(value):
            raise EncodeError(f"number_type: expected int or float, got {type(value).__name__}")
        return text.serialize_part(get_settings().number_to_text(value))

    def deserialize(source: str) -> tuple[Any, int]:
        body, taken = text.deserialize_part(source)
        return get_settings().text_to_number(body), taken

    return RawCodec(serialize, deserialize)


@create_type
def constant(value: Any) -> RawCodec:
    """Codec for a single known value; it occupies no characters.

    Example:
        >>> constant(None).serialize(None)
        ''
        >>> constant("x").deserialize("anything")
        'x'
    """

    def serialize(candidate: Any) -> str:
        if not get_settings().equals(value, candidate):
            raise EncodeError(f"constant: expected {value!r}, got {reprlib.repr(candidate)}")
        return ""

    def deserialize(text: str) -> tuple[Any, int]:
        return value, 0

    return RawCodec(serialize, deserialize)
