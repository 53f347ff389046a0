"""Exception hierarchy for compactstr.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CompactStrError for easy catching of any
compactstr-specific error.
"""

from __future__ import annotations


class CompactStrError(Exception):
    """Base exception for all compactstr errors."""

    pass


class SchemaError(CompactStrError):
    """Raised when a codec is constructed or composed incorrectly.

    Examples:
        - Negative fixed length
        - Empty candidate list for a union
        - A child that is not a codec
        - A dependent field read before the field it depends on
    """

    pass


class EncodeError(CompactStrError):
    """Raised when a value cannot be serialized.

    This is the single failure signal of every codec: wrong value kind,
    fixed-length mismatch, out-of-range integer, missing record field and
    no matching union candidate all raise it. The message is diagnostic
    only; callers should rely on the type alone.
    """

    pass


class DecodeError(CompactStrError):
    """Raised when text cannot be mapped back onto the schema.

    Examples:
        - Union discriminator pointing past the last candidate
    """

    pass


class ConfigurationError(CompactStrError):
    """Raised when configure() receives unusable options.

    Examples:
        - Terminator that is not exactly one printable character
        - Escape function that leaves the terminator unescaped
    """

    pass
