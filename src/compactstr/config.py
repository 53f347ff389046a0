"""Process-wide configuration consulted by every primitive codec.

Settings are read at call time, never captured when a codec is built, so
calling configure() changes the behavior of codecs that already exist.
Configure once, before building or using any codec, and leave the settings
alone afterwards if calls may run concurrently.
"""

from __future__ import annotations

import logging
from typing import Any, Callable
from urllib.parse import quote, unquote

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
URI_COMPONENT_SAFE = "!~*'()"


def escape_uri_component(text: str) -> str:
    """Percent-encode text the way a URI component is encoded."""
    return quote(text, safe=URI_COMPONENT_SAFE)


def unescape_uri_component(text: str) -> str:
    """Invert escape_uri_component()."""
    return unquote(text)


def integer_to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36.

    Args:
        value: Non-negative integer

    Returns:
        Base-36 text without leading zeros ("0" for zero)
    """
    if value == 0:
        return DIGITS[0]
    chars = []
    while value:
        value, digit = divmod(value, 36)
        chars.append(DIGITS[digit])
    return "".join(reversed(chars))


def base36_to_integer(text: str) -> int:
    """Parse base-36 text produced by integer_to_base36()."""
    return int(text, 36)


def number_to_text(value: int | float) -> str:
    """Shortest text that parses back to the same number."""
    if isinstance(value, int):
        return str(value)
    return repr(value)


def text_to_number(text: str) -> int | float:
    """Parse number text, preferring int when the text is integral."""
    try:
        return int(text)
    except ValueError:
        return float(text)


_SCALARS = (str, int, float, complex, bytes)
_NUMBERS = (int, float)


def strict_equals(a: Any, b: Any) -> bool:
    """Identity for objects, value equality for scalars of the same kind.

    Numbers compare by value, so 1 equals 1.0, but True never equals 1.
    """
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, _NUMBERS) and isinstance(b, _NUMBERS):
        return bool(a == b)
    if type(a) is not type(b) or not isinstance(a, _SCALARS):
        return False
    return bool(a == b)


class Settings(BaseModel):
    """Configuration record read by codecs at call time.

    Attributes:
        terminator: Character closing every variable-length run
        escape: Maps application text onto the output alphabet
        unescape: Inverse of escape
        integer_to_text: Radix encoder for non-negative integers
        text_to_integer: Inverse of integer_to_text
        number_to_text: Encoder for arbitrary numbers
        text_to_number: Inverse of number_to_text
        equals: Equality predicate used by constant()
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    terminator: str = Field(default="$", min_length=1, max_length=1)
    escape: Callable[[str], str] = escape_uri_component
    unescape: Callable[[str], str] = unescape_uri_component
    integer_to_text: Callable[[int], str] = integer_to_base36
    text_to_integer: Callable[[str], int] = base36_to_integer
    number_to_text: Callable[[Any], str] = number_to_text
    text_to_number: Callable[[str], Any] = text_to_number
    equals: Callable[[Any, Any], bool] = strict_equals

    @field_validator("terminator")
    @classmethod
    def _check_terminator(cls, value: str) -> str:
        if not value.isprintable() or value.isspace():
            raise ValueError(f"terminator must be a printable character, got {value!r}")
        return value

    def zero_digit(self) -> str:
        """Padding character for fixed-width integers."""
        return self.integer_to_text(0)


_settings = Settings()


def get_settings() -> Settings:
    """Return the live settings."""
    return _settings


def configure(
    *,
    terminator: str | None = None,
    escape: Callable[[str], str] | None = None,
    unescape: Callable[[str], str] | None = None,
    integer_to_text: Callable[[int], str] | None = None,
    text_to_integer: Callable[[str], int] | None = None,
    number_to_text: Callable[[Any], str] | None = None,
    text_to_number: Callable[[str], Any] | None = None,
    equals: Callable[[Any, Any], bool] | None = None,
) -> Settings:
    """Update the process-wide settings.

    Options left as None keep their current value. The change is global and
    applies to codecs that were built before the call.

    Args:
        terminator: Single printable character ending variable-length runs
        escape: Text escaping function
        unescape: Inverse of escape
        integer_to_text: Radix encoder
        text_to_integer: Radix decoder
        number_to_text: Number encoder
        text_to_number: Number decoder
        equals: Equality predicate for constant()

    Returns:
        The new live settings

    Raises:
        ConfigurationError: If an option is invalid, or if the escape function
            lets the terminator through unchanged

    Example:
        >>> from compactstr import string_type
        >>> _ = configure(terminator=",")
        >>> string_type().serialize("a,b")
        'a%2Cb'
        >>> _ = reset_configuration()
    """
    global _settings

    updates = {
        name: value
        for name, value in (
            ("terminator", terminator),
            ("escape", escape),
            ("unescape", unescape),
            ("integer_to_text", integer_to_text),
            ("text_to_integer", text_to_integer),
            ("number_to_text", number_to_text),
            ("text_to_number", text_to_number),
            ("equals", equals),
        )
        if value is not None
    }

    try:
        candidate = Settings(**{**dict(_settings), **updates})
    except ValidationError as err:
        raise ConfigurationError(f"Invalid configuration: {err}") from err

    if candidate.terminator in candidate.escape(candidate.terminator):
        raise ConfigurationError(
            f"escape() must encode the terminator {candidate.terminator!r}; "
            f"otherwise literal terminators in text corrupt field boundaries"
        )

    _settings = candidate
    logger.info("compactstr configuration updated: %s", ", ".join(sorted(updates)) or "no changes")
    return _settings


def reset_configuration() -> Settings:
    """Restore the default settings."""
    global _settings
    _settings = Settings()
    logger.debug("compactstr configuration reset to defaults")
    return _settings
