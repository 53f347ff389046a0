"""Codec objects and the factories that build them.

A codec has two layers. The composable layer (serialize_part/deserialize_part)
writes and reads a self-delimiting segment and reports how many characters it
consumed; composite codecs thread the unconsumed remainder between children
through it. The top layer (serialize/deserialize) wraps it for application
code: trailing terminators are dropped from the output and unconsumed input
is ignored.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..config import get_settings
from ..exceptions import SchemaError

logger = logging.getLogger(__name__)

SerializeFn = Callable[[Any], str]
DeserializeFn = Callable[[str], "tuple[Any, int]"]


@dataclass(frozen=True)
class RawCodec:
    """Raw serialize/deserialize pair produced by a codec factory.

    Attributes:
        serialize: Maps a value to its composable text segment
        deserialize: Maps text to (value, consumed length)
    """

    serialize: Optional[SerializeFn] = None
    deserialize: Optional[DeserializeFn] = None


class Codec:
    """Bidirectional mapping between values and compact text.

    Codecs are built once, when the schema is defined, and hold no state
    between calls. Instances are deliberately not callable so that template()
    can tell a codec from a producer of one.

    Example:
        >>> point = object_of({"x": integer_type(), "y": integer_type()})
        >>> point.serialize({"x": 10, "y": 35})
        'a$z'
        >>> point.deserialize("a$z")
        {'x': 10, 'y': 35}
    """

    __slots__ = ("_raw", "name")

    def __init__(self, raw: RawCodec, name: str = "codec") -> None:
        self._raw = raw
        self.name = name

    def serialize(self, value: Any) -> str:
        """Serialize a value, dropping trailing terminators.

        Args:
            value: Value accepted by this codec

        Returns:
            Compact text (possibly empty)

        Raises:
            EncodeError: If the value does not fit the schema
        """
        terminator = get_settings().terminator
        return self.serialize_part(value).rstrip(terminator)

    def deserialize(self, text: str) -> Any:
        """Reconstruct a value; unconsumed trailing text is ignored."""
        value, _ = self.deserialize_part(text)
        return value

    def serialize_part(self, value: Any) -> str:
        """Serialize a value as a composable segment."""
        if self._raw.serialize is None:
            raise SchemaError(f"{self.name} does not support serialization")
        return self._raw.serialize(value)

    def deserialize_part(self, text: str) -> tuple[Any, int]:
        """Read a composable segment from the head of text.

        Returns:
            Tuple of (value, number of characters consumed)
        """
        if self._raw.deserialize is None:
            raise SchemaError(f"{self.name} does not support deserialization")
        return self._raw.deserialize(text)

    def __repr__(self) -> str:
        return f"<Codec {self.name}>"


def create_type(factory: Callable[..., RawCodec]) -> Callable[..., Codec]:
    """Turn a raw codec factory into a codec constructor.

    Usable as a decorator. The factory receives the constructor's arguments
    and returns a RawCodec whose functions work on the composable layer.

    Args:
        factory: Function building a RawCodec from schema parameters

    Returns:
        Constructor returning Codec instances

    Example:
        >>> @create_type
        ... def boolean_type() -> RawCodec:
        ...     flags = one_of_type([constant(False), constant(True)])
        ...     return RawCodec(flags.serialize_part, flags.deserialize_part)
    """
    name = getattr(factory, "__name__", "codec")

    @functools.wraps(factory)
    def constructor(*args: Any, **kwargs: Any) -> Codec:
        raw = factory(*args, **kwargs)
        if not isinstance(raw, RawCodec):
            raise SchemaError(f"{name} must return a RawCodec, got {type(raw).__name__}")
        return Codec(raw, name)

    return constructor


Token = Union[Codec, Callable[[], Codec]]


def ensure_codec(candidate: Any, owner: str) -> Codec:
    """Check that a schema child is a codec.

    Raises:
        SchemaError: If candidate is not a Codec
    """
    if not isinstance(candidate, Codec):
        raise SchemaError(f"{owner}: expected a codec, got {type(candidate).__name__}")
    return candidate


def resolve_token(token: Token) -> Codec:
    """Return the codec a template token stands for right now."""
    if isinstance(token, Codec):
        return token
    if callable(token):
        return ensure_codec(token(), "template")
    raise SchemaError(f"template: token must be a codec or a producer, got {type(token).__name__}")


def template(build: Callable[..., Codec]) -> Callable[..., Codec]:
    """Build a lazily resolved, parameterized codec constructor.

    The returned constructor takes tokens, each a codec or a zero-argument
    function returning one. Producers are called again on every serialize or
    deserialize, and build() is applied to the resolved codecs only then, so
    a schema can refer to itself one level at a time. Recursion ends only if
    the schema has a non-recursive arm, such as constant(None) in a union.

    Args:
        build: Function from resolved codecs to a codec

    Returns:
        Constructor accepting tokens

    Example:
        >>> nullable = template(lambda inner: one_of_type([constant(None), inner]))
        >>> node = object_of({"val": string_type(), "next": nullable(lambda: node)})
        >>> node.deserialize(node.serialize({"val": "a", "next": None}))
        {'val': 'a', 'next': None}
    """
    label = getattr(build, "__name__", "template")

    def lazy(*tokens: Token) -> Codec:
        for token in tokens:
            if not isinstance(token, Codec) and not callable(token):
                raise SchemaError(
                    f"template: token must be a codec or a producer, got {type(token).__name__}"
                )

        def current() -> Codec:
            resolved = [resolve_token(token) for token in tokens]
            logger.debug("Resolving template %s with %d token(s)", label, len(resolved))
            return ensure_codec(build(*resolved), label)

        return Codec(
            RawCodec(
                serialize=lambda value: current().serialize_part(value),
                deserialize=lambda text: current().deserialize_part(text),
            ),
            f"template({label})",
        )

    return lazy
