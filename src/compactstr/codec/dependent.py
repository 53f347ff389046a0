"""Dependent-field codec: one field's value picks another field's codec.

Every top-level serialize or deserialize of a with_calculated_type codec
allocates a fresh _Binding, builds the schema against it and runs it once.
The source field records its value on the binding; the dependent field
reads it back and asks the selector for a codec. Nothing is shared between
calls, so concurrent or reentrant use of the same codec is safe.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..exceptions import SchemaError
from .base import Codec, RawCodec, create_type, ensure_codec

logger = logging.getLogger(__name__)

Selector = Callable[[Any], Codec]
BindFrom = Callable[[Codec], Codec]
Build = Callable[[BindFrom, Codec], Codec]

_UNSET = object()


class _Binding:
    """Value captured from the source field during a single call."""

    def __init__(self, selector: Selector) -> None:
        self._selector = selector
        self._value: Any = _UNSET

    def bind_from(self, source: Codec) -> Codec:
        """Wrap source so that every value it handles is captured."""
        source = ensure_codec(source, "with_calculated_type bind_from")

        def serialize(value: Any) -> str:
            self._value = value
            return source.serialize_part(value)

        def deserialize(text: str) -> tuple[Any, int]:
            value, taken = source.deserialize_part(text)
            self._value = value
            return value, taken

        return Codec(RawCodec(serialize, deserialize), f"bind_from({source.name})")

    def derived(self) -> Codec:
        """Codec that delegates to selector(captured value) when used."""
        return Codec(
            RawCodec(
                serialize=lambda value: self.select().serialize_part(value),
                deserialize=lambda text: self.select().deserialize_part(text),
            ),
            "derived",
        )

    def select(self) -> Codec:
        if self._value is _UNSET:
            raise SchemaError(
                "with_calculated_type: the derived field was processed before the "
                "field wrapped with bind_from"
            )
        codec = self._selector(self._value)
        logger.debug("with_calculated_type: %r selected %r", self._value, codec)
        return ensure_codec(codec, "with_calculated_type selector")


@create_type
def with_calculated_type(selector: Selector, build: Build) -> RawCodec:
    """Codec whose inner schema has a field typed by another field's value.

    build(bind_from, derived) must return the schema. Wrap the determining
    field's codec with bind_from and use derived where the dependent codec
    goes; the wrapped field has to come first in processing order (for
    object_of, earlier in the schema mapping).

    Args:
        selector: Maps the captured value to the codec for the dependent field
        build: Composes the schema from bind_from and the derived codec

    Raises:
        SchemaError: At call time, if the derived field is reached before
            any value was captured

    Example:
        >>> tagged = with_calculated_type(
        ...     lambda tag: integer_type() if tag == "int" else string_type(),
        ...     lambda bind_from, payload: object_of(
        ...         {"tag": bind_from(string_type()), "payload": payload}
        ...     ),
        ... )
        >>> tagged.serialize({"tag": "int", "payload": 35})
        'int$z'
    """
    if not callable(selector) or not callable(build):
        raise SchemaError("with_calculated_type: selector and build must be callable")

    def schema() -> Codec:
        binding = _Binding(selector)
        return ensure_codec(build(binding.bind_from, binding.derived()), "with_calculated_type")

    def serialize(value: Any) -> str:
        return schema().serialize_part(value)

    def deserialize(text: str) -> tuple[Any, int]:
        return schema().deserialize_part(text)

    return RawCodec(serialize, deserialize)
