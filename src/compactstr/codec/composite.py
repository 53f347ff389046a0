"""Composite codecs: fixed-shape records, sequences and maps.

Children are concatenated with no separators. Each child reports how much
text it consumed, and that alone marks where the next child starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..config import get_settings
from ..exceptions import EncodeError, SchemaError
from .base import Codec, RawCodec, create_type, ensure_codec
from .kinds import ValueKind, kind_of


@create_type
def object_of(schema: Mapping[str, Codec]) -> RawCodec:
    """Record codec with a fixed, ordered set of fields.

    Field order in the schema mapping is the order fields are written in.
    Every field is required; keys of the input outside the schema are
    ignored.

    Args:
        schema: Mapping from field name to codec

    Example:
        >>> person = object_of({"name": string_type(), "age": integer_type(200)})
        >>> person.serialize({"name": "Ann", "age": 42})
        'Ann$16'
    """
    if not isinstance(schema, Mapping):
        raise SchemaError(f"object_of: schema must be a mapping, got {type(schema).__name__}")
    fields = [
        (key, ensure_codec(codec, f"object_of field {key!r}")) for key, codec in schema.items()
    ]

    def serialize(value: Any) -> str:
        if kind_of(value) is not ValueKind.RECORD:
            raise EncodeError(f"object_of: expected a mapping, got {type(value).__name__}")
        parts = []
        for key, codec in fields:
            if key not in value:
                raise EncodeError(f"object_of: missing field {key!r}")
            parts.append(codec.serialize_part(value[key]))
        return "".join(parts)

    def deserialize(text: str) -> tuple[dict[str, Any], int]:
        record: dict[str, Any] = {}
        taken = 0
        for key, codec in fields:
            record[key], chunk = codec.deserialize_part(text[taken:])
            taken += chunk
        return record, taken

    return RawCodec(serialize, deserialize)


@create_type
def array_of_type(element: Codec, length: Optional[int] = None) -> RawCodec:
    """Homogeneous sequence codec.

    With a length, exactly that many elements are written back to back.
    Without one, the elements are followed by the terminator and decoding
    stops at a terminator or at the end of the input, so elements that
    encode to nothing or start with the terminator are rejected.

    Args:
        element: Codec for every element
        length: Exact element count, or None for variable length

    Example:
        >>> array_of_type(integer_type(9), 3).serialize([1, 2, 3])
        '123'
        >>> array_of_type(integer_type()).serialize([1, 2, 3])
        '1$2$3'
    """
    ensure_codec(element, "array_of_type")
    if length is not None and (kind_of(length) is not ValueKind.INTEGER or length < 0):
        raise SchemaError(f"array_of_type: length must be a non-negative int, got {length!r}")

    def serialize(value: Any) -> str:
        if kind_of(value) is not ValueKind.SEQUENCE:
            raise EncodeError(f"array_of_type: expected list or tuple, got {type(value).__name__}")
        if length is not None and len(value) != length:
            raise EncodeError(f"array_of_type: expected {length} elements, got {len(value)}")
        segments = [element.serialize_part(item) for item in value]
        if length is not None:
            return "".join(segments)
        terminator = get_settings().terminator
        for index, segment in enumerate(segments):
            # The decoder reads an empty or terminator-led segment as the end
            if not segment or segment.startswith(terminator):
                raise EncodeError(
                    f"array_of_type: element {index} encodes to {segment!r}, which would "
                    f"end a variable-length array"
                )
        return "".join(segments) + terminator

    def deserialize(text: str) -> tuple[list[Any], int]:
        items: list[Any] = []
        taken = 0

        def read_one() -> None:
            nonlocal taken
            item, chunk = element.deserialize_part(text[taken:])
            items.append(item)
            taken += chunk

        if length is not None:
            for _ in range(length):
                read_one()
            return items, taken

        terminator = get_settings().terminator
        while taken < len(text) and text[taken] != terminator:
            before = taken
            read_one()
            if taken == before:
                # Zero-width elements can never reach the terminator
                raise SchemaError(
                    "array_of_type: variable-length arrays need elements that consume input"
                )
        if taken < len(text):
            taken += 1
        return items, taken

    return RawCodec(serialize, deserialize)


def _hashable(key: Any) -> Any:
    if isinstance(key, list):
        return tuple(_hashable(item) for item in key)
    return key


@create_type
def map_of(key: Codec, value: Codec) -> RawCodec:
    """Dictionary codec written as a variable-length array of entries.

    Entries keep the mapping's iteration order. When decoding, a repeated
    key overwrites the earlier entry, and keys decoded as lists become
    tuples again so they stay hashable.

    Args:
        key: Codec for keys
        value: Codec for values

    Example:
        >>> scores = map_of(string_type(), integer_type())
        >>> scores.deserialize(scores.serialize({"a": 1, "bb": 22}))
        {'a': 1, 'bb': 22}
    """
    entries = array_of_type(object_of({"key": key, "value": value}))

    def serialize(mapping: Any) -> str:
        if kind_of(mapping) is not ValueKind.RECORD:
            raise EncodeError(f"map_of: expected a mapping, got {type(mapping).__name__}")
        return entries.serialize_part([{"key": k, "value": v} for k, v in mapping.items()])

    def deserialize(text: str) -> tuple[dict[Any, Any], int]:
        pairs, taken = entries.deserialize_part(text)
        return {_hashable(pair["key"]): pair["value"] for pair in pairs}, taken

    return RawCodec(serialize, deserialize)
