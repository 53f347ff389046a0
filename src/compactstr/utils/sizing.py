"""Encoded size calculation utilities.

Output length depends on the value for every variable-length codec, so
these helpers measure a concrete value rather than a schema.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..codec.base import Codec
from ..exceptions import EncodeError


def encoded_length(codec: Codec, value: Any) -> int:
    """Calculate the length of a value's final serialization.

    Trailing terminators are already dropped, so this is the number of
    characters a caller actually has to store.

    Args:
        codec: Codec to serialize with
        value: Value to measure

    Returns:
        Number of characters

    Raises:
        EncodeError: If the codec rejects the value

    Example:
        >>> encoded_length(integer_type(100), 7)
        2
    """
    return len(codec.serialize(value))


def field_lengths(schema: Mapping[str, Codec], value: Mapping[str, Any]) -> dict[str, int]:
    """Calculate the per-field segment lengths of a record.

    Lengths are those of the composable segments, so a field ending in a
    terminator counts it even if the record serialization would trim it.

    Args:
        schema: The mapping passed to object_of()
        value: Record to measure

    Returns:
        Dictionary mapping field names to segment lengths, in schema order

    Raises:
        EncodeError: If a field is missing or rejected

    Example:
        >>> field_lengths({"name": string_type(), "age": integer_type(200)},
        ...               {"name": "Ann", "age": 42})
        {'name': 4, 'age': 2}
    """
    sizes: dict[str, int] = {}
    for name, codec in schema.items():
        if name not in value:
            raise EncodeError(f"field_lengths: missing field {name!r}")
        sizes[name] = len(codec.serialize_part(value[name]))
    return sizes
