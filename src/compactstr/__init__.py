"""compactstr: compact, bidirectional text codecs built from combinators.

Compose a schema out of small codecs once, then turn structured values into
short printable strings and back. Designed for places where every character
counts, such as query state carried in a URL.

Key Features:
- Fixed and variable-length text, whole numbers, real numbers, constants
- Records, sequences, maps and discriminated unions
- Fields whose codec depends on another field's value
- Recursive schemas through lazily resolved templates
- Trailing terminators dropped from output without losing information

Quick Start:
    >>> from compactstr import integer_type, object_of, one_of_type, constant, string_type
    >>>
    >>> Query = object_of({
    ...     "page": integer_type(),
    ...     "size": one_of_type([constant(10), constant(100)]),
    ...     "search": string_type(),
    ... })
    >>> text = Query.serialize({"page": 3, "size": 100, "search": "red shoes"})
    >>> text
    '3$1red%20shoes'
    >>> Query.deserialize(text)
    {'page': 3, 'size': 100, 'search': 'red shoes'}
"""

from __future__ import annotations

from .codec import (
    Codec,
    RawCodec,
    ValueKind,
    array_of_type,
    constant,
    create_type,
    integer_type,
    kind_of,
    map_of,
    number_type,
    object_of,
    one_of_type,
    string_type,
    template,
    with_calculated_type,
)
from .config import Settings, configure, get_settings, reset_configuration
from .exceptions import (
    CompactStrError,
    ConfigurationError,
    DecodeError,
    EncodeError,
    SchemaError,
)
from .utils import encoded_length, field_lengths

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Codec",
    "RawCodec",
    "create_type",
    "template",
    # Primitive codecs
    "string_type",
    "integer_type",
    "number_type",
    "constant",
    # Composite codecs
    "object_of",
    "array_of_type",
    "map_of",
    "one_of_type",
    "with_calculated_type",
    # Value kinds
    "ValueKind",
    "kind_of",
    # Configuration
    "Settings",
    "configure",
    "get_settings",
    "reset_configuration",
    # Exceptions
    "CompactStrError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "ConfigurationError",
    # Sizing
    "encoded_length",
    "field_lengths",
    # Version
    "__version__",
]
