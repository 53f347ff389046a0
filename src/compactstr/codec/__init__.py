"""Combinator codecs for compact, delimiter-based text.

This package provides the codec object, the factories that build codecs,
and every primitive and composite combinator.
"""

from __future__ import annotations

from .base import Codec, RawCodec, create_type, template
from .composite import array_of_type, map_of, object_of
from .dependent import with_calculated_type
from .kinds import ValueKind, kind_of
from .primitives import constant, integer_type, number_type, string_type
from .union import one_of_type

__all__ = [
    "Codec",
    "RawCodec",
    "create_type",
    "template",
    "string_type",
    "integer_type",
    "number_type",
    "constant",
    "object_of",
    "array_of_type",
    "map_of",
    "one_of_type",
    "with_calculated_type",
    "ValueKind",
    "kind_of",
]
