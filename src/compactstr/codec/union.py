"""Discriminated union codec."""

from __future__ import annotations

import logging
import reprlib
from collections.abc import Sequence
from typing import Any

from ..exceptions import DecodeError, EncodeError, SchemaError
from .base import Codec, RawCodec, create_type, ensure_codec
from .primitives import integer_type

logger = logging.getLogger(__name__)


@create_type
def one_of_type(candidates: Sequence[Codec]) -> RawCodec:
    """Union of alternative codecs, prefixed by the index of the one used.

    Candidates are tried in list order and the first one that accepts the
    value wins, even when a later one would be shorter or more specific.
    Put overlapping candidates in the order you want them matched.

    The index is a fixed-width integer sized for len(candidates) - 1, so
    37 candidates need two base-36 digits and 1297 need three.

    Args:
        candidates: Non-empty sequence of codecs

    Raises:
        SchemaError: If candidates is empty or holds a non-codec

    Example:
        >>> flag = one_of_type([constant(None), constant(False), constant(True)])
        >>> flag.serialize(True)
        '2'
    """
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, Sequence):
        raise SchemaError("one_of_type: candidates must be a sequence of codecs")
    options = [
        ensure_codec(codec, f"one_of_type candidate {i}") for i, codec in enumerate(candidates)
    ]
    if not options:
        raise SchemaError("one_of_type: at least one candidate is required")

    discriminator = integer_type(len(options) - 1)

    def serialize(value: Any) -> str:
        for index, codec in enumerate(options):
            try:
                body = codec.serialize_part(value)
            except EncodeError as err:
                logger.debug("one_of_type: candidate %d rejected value: %s", index, err)
                continue
            return discriminator.serialize_part(index) + body
        raise EncodeError(
            f"one_of_type: none of {len(options)} candidates accepted {reprlib.repr(value)}"
        )

    def deserialize(text: str) -> tuple[Any, int]:
        index, head = discriminator.deserialize_part(text)
        if not 0 <= index < len(options):
            raise DecodeError(
                f"one_of_type: discriminator {index} out of range for {len(options)} candidates"
            )
        value, body = options[index].deserialize_part(text[head:])
        return value, head + body

    return RawCodec(serialize, deserialize)
