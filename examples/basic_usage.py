#!/usr/bin/env python3
"""Basic usage example for compactstr.

This example demonstrates:
1. Composing a schema from combinators
2. Serializing a value to compact text
3. Deserializing it back
4. Measuring the encoded size per field
"""

from __future__ import annotations

import json

from pydantic import BaseModel, Field

from compactstr import (
    constant,
    field_lengths,
    integer_type,
    number_type,
    object_of,
    one_of_type,
    string_type,
)


class ListingState(BaseModel):
    """Product listing state shown in a page URL.

    The model validates values before they reach the codec.
    """

    page: int = Field(ge=0, description="Zero-based page number")
    page_size: int = Field(description="Results per page (10, 50 or 100)")
    search: str = Field(default="", description="Free-text search")
    min_price: float | None = Field(default=None, description="Lower price bound")


SCHEMA = {
    "page": integer_type(),
    "page_size": one_of_type([constant(10), constant(50), constant(100)]),
    "search": string_type(),
    "min_price": one_of_type([constant(None), number_type()]),
}

ListingCodec = object_of(SCHEMA)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("compactstr Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a listing state...")
    state = ListingState(page=12, page_size=50, search="red shoes", min_price=19.99)
    value = state.model_dump()
    for name, field_value in value.items():
        print(f"   {name}: {field_value!r}")
    print()

    print("2. Analyzing field lengths...")
    for name, length in field_lengths(SCHEMA, value).items():
        print(f"   {name}: {length} characters")
    print()

    print("3. Serializing...")
    text = ListingCodec.serialize(value)
    print(f"   Text: {text}")
    print(f"   Length: {len(text)} characters")
    print(f"   JSON would take: {len(json.dumps(value, separators=(',', ':')))} characters")
    print()

    print("4. Deserializing...")
    decoded = ListingState.model_validate(ListingCodec.deserialize(text))
    print(f"   Decoded: {decoded!r}")
    print(f"   Match: {decoded == state}")
    print()


if __name__ == "__main__":
    main()
