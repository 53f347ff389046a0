#!/usr/bin/env python3
"""Recursive search-query example for compactstr.

This example demonstrates:
1. Self-referential schemas with template()
2. Field-dependent value codecs with with_calculated_type()
3. Carrying the result in a URL query string
"""

from __future__ import annotations

from urllib.parse import urlencode

from compactstr import (
    array_of_type,
    constant,
    integer_type,
    map_of,
    number_type,
    object_of,
    one_of_type,
    string_type,
    template,
    with_calculated_type,
)


def value_type(field: str):
    """Codec for the values stored in a field."""
    if field == "id":
        return integer_type()
    if field == "price":
        return number_type()
    return string_type()


ProductField = one_of_type(
    [constant("id"), constant("name"), constant("price"), constant("category")]
)

Term = with_calculated_type(
    value_type,
    lambda bind_from, value: map_of(bind_from(ProductField), value),
)

list_of = template(lambda query: array_of_type(query))

# A query is a term, or a list of queries that must all match, or any of them.
Query = one_of_type(
    [
        object_of({"term": Term}),
        object_of({"all": list_of(lambda: Query)}),
        object_of({"any": list_of(lambda: Query)}),
    ]
)


def main() -> None:
    """Run the recursive query example."""
    print("=" * 60)
    print("compactstr Recursive Query Example")
    print("=" * 60)
    print()

    query = {
        "all": [
            {"term": {"category": "Tablets"}},
            {"any": [{"term": {"price": 199.5}}, {"term": {"id": 1042}}]},
        ]
    }

    text = Query.serialize(query)
    url = "https://shop.example/search?" + urlencode({"q": text}, safe="$!~*'()%")
    print(f"1. Serialized: {text} ({len(text)} characters)")
    print(f"2. URL: {url}")

    received = url.split("q=", 1)[1]
    decoded = Query.deserialize(received)
    print(f"3. Decoded: {decoded}")
    print(f"   Match: {decoded == query}")
    print()


if __name__ == "__main__":
    main()
