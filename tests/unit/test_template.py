"""Unit tests for lazily resolved templates and recursive schemas."""

from __future__ import annotations

import pytest

from compactstr import (
    SchemaError,
    constant,
    integer_type,
    number_type,
    object_of,
    one_of_type,
    string_type,
    template,
)

nullable = template(lambda inner: one_of_type([constant(None), inner]))


class TestTemplate:
    """Test parameterized and self-referential codecs."""

    @pytest.mark.parametrize(
        "value",
        [
            {"str": None, "num": None},
            {"str": "1234", "num": 1234},
            {"str": None, "num": 1234},
        ],
    )
    def test_nullable_fields(self, spring, value) -> None:
        """Test a template applied to concrete codecs."""
        codec = object_of({"str": nullable(string_type()), "num": nullable(number_type())})
        assert spring(codec, value) == value

    def test_recursive_template(self, spring) -> None:
        """Test a template that refers to itself."""
        recursive = template(
            lambda leaf: object_of({"val": leaf, "obj": nullable(recursive(leaf))})
        )
        codec = recursive(string_type())
        data = {
            "val": "qwer",
            "obj": {"val": "asdf", "obj": {"val": "zxcv", "obj": None}},
        }
        assert spring(codec, data) == data

    def test_self_reference_through_producer(self, spring) -> None:
        """Test a linked list built from a producer token."""
        node = object_of({"val": integer_type(), "next": nullable(lambda: node)})
        data = None
        for value in range(50):
            data = {"val": value, "next": data}
        assert spring(node, data) == data

    def test_producer_resolved_per_call(self) -> None:
        """Test producers are called again on every use."""
        current = {"codec": string_type()}
        codec = nullable(lambda: current["codec"])
        assert codec.serialize("ab") == "1ab"
        current["codec"] = integer_type()
        assert codec.serialize(35) == "1z"

    def test_build_called_lazily(self) -> None:
        """Test build runs on use, not on construction."""
        calls = []

        def build(inner):
            calls.append(inner)
            return inner

        lazy = template(build)(integer_type())
        assert calls == []
        lazy.serialize(1)
        lazy.deserialize("1")
        assert len(calls) == 2

    def test_invalid_tokens(self) -> None:
        """Test tokens must be codecs or producers of codecs."""
        with pytest.raises(SchemaError):
            nullable("text")
        with pytest.raises(SchemaError):
            nullable(lambda: "text").serialize("x")
