"""Unit tests for the codec object and create_type()."""

from __future__ import annotations

import pytest

from compactstr import (
    Codec,
    RawCodec,
    SchemaError,
    ValueKind,
    constant,
    create_type,
    encoded_length,
    field_lengths,
    integer_type,
    kind_of,
    one_of_type,
    string_type,
)


@create_type
def boolean_type() -> RawCodec:
    """Booleans as a one-digit union index."""
    flags = one_of_type([constant(False), constant(True)])
    return RawCodec(flags.serialize_part, flags.deserialize_part)


@create_type
def upper_type() -> RawCodec:
    """Upper-case text, stored lower-case."""
    text = string_type()

    def serialize(value):
        return text.serialize_part(value.lower())

    def deserialize(source):
        value, taken = text.deserialize_part(source)
        return value.upper(), taken

    return RawCodec(serialize, deserialize)


class TestCreateType:
    """Test building custom codecs."""

    def test_custom_codec(self, spring) -> None:
        """Test a codec built from other codecs."""
        assert boolean_type().serialize(True) == "1"
        assert spring(boolean_type(), False) is False

    def test_trailing_terminator_stripped(self, spring) -> None:
        """Test custom codecs get the top-level trimming."""
        codec = upper_type()
        assert codec.serialize_part("ABC") == "abc$"
        assert codec.serialize("ABC") == "abc"
        assert spring(codec, "ABC") == "ABC"

    def test_name_and_repr(self) -> None:
        """Test codecs are labelled by their factory."""
        assert integer_type().name == "integer_type"
        assert repr(boolean_type()) == "<Codec boolean_type>"
        assert boolean_type.__name__ == "boolean_type"

    def test_codecs_are_not_callable(self) -> None:
        """Test codecs and producers stay distinguishable."""
        assert not callable(string_type())

    def test_factory_must_return_raw_codec(self) -> None:
        """Test factories are checked."""
        bogus = create_type(lambda: "nope")
        with pytest.raises(SchemaError):
            bogus()

    def test_missing_direction(self) -> None:
        """Test one-directional codecs refuse the other direction."""
        write_only = Codec(RawCodec(serialize=lambda value: "x"))
        assert write_only.serialize(1) == "x"
        with pytest.raises(SchemaError):
            write_only.deserialize("x")

    def test_unconsumed_text_ignored(self) -> None:
        """Test top-level deserialize ignores leftovers."""
        assert integer_type(35).deserialize("zextra") == 35


class TestKinds:
    """Test value-kind classification."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, ValueKind.NULL),
            (True, ValueKind.BOOLEAN),
            (3, ValueKind.INTEGER),
            (3.0, ValueKind.NUMBER),
            ("3", ValueKind.TEXT),
            ({"a": 1}, ValueKind.RECORD),
            ([1], ValueKind.SEQUENCE),
            ((1,), ValueKind.SEQUENCE),
            (b"3", ValueKind.OTHER),
            ({1}, ValueKind.OTHER),
        ],
    )
    def test_kind_of(self, value, kind) -> None:
        """Test each kind is recognized."""
        assert kind_of(value) is kind


class TestSizing:
    """Test sizing helpers."""

    def test_encoded_length(self) -> None:
        """Test length after trimming."""
        assert encoded_length(integer_type(100), 7) == 2
        assert encoded_length(string_type(), "abc") == 3

    def test_field_lengths(self) -> None:
        """Test per-field segment lengths."""
        schema = {"name": string_type(), "age": integer_type(200)}
        assert field_lengths(schema, {"name": "Ann", "age": 42}) == {"name": 4, "age": 2}
