"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Callable, Iterator

import pytest

from compactstr import Codec, reset_configuration


@pytest.fixture(autouse=True)
def default_configuration() -> Iterator[None]:
    """Run every test against default settings and undo any configure()."""
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def spring() -> Callable[[Codec, Any], Any]:
    """Serialize then deserialize a value with the same codec."""

    def _spring(codec: Codec, value: Any) -> Any:
        return codec.deserialize(codec.serialize(value))

    return _spring
