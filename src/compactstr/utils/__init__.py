"""Utility functions for compactstr.

This module provides helpers for measuring encoded output.
"""

from __future__ import annotations

from .sizing import encoded_length, field_lengths

__all__ = [
    "encoded_length",
    "field_lengths",
]
