from __future__ import annotations

"""Parsing helpers for markup fragments embedded in placed elements."""

from .fragment_parser import (  # noqa: F401
    DEFAULT_MAX_DEPTH,
    FragmentParser,
    has_markup,
    parse_attributes,
    parse_fragment,
    strip_markup,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "FragmentParser",
    "has_markup",
    "parse_attributes",
    "parse_fragment",
    "strip_markup",
]
