from __future__ import annotations

"""Conversion of stored placed elements into structural trees."""

from .normalizer import normalize, normalize_batch  # noqa: F401
from .tree_builder import (  # noqa: F401
    RESERVED_ATTRIBUTES,
    TreeBuilder,
    build_tree,
    compute_attributes,
    compute_style,
    prepare_markup,
)

__all__ = [
    "normalize",
    "normalize_batch",
    "RESERVED_ATTRIBUTES",
    "TreeBuilder",
    "build_tree",
    "compute_attributes",
    "compute_style",
    "prepare_markup",
]
