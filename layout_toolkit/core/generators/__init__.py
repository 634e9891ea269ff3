from __future__ import annotations

"""Renderers consuming the structural tree (outline, component markup, HTML)."""

from .tag_mapping import TagMapping  # noqa: F401
from .tree_printer import print_tree  # noqa: F401
from .markup_emitter import MarkupEmitter, to_markup  # noqa: F401
from .html_builder import (  # noqa: F401
    build_html_document,
    save_html_preview,
    style_to_css,
    to_html,
    to_html_fragment,
    xml_safe,
)

__all__ = [
    "TagMapping",
    "print_tree",
    "MarkupEmitter",
    "to_markup",
    "build_html_document",
    "save_html_preview",
    "style_to_css",
    "to_html",
    "to_html_fragment",
    "xml_safe",
]
