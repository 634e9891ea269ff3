from __future__ import annotations

"""Component-markup (JSX-style) emitter.

Turns a tree into nested tag text::

    <div id="e1" style={{"position":"absolute","left":"5px"}}>
      <span>
        "Hi"
      </span>
    </div>

Tags go through the emitter's :class:`TagMapping`; ``style`` and other
mapping-valued attributes are written as JSON object expressions; every other
attribute is a quoted string.
"""

import json
from collections.abc import Mapping
from typing import Any, Optional, Sequence

from layout_toolkit.core.generators.tag_mapping import TagMapping
from layout_toolkit.core.models import TreeItem, TreeNode

__all__ = ["MarkupEmitter", "to_markup"]


def _json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class MarkupEmitter:
    """Stateless renderer owning an immutable tag mapping."""

    def __init__(self, tag_mapping: Optional[TagMapping] = None) -> None:
        self.tag_mapping = tag_mapping or TagMapping.from_config()

    def to_markup(self, tree: Sequence[TreeItem], indent: int = 0) -> str:
        spaces = "  " * indent
        out = []
        for node in tree:
            if not isinstance(node, TreeNode):
                out.append(f"{spaces}{_json(node)}\n")
                continue

            tag = self.tag_mapping.resolve(node.tag)
            out.append(f"{spaces}<{tag}{self._attributes(node)}")
            if node.children:
                out.append(">\n")
                out.append(self.to_markup(node.children, indent + 1))
                out.append(f"{spaces}</{tag}>\n")
            else:
                out.append(" />\n")
        return "".join(out)

    @staticmethod
    def _attributes(node: TreeNode) -> str:
        if not node.attributes:
            return ""
        parts = []
        for key, value in node.attributes.items():
            if isinstance(value, Mapping):
                parts.append(f" {key}={{{_json(dict(value))}}}")
            else:
                text = "" if value is None else str(value)
                parts.append(f' {key}="{text.replace(chr(34), "&quot;")}"')
        return "".join(parts)


def to_markup(tree: Sequence[TreeItem], indent: int = 0,
              tag_mapping: Optional[TagMapping] = None) -> str:
    """Render *tree* with a one-off :class:`MarkupEmitter`."""
    return MarkupEmitter(tag_mapping).to_markup(tree, indent)
