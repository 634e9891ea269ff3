from __future__ import annotations

"""Indented text outline of a tree, for logs and diagnostics."""

from typing import Sequence

from layout_toolkit.core.models import TreeItem, TreeNode

__all__ = ["print_tree"]


def print_tree(tree: Sequence[TreeItem], indent: int = 0) -> str:
    """Return one line per node: ``tag (attr, keys)`` or ``"text"``.

    Children are printed two spaces deeper than their parent.
    """
    spaces = "  " * indent
    lines = []
    for node in tree:
        if isinstance(node, TreeNode):
            line = f"{spaces}{node.tag}"
            if node.attributes:
                line += f" ({', '.join(node.attributes)})"
            lines.append(line + "\n")
            if node.children:
                lines.append(print_tree(node.children, indent + 1))
        else:
            lines.append(f'{spaces}"{node}"\n')
    return "".join(lines)
