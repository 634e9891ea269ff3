from __future__ import annotations

"""Shared data structures used across the Layout Toolkit core.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, CLI, editor hosts, etc.).
"""

import copy
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

__all__ = [
    "PlacedElement",
    "TreeNode",
    "TreeItem",
    "AttributePrecedence",
    "ParseOutcome",
    "Parsed",
    "Degraded",
    "BuildReport",
]


@dataclass
class PlacedElement:
    """A user-positioned markup fragment as stored by the layout editor.

    Attributes
    ----------
    markup
        Raw embedded fragment; may be empty, plain text or nested tags.
    id
        Element identifier, unique within one layout (not validated).
    x, y
        Positional offsets without unit. Empty means no ``left``/``top``.
    element_kind
        Logical element type (``"div"``, ``"table"``…), used as root tag.
    style_overrides
        Style entries merged over the computed base style.
    extra_attributes
        Additional attributes merged into the root node's attributes.
    width, height
        Optional size values, already carrying their unit.
    position
        CSS position of the root node.
    """

    markup: str = ""
    id: str = ""
    x: str = "0"
    y: str = "0"
    element_kind: str = "div"
    style_overrides: Dict[str, str] = field(default_factory=dict)
    extra_attributes: Dict[str, Any] = field(default_factory=dict)
    width: str = ""
    height: str = ""
    position: str = "absolute"

    def to_record(self) -> Dict[str, Any]:
        """Return the stored-record shape understood by the normalizer.

        Size and position travel inside ``styles`` only, as the editor stores them.
        """
        return {
            "html": self.markup,
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "type": self.element_kind,
            "styles": copy.deepcopy(self.style_overrides),
            "attributes": copy.deepcopy(self.extra_attributes),
        }


@dataclass(frozen=True)
class TreeNode:
    """One tag of the structural tree.

    ``attributes`` and ``children`` are ``None`` rather than empty so that the
    JSON form omits them entirely.
    """

    tag: str
    attributes: Optional[Dict[str, Any]] = None
    children: Optional[Tuple["TreeItem", ...]] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible copy of this node and its subtree."""
        data: Dict[str, Any] = {"tag": self.tag}
        if self.attributes:
            data["attributes"] = copy.deepcopy(self.attributes)
        if self.children:
            data["children"] = [
                child.to_dict() if isinstance(child, TreeNode) else child
                for child in self.children
            ]
        return data


TreeItem = Union[TreeNode, str]


class AttributePrecedence(enum.Enum):
    """Which side wins when extra attributes collide with ``id``/``style``."""

    EXTRA_WINS = "extra_wins"
    RESERVED_WINS = "reserved_wins"


class ParseOutcome:
    """Result of turning one element's markup into children."""

    degraded: bool = False

    @property
    def children(self) -> List[TreeItem]:  # pragma: no cover - overridden
        raise NotImplementedError


@dataclass(frozen=True)
class Parsed(ParseOutcome):
    """Markup was decomposed structurally."""

    items: Tuple[TreeItem, ...] = ()

    @property
    def children(self) -> List[TreeItem]:
        return list(self.items)


@dataclass(frozen=True)
class Degraded(ParseOutcome):
    """Markup could not be parsed; it is kept as a single text leaf."""

    text: str = ""
    cause: Optional[BaseException] = None
    degraded: bool = True

    @property
    def children(self) -> List[TreeItem]:
        return [self.text] if self.text else []

    @property
    def reason(self) -> str:
        if self.cause is None:
            return "unknown"
        return f"{self.cause.__class__.__name__}: {self.cause}"


@dataclass
class BuildReport:
    """Trees produced by one build call plus the per-element parse outcomes."""

    nodes: List[TreeNode] = field(default_factory=list)
    outcomes: List[ParseOutcome] = field(default_factory=list)
    element_ids: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> List[Tuple[int, str, Degraded]]:
        """Return ``(index, element id, outcome)`` for every degraded element."""
        return [
            (index, self.element_ids[index], outcome)
            for index, outcome in enumerate(self.outcomes)
            if isinstance(outcome, Degraded)
        ]
