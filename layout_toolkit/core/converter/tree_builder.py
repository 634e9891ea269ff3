from __future__ import annotations

"""Tree construction for placed elements.

Each :class:`PlacedElement` becomes exactly one root :class:`TreeNode` whose
tag is the element kind, whose attributes carry the computed inline style and
whose children come from parsing the element's markup.  A failure to parse one
element never affects its siblings: that element degrades to a single text
leaf and the failure is recorded in the :class:`BuildReport`.
"""

import copy
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from layout_toolkit.config import ConfigManager
from layout_toolkit.core.models import (
    AttributePrecedence,
    BuildReport,
    Degraded,
    ParseOutcome,
    Parsed,
    PlacedElement,
    TreeNode,
)
from layout_toolkit.core.parser import DEFAULT_MAX_DEPTH, FragmentParser, has_markup

__all__ = [
    "TreeBuilder",
    "build_tree",
    "compute_style",
    "compute_attributes",
    "prepare_markup",
    "RESERVED_ATTRIBUTES",
]

logger = logging.getLogger(__name__)

RESERVED_ATTRIBUTES = ("id", "style")

_TABLE_START_RE = re.compile(r"<table\b", re.IGNORECASE)


def compute_style(element: PlacedElement, default_position: str = "absolute") -> Dict[str, str]:
    """Return the inline style of *element*'s root node.

    ``left``/``top`` are only set when ``x``/``y`` are non-empty; the
    element's style overrides are applied last.
    """
    style: Dict[str, str] = {"position": element.position or default_position}
    if element.x:
        style["left"] = f"{element.x}px"
    if element.y:
        style["top"] = f"{element.y}px"
    if element.width:
        style["width"] = element.width
    if element.height:
        style["height"] = element.height
    style.update(copy.deepcopy(element.style_overrides))
    if not style.get("position"):
        style["position"] = default_position
    return style


def compute_attributes(element: PlacedElement, style: Dict[str, str],
                       precedence: AttributePrecedence = AttributePrecedence.EXTRA_WINS) -> Dict[str, Any]:
    """Return the root attributes ``{id, style, **extra_attributes}``."""
    attributes: Dict[str, Any] = {"id": element.id, "style": style}
    for key, value in element.extra_attributes.items():
        if precedence is AttributePrecedence.RESERVED_WINS and key in RESERVED_ATTRIBUTES:
            logger.info("Build: extra attribute '%s' ignored for element id=%s", key, element.id)
            continue
        attributes[key] = copy.deepcopy(value)
    return attributes


def prepare_markup(element: PlacedElement) -> str:
    """Return the trimmed markup to parse, wrapping bare table rows."""
    markup = element.markup.strip()
    if element.element_kind.lower() == "table" and not _TABLE_START_RE.match(markup):
        markup = f"<table>{markup}</table>"
    return markup


class TreeBuilder:
    """Builds one root :class:`TreeNode` per placed element.

    Parameters
    ----------
    precedence
        Collision policy between extra attributes and ``id``/``style``.
    max_depth
        Nesting limit handed to the fragment parser.
    default_position
        Position used when an element has none.

    Options left as ``None`` are read from the ``tree_builder.yml``
    configuration.
    """

    def __init__(self, precedence: Optional[AttributePrecedence] = None,
                 max_depth: Optional[int] = None,
                 default_position: Optional[str] = None) -> None:
        options: Mapping[str, Any] = {}
        if precedence is None or max_depth is None or default_position is None:
            options = ConfigManager().get_tree_options()

        if precedence is None:
            raw = str(options.get("attribute_precedence") or AttributePrecedence.EXTRA_WINS.value)
            try:
                precedence = AttributePrecedence(raw.strip().lower())
            except ValueError:
                logger.warning("Config: unknown attribute_precedence '%s', using extra_wins", raw)
                precedence = AttributePrecedence.EXTRA_WINS
        if max_depth is None:
            parser_options = options.get("parser")
            raw_depth = parser_options.get("max_depth") if isinstance(parser_options, Mapping) else None
            try:
                max_depth = int(raw_depth or DEFAULT_MAX_DEPTH)
            except (TypeError, ValueError):
                max_depth = 0
            if max_depth < 1:
                logger.warning("Config: invalid parser.max_depth '%s', using %d", raw_depth, DEFAULT_MAX_DEPTH)
                max_depth = DEFAULT_MAX_DEPTH
        if default_position is None:
            default_position = str(options.get("default_position") or "absolute")

        self.precedence = precedence
        self.default_position = default_position
        self._parser = FragmentParser(max_depth=max_depth)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def build(self, elements: Iterable[PlacedElement]) -> List[TreeNode]:
        """Return one root node per element, in input order."""
        return self.build_report(elements).nodes

    def build_report(self, elements: Iterable[PlacedElement]) -> BuildReport:
        """Build the trees and keep the parse outcome of every element."""
        report = BuildReport()
        for element in elements:
            node, outcome = self.build_node(element)
            report.nodes.append(node)
            report.outcomes.append(outcome)
            report.element_ids.append(element.id)

        if report.degraded:
            logger.info("Build: %d of %d element(s) degraded to text",
                        len(report.degraded), len(report.nodes))
        return report

    def build_node(self, element: PlacedElement) -> tuple[TreeNode, ParseOutcome]:
        """Return the root node of *element* and how its markup was parsed."""
        style = compute_style(element, self.default_position)
        attributes = compute_attributes(element, style, self.precedence)
        outcome = self.parse_children(element)
        children = outcome.children

        node = TreeNode(
            tag=(element.element_kind or "div").lower(),
            attributes=attributes,
            children=tuple(children) or None,
        )
        return node, outcome

    def parse_children(self, element: PlacedElement) -> ParseOutcome:
        """Parse *element*'s markup, degrading to text on any failure."""
        try:
            markup = prepare_markup(element)
            if not has_markup(markup):
                return Parsed(items=(markup,) if markup else ())
            return Parsed(items=tuple(self._parser.parse(markup)))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Build: markup of element id=%s degraded to text (%s: %s)",
                           element.id, exc.__class__.__name__, exc)
            if isinstance(element.markup, str):
                raw = element.markup.strip()
            else:
                raw = "" if element.markup is None else str(element.markup)
            return Degraded(text=raw, cause=exc)


def build_tree(elements: Iterable[PlacedElement], builder: Optional[TreeBuilder] = None) -> List[TreeNode]:
    """Convenience wrapper around :meth:`TreeBuilder.build`."""
    return (builder or TreeBuilder()).build(elements)
