from __future__ import annotations

"""High-level conversion service for saved layouts.

Entry-point for any host (editor extension, CLI, tests) that holds the text
persisted by the layout editor and needs trees or rendered markup from it.
Routine failures never raise: malformed storage data yields an empty,
unsuccessful :class:`ConversionResult` and a log entry, because a broken
layout must not block the rest of the editor.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from layout_toolkit.core.converter import TreeBuilder, normalize_batch
from layout_toolkit.core.exceptions import MalformedInputError, UnsupportedFormatError
from layout_toolkit.core.generators import MarkupEmitter, TagMapping, print_tree, to_html
from layout_toolkit.core.models import TreeItem, TreeNode

logger = logging.getLogger(__name__)

__all__ = ["ConversionService", "ConversionResult", "OUTPUT_FORMATS"]

OUTPUT_FORMATS = ("jsx", "html", "json", "debug")


@dataclass
class ConversionResult:
    """Structured result of a conversion.

    Attributes
    ----------
    success : bool
        False when the stored data could not be decoded at all.
    nodes : list[TreeNode]
        One root node per stored element, in input order. Empty on failure.
    message : str
        Human-readable outcome; empty on clean success.
    details : dict
        ``reason`` on failure; ``degraded`` lists the ids of elements whose
        markup fell back to plain text.
    """
    success: bool
    nodes: List[TreeNode] = field(default_factory=list)
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


def decode_storage(data: str) -> List[Any]:
    """Decode stored layout text into a list of raw element records.

    Raises
    ------
    MalformedInputError
        If *data* is not JSON or its top level is not an array.
    """
    try:
        records = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Stored layout is not valid JSON: {exc}", cause=exc) from exc
    if not isinstance(records, list):
        raise MalformedInputError(
            f"Stored layout must be a JSON array, got {type(records).__name__}"
        )
    return records


class ConversionService:
    """Business-logic façade with no host or I/O dependencies."""

    def __init__(self, builder: Optional[TreeBuilder] = None,
                 tag_mapping: Optional[TagMapping] = None) -> None:
        self.builder = builder or TreeBuilder()
        self.tag_mapping = tag_mapping or TagMapping.from_config()
        self.emitter = MarkupEmitter(self.tag_mapping)
        self._renderers: Dict[str, Callable[[Sequence[TreeItem]], str]] = {
            "jsx": self.emitter.to_markup,
            "html": lambda nodes: to_html(nodes, tag_mapping=self.tag_mapping),
            "json": lambda nodes: json.dumps(
                [n.to_dict() if isinstance(n, TreeNode) else n for n in nodes],
                ensure_ascii=False, indent=2,
            ) + "\n",
            "debug": print_tree,
        }

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def convert_storage(self, data: str) -> ConversionResult:
        """Convert the editor's stored JSON text into trees."""
        try:
            records = decode_storage(data)
        except MalformedInputError as exc:
            logger.error("Convert FAIL: malformed stored layout (%s)", exc)
            return ConversionResult(
                success=False,
                message="Stored layout could not be read.",
                details={"reason": "malformed_input", "error": str(exc)},
            )
        return self.convert_records(records)

    def convert_records(self, records: Iterable[Any]) -> ConversionResult:
        """Convert already-decoded stored records into trees."""
        elements = normalize_batch(records)
        report = self.builder.build_report(elements)
        degraded = [
            {"index": index, "id": element_id, "reason": outcome.reason}
            for index, element_id, outcome in report.degraded
        ]
        logger.debug("Convert OK: elements=%d degraded=%d", len(report.nodes), len(degraded))
        return ConversionResult(
            success=True,
            nodes=report.nodes,
            message=f"{len(degraded)} element(s) rendered as plain text." if degraded else "",
            details={"degraded": degraded},
        )

    def generate_tree_from_storage(self, data: str) -> List[TreeNode]:
        """Return the trees for *data*, or an empty list if it is malformed."""
        return self.convert_storage(data).nodes

    def render(self, nodes: Sequence[TreeItem], fmt: str = "jsx") -> str:
        """Render *nodes* to one of :data:`OUTPUT_FORMATS`."""
        renderer = self._renderers.get(fmt.lower())
        if renderer is None:
            raise UnsupportedFormatError(fmt, list(OUTPUT_FORMATS))
        return renderer(nodes)

    def convert_and_render(self, data: str, fmt: str = "jsx") -> tuple[ConversionResult, str]:
        """Convert stored text and render it in one call."""
        result = self.convert_storage(data)
        return result, self.render(result.nodes, fmt)
