from __future__ import annotations

"""Normalisation of stored element records.

The editor persists placed elements as loosely-typed JSON objects
(``html``, ``id``, ``x``, ``y``, ``type``, ``styles``, ``attributes``).
Fields may be missing, ``null`` or of the wrong type; everything here turns
them into a canonical :class:`PlacedElement` without ever raising.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List

from layout_toolkit.core.models import PlacedElement

__all__ = ["normalize", "normalize_batch"]

logger = logging.getLogger(__name__)


def _text(value: Any, default: str) -> str:
    if value is None or value == "" or value is False:
        return default
    return value if isinstance(value, str) else str(value)


def _mapping(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return {str(k): copy.deepcopy(v) for k, v in value.items()}
    return {}


def normalize(raw: Any) -> PlacedElement:
    """Return a canonical :class:`PlacedElement` for one stored record.

    ``width``/``height``/``position`` come from the record's ``styles`` when
    present, otherwise defaults; top-level keys of those names are ignored.
    A :class:`PlacedElement` given as input is returned as an equal copy.
    """
    if isinstance(raw, PlacedElement):
        return copy.deepcopy(raw)
    if not isinstance(raw, Mapping):
        logger.debug("Normalize: record of type %s replaced by defaults", type(raw).__name__)
        raw = {}

    styles = _mapping(raw.get("styles"))
    return PlacedElement(
        markup=_text(raw.get("html"), ""),
        id=_text(raw.get("id"), ""),
        x=_text(raw.get("x"), "0"),
        y=_text(raw.get("y"), "0"),
        element_kind=_text(raw.get("type"), "div"),
        style_overrides=styles,
        extra_attributes=_mapping(raw.get("attributes")),
        width=_text(styles.get("width"), ""),
        height=_text(styles.get("height"), ""),
        position=_text(styles.get("position"), "absolute"),
    )


def normalize_batch(records: Iterable[Any]) -> List[PlacedElement]:
    """Normalise every stored record, keeping input order."""
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        logger.warning("Normalize: expected a list of records, got %s", type(records).__name__)
        return []
    return [normalize(record) for record in records]
