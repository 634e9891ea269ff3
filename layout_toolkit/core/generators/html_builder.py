from __future__ import annotations

"""HTML rendering of a tree through ``lxml``.

Used for the companion preview file next to a saved layout and for direct
injection into a webview.  Tags are filtered through the same
:class:`TagMapping` as the markup emitter; the ``style`` mapping becomes an
inline CSS declaration list.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from lxml import etree as ET  # type: ignore
from lxml import html as lxml_html  # type: ignore

from layout_toolkit.core.generators.tag_mapping import TagMapping
from layout_toolkit.core.models import TreeItem, TreeNode

__all__ = [
    "xml_safe",
    "style_to_css",
    "tree_to_elements",
    "build_html_document",
    "to_html",
    "to_html_fragment",
    "save_html_preview",
]

logger = logging.getLogger(__name__)

_DOCTYPE = "<!DOCTYPE html>"

# Characters lxml refuses in text and attribute values.
_XML_INCOMPATIBLE_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    """Drop characters that cannot appear in an XML/HTML document."""
    return _XML_INCOMPATIBLE_RE.sub("", text)


def style_to_css(style: Mapping[str, Any]) -> str:
    """Return ``"k: v; k2: v2"`` for a style mapping."""
    return "; ".join(f"{key}: {value}" for key, value in style.items())


def _append_text(parent: ET._Element, text: str) -> None:
    text = xml_safe(text)
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = f"{last.tail} {text}" if last.tail else text
    else:
        parent.text = f"{parent.text} {text}" if parent.text else text


def _set_attribute(element: ET._Element, key: str, value: Any) -> None:
    if isinstance(value, Mapping):
        value = style_to_css(value)
    elif value is None:
        value = ""
    try:
        element.set(key, xml_safe(str(value)))
    except ValueError:
        logger.debug("HTML: attribute %r skipped on <%s> (not representable)", key, element.tag)


def tree_to_elements(tree: Sequence[TreeItem], parent: ET._Element,
                     tag_mapping: TagMapping) -> ET._Element:
    """Append *tree* under *parent* as lxml elements and return *parent*."""
    for node in tree:
        if not isinstance(node, TreeNode):
            _append_text(parent, node)
            continue
        element = ET.SubElement(parent, tag_mapping.resolve(node.tag))
        for key, value in (node.attributes or {}).items():
            _set_attribute(element, key, value)
        if node.children:
            tree_to_elements(node.children, element, tag_mapping)
    return parent


def build_html_document(tree: Sequence[TreeItem], title: str = "Layout preview",
                        tag_mapping: Optional[TagMapping] = None) -> ET._Element:
    """Return an ``<html>`` element holding *tree* in its body."""
    tag_mapping = tag_mapping or TagMapping.from_config()
    root = ET.Element("html")
    head = ET.SubElement(root, "head")
    ET.SubElement(head, "meta", charset="utf-8")
    ET.SubElement(head, "title").text = xml_safe(title)
    body = ET.SubElement(root, "body")
    tree_to_elements(tree, body, tag_mapping)
    return root


def to_html(tree: Sequence[TreeItem], title: str = "Layout preview",
            tag_mapping: Optional[TagMapping] = None, *, pretty: bool = True) -> str:
    """Serialise *tree* as a complete HTML document."""
    document = build_html_document(tree, title, tag_mapping)
    return lxml_html.tostring(document, pretty_print=pretty, encoding="unicode", doctype=_DOCTYPE)


def to_html_fragment(tree: Sequence[TreeItem], tag_mapping: Optional[TagMapping] = None,
                     *, pretty: bool = True) -> str:
    """Serialise only the root nodes of *tree* (no document wrapper)."""
    container = tree_to_elements(tree, ET.Element("div"), tag_mapping or TagMapping.from_config())
    parts = [container.text.strip()] if container.text and container.text.strip() else []
    for element in container:
        parts.append(lxml_html.tostring(element, pretty_print=pretty, encoding="unicode", with_tail=False).strip())
        if element.tail and element.tail.strip():
            parts.append(element.tail.strip())
    return "\n".join(parts) + ("\n" if parts else "")


def save_html_preview(tree: Sequence[TreeItem], path: Union[str, Path],
                      title: str = "Layout preview",
                      tag_mapping: Optional[TagMapping] = None) -> Path:
    """Write the HTML document for *tree* to *path* and return the path."""
    path = Path(path)
    content = to_html(tree, title, tag_mapping)
    try:
        path.write_text(content, encoding="utf-8")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote HTML preview path=%s chars=%d", path, len(content))
    except OSError:
        # Caller context handles user feedback; file handler captures traceback
        logger.error("I/O FAIL: write HTML preview path=%s", path, exc_info=True)
        raise
    return path
