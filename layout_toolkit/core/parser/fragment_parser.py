from __future__ import annotations

"""Lightweight parser for the markup fragments embedded in placed elements.

The fragments are small, hand-written and frequently malformed, so a full
HTML parser is neither needed nor wanted.  The scanner below walks the string
once, recognising open tags, self-closing tags, close tags, comments and bare
text, and balances them with an explicit tag stack:

- a close tag pops back to the nearest open tag of the same name (same-named
  nesting such as ``<div><div>a</div></div>`` is balanced correctly);
- tags that are still open when their parent closes, or at end of input, are
  *dissolved*: their content is spliced into the enclosing level;
- stray close tags are ignored;
- a level that ends up without any element is reduced to the stripped,
  trimmed text of its raw source.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from layout_toolkit.core.exceptions import FragmentParseError
from layout_toolkit.core.models import TreeItem, TreeNode

__all__ = [
    "FragmentParser",
    "parse_fragment",
    "parse_attributes",
    "strip_markup",
    "has_markup",
    "DEFAULT_MAX_DEPTH",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_TAG_NAME = r"[A-Za-z][\w:.-]*"
_OPEN_TAG_RE = re.compile(r"<(" + _TAG_NAME + r")((?:\"[^\"]*\"|'[^']*'|[^'\">])*)>")
_CLOSE_TAG_RE = re.compile(r"</(" + _TAG_NAME + r")\s*>")
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_DECLARATION_RE = re.compile(r"<[!?][^>]*>")
_ATTRIBUTE_RE = re.compile(r"([^\s\"'=<>/]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
_RESIDUAL_TAG_RE = re.compile(r"<[^>]*>")


def strip_markup(text: str) -> str:
    """Remove every ``<...>`` span from *text* (no trimming)."""
    return _RESIDUAL_TAG_RE.sub("", text)


def has_markup(text: str) -> bool:
    """Return True when *text* contains both tag delimiters."""
    return "<" in text and ">" in text


def parse_attributes(source: str) -> Dict[str, str]:
    """Extract ``name="value"`` / ``name='value'`` pairs from *source*.

    Valueless and unquoted attributes are ignored; later duplicates win.
    """
    attributes: Dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(source):
        name, double_quoted, single_quoted = match.groups()
        attributes[name] = double_quoted if double_quoted is not None else single_quoted
    return attributes


def _plain_text(source: str) -> List[TreeItem]:
    text = strip_markup(source).strip()
    return [text] if text else []


@dataclass
class _Frame:
    """An open tag waiting for its close tag."""

    tag: str
    attributes: Dict[str, str]
    content_start: int
    children: List[TreeItem] = field(default_factory=list)


class FragmentParser:
    """Stack-balanced scanner turning a fragment into tree items.

    Parameters
    ----------
    max_depth
        Maximum number of simultaneously open tags.  Deeper fragments raise
        :class:`FragmentParseError` so callers can degrade them to text.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth

    def parse(self, markup: str) -> List[TreeItem]:
        """Parse *markup* into an ordered list of nodes and text leaves.

        Raises
        ------
        FragmentParseError
            If *markup* is not a string or nests deeper than ``max_depth``.
        """
        if not isinstance(markup, str):
            raise FragmentParseError(
                f"Fragment must be a string, got {type(markup).__name__}",
                fragment=repr(markup),
            )
        if not has_markup(markup):
            return _plain_text(markup)

        root: List[TreeItem] = []
        stack: List[_Frame] = []

        def current() -> List[TreeItem]:
            return stack[-1].children if stack else root

        def add_text(start: int, end: int) -> None:
            if end > start:
                current().extend(_plain_text(markup[start:end]))

        pos = 0
        text_start = 0
        while True:
            idx = markup.find("<", pos)
            if idx < 0:
                break

            match = _COMMENT_RE.match(markup, idx) or _DECLARATION_RE.match(markup, idx)
            if match:
                add_text(text_start, idx)
                pos = text_start = match.end()
                continue

            match = _CLOSE_TAG_RE.match(markup, idx)
            if match:
                add_text(text_start, idx)
                self._close(markup, stack, root, match.group(1).lower(), idx)
                pos = text_start = match.end()
                continue

            match = _OPEN_TAG_RE.match(markup, idx)
            if match:
                add_text(text_start, idx)
                tag = match.group(1).lower()
                attr_source = match.group(2)
                attributes = parse_attributes(attr_source)
                if attr_source.rstrip().endswith("/"):
                    current().append(TreeNode(tag=tag, attributes=attributes or None))
                else:
                    if len(stack) >= self.max_depth:
                        raise FragmentParseError(
                            f"Fragment nests deeper than {self.max_depth} tags",
                            fragment=markup,
                        )
                    stack.append(_Frame(tag=tag, attributes=attributes, content_start=match.end()))
                pos = text_start = match.end()
                continue

            # A "<" that does not start a tag is ordinary text.
            pos = idx + 1

        add_text(text_start, len(markup))

        while stack:
            self._dissolve(stack, root)

        if not any(isinstance(item, TreeNode) for item in root):
            return _plain_text(markup)
        return root

    # ------------------------------------------------------------------
    # Stack helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _dissolve(stack: List[_Frame], root: List[TreeItem]) -> None:
        """Pop the innermost frame and splice its content into its parent."""
        frame = stack.pop()
        parent = stack[-1].children if stack else root
        parent.extend(frame.children)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Parser: unclosed <%s> dissolved into parent", frame.tag)

    def _close(self, markup: str, stack: List[_Frame], root: List[TreeItem],
               tag: str, close_start: int) -> None:
        target: Optional[int] = None
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].tag == tag:
                target = index
                break
        if target is None:
            logger.debug("Parser: stray </%s> ignored", tag)
            return

        while len(stack) > target + 1:
            self._dissolve(stack, root)

        frame = stack.pop()
        children = frame.children
        if not any(isinstance(child, TreeNode) for child in children):
            children = _plain_text(markup[frame.content_start:close_start])

        node = TreeNode(
            tag=frame.tag,
            attributes=frame.attributes or None,
            children=tuple(children) or None,
        )
        (stack[-1].children if stack else root).append(node)


def parse_fragment(markup: str, max_depth: int = DEFAULT_MAX_DEPTH) -> List[TreeItem]:
    """Parse *markup* into tree items, never raising.

    On any parse failure the fragment is returned as its stripped plain text.
    """
    try:
        return FragmentParser(max_depth=max_depth).parse(markup)
    except FragmentParseError as exc:
        logger.warning("Parser: degrading fragment to text (%s)", exc)
        return _plain_text(markup if isinstance(markup, str) else str(markup))
