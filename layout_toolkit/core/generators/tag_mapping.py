from __future__ import annotations

"""Allow-list of output tags shared by the markup renderers."""

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from layout_toolkit.config import ConfigManager

__all__ = ["TagMapping"]

logger = logging.getLogger(__name__)

# Used only when the packaged tag_map.yml is missing or empty.
_BUILTIN_TAGS = (
    "div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "input", "textarea", "button", "img", "a",
    "table", "thead", "tbody", "tr", "td", "th",
    "ul", "ol", "li", "select", "option",
    "section", "article", "header", "footer", "nav", "aside",
)


@dataclass(frozen=True)
class TagMapping:
    """Immutable tag allow-list.

    Known tags map to themselves, anything else to ``default_tag``.
    """

    tags: FrozenSet[str] = frozenset(_BUILTIN_TAGS)
    default_tag: str = "div"

    @classmethod
    def of(cls, tags: Iterable[str], default_tag: str = "div") -> "TagMapping":
        return cls(tags=frozenset(t.lower() for t in tags), default_tag=default_tag.lower())

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "TagMapping":
        """Build the mapping from a ``tag_map.yml`` section.

        Reads the shared :class:`ConfigManager` when *config* is omitted.
        """
        if config is None:
            config = ConfigManager().get_tag_map()
        tags = config.get("tags") or ()
        default_tag = str(config.get("default_tag") or "div")
        if not tags:
            logger.warning("Config: tag map is empty, using built-in tag list")
            tags = _BUILTIN_TAGS
        return cls.of((str(t) for t in tags), default_tag)

    def resolve(self, tag: str) -> str:
        tag = tag.lower()
        return tag if tag in self.tags else self.default_tag

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.lower() in self.tags
