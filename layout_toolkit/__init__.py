"""Top-level package for Layout Toolkit.

Converts the placed elements saved by the visual layout editor into
structural trees and renders those trees as component markup or HTML.
Hosts (editor extension, CLI) should only depend on the public API exposed
here rather than importing internal modules directly.
"""

from .core.models import PlacedElement, TreeNode  # re-export for convenience
from .core.converter import build_tree, normalize, normalize_batch
from .core.parser import parse_fragment
from .core.generators import print_tree, to_html, to_markup
from .core.services import ConversionService

__version__ = "0.3.0"

__all__: list[str] = [
    "PlacedElement",
    "TreeNode",
    "build_tree",
    "normalize",
    "normalize_batch",
    "parse_fragment",
    "print_tree",
    "to_html",
    "to_markup",
    "ConversionService",
]
