from __future__ import annotations

"""Exception classes for the layout conversion pipeline.

Routine failures never escape the public conversion entry points: the tree
builder and the conversion service catch these errors and degrade instead.
They are raised by the lower-level, strict APIs (e.g.
:meth:`FragmentParser.parse`) so callers can tell what went wrong.
"""

from typing import Optional


class LayoutToolkitError(Exception):
    """Base exception for all layout toolkit errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class MalformedInputError(LayoutToolkitError):
    """Raised when stored layout data cannot be decoded into records."""
    pass


class FragmentParseError(LayoutToolkitError):
    """Raised when a markup fragment cannot be decomposed into a tree.

    Carries the offending fragment so diagnostics can show it.
    """

    def __init__(self, message: str, fragment: str = "",
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.fragment = fragment


class UnsupportedFormatError(LayoutToolkitError):
    """Raised when a tree is rendered to an output format that does not exist."""

    def __init__(self, fmt: str, available_formats: Optional[list[str]] = None) -> None:
        self.format = fmt
        self.available_formats = available_formats or []
        formats_str = ", ".join(self.available_formats) or "none"
        super().__init__(f"Unsupported output format '{fmt}'. Supported formats: {formats_str}")
