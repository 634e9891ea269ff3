from __future__ import annotations

"""High-level orchestration services."""

from .conversion_service import (  # noqa: F401
    OUTPUT_FORMATS,
    ConversionResult,
    ConversionService,
    decode_storage,
)

__all__: list[str] = [
    "OUTPUT_FORMATS",
    "ConversionResult",
    "ConversionService",
    "decode_storage",
]
