"""Type converters used to parse range expressions and typed answers."""

from .builtin import DEFAULT_CONVERTERS, DEFAULT_REGISTRY
from .registry import Converter, ConverterRef, ConverterRegistry

__all__ = [
    "Converter",
    "ConverterRef",
    "ConverterRegistry",
    "DEFAULT_CONVERTERS",
    "DEFAULT_REGISTRY",
]
