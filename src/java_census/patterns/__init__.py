"""Construct kinds and the structural patterns that recognise them."""

from .catalog import (
    PATTERN_SOURCES,
    CompiledPattern,
    ConstructKind,
    PatternCatalog,
    PatternSource,
    compile_pattern,
)

__all__ = [
    "PATTERN_SOURCES",
    "CompiledPattern",
    "ConstructKind",
    "PatternCatalog",
    "PatternSource",
    "compile_pattern",
]
