"""Utilities for the wasm advisor."""

from wasm_advisor.utils.search import PatternMatch, find_pattern_in_files

__all__ = [
    "PatternMatch",
    "find_pattern_in_files",
]
