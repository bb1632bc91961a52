"""Utility functions."""

from .text_normalizer import (
    MyanmarTextNormalizer,
    clean_text,
    normalize_spaces,
    remove_zwsp,
    split_into_lines,
)

__all__ = [
    "MyanmarTextNormalizer",
    "clean_text",
    "normalize_spaces",
    "remove_zwsp",
    "split_into_lines",
]
