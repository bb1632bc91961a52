"""Text normalization utilities for Myanmar text."""

import re

from ..engines.base import ZERO_WIDTH_JOINER, ZERO_WIDTH_NON_JOINER, ZERO_WIDTH_SPACE


class MyanmarTextNormalizer:
    """Normalize Myanmar text by removing invisible marks and extra spaces."""

    INVISIBLE_MARKS = (ZERO_WIDTH_SPACE, ZERO_WIDTH_NON_JOINER, ZERO_WIDTH_JOINER)

    MULTI_SPACE = re.compile(r"  +")
    LINE_BREAKS = re.compile(r"\n+")

    @classmethod
    def remove_zwsp(cls, text: str) -> str:
        """Remove zero-width spaces only (used by the bulk cleanup action)."""
        if not text:
            return text
        return text.replace(ZERO_WIDTH_SPACE, "")

    @classmethod
    def normalize_spaces(cls, text: str) -> str:
        """Collapse runs of plain spaces to one and trim."""
        if not text:
            return text
        return cls.MULTI_SPACE.sub(" ", text).strip()

    @classmethod
    def clean_text(cls, text: str) -> str:
        """
        Prepare raw text for syllable breaking.

        This removes:
        - Zero-width space, non-joiner and joiner
        - Carriage returns
        - Repeated plain spaces (collapsed to one)

        Args:
            text: Input text

        Returns:
            Cleaned, trimmed text (empty string for empty input)
        """
        if not text:
            return ""
        for mark in cls.INVISIBLE_MARKS:
            text = text.replace(mark, "")
        text = text.replace("\r", "")
        return cls.normalize_spaces(text)

    @classmethod
    def split_into_lines(cls, text: str) -> list[str]:
        """Split multi-line input on newlines, dropping blank lines."""
        if not text:
            return []
        return [line for line in cls.LINE_BREAKS.split(text) if line.strip()]


def clean_text(text: str) -> str:
    """
    Convenience function for cleaning Myanmar text.

    Args:
        text: Input text

    Returns:
        Cleaned text
    """
    return MyanmarTextNormalizer.clean_text(text)


def normalize_spaces(text: str) -> str:
    return MyanmarTextNormalizer.normalize_spaces(text)


def remove_zwsp(text: str) -> str:
    return MyanmarTextNormalizer.remove_zwsp(text)


def split_into_lines(text: str) -> list[str]:
    return MyanmarTextNormalizer.split_into_lines(text)
