"""Rule-based Myanmar syllable segmentation engine (sylbreak rules)."""

import re

from ..utils.text_normalizer import clean_text
from .base import SegmentationEngine
from .classifier import is_break_point, is_myanmar_digit_run

PARENTHESIS_SPLIT = re.compile(r"([()])")


class SylbreakSegmenter(SegmentationEngine):
    """Breaks text into syllables using Unicode character-class rules.

    A boundary is placed before every consonant that is neither stacked nor
    closed by a gluing mark, and before every character of the "other" class
    (Latin letters and digits, Myanmar independent vowels, digits and
    punctuation, ASCII punctuation, whitespace). Multi-digit Myanmar numbers
    are then rejoined and parentheses are isolated as their own units.
    """

    name = "sylbreak"

    def break_points(self, text: str) -> list[int]:
        """Return the indices that start a new unit in already-cleaned text."""
        return [i for i in range(len(text)) if is_break_point(text, i)]

    def split_at_breaks(self, text: str) -> list[str]:
        """Cut cleaned text at every break point, trimming and dropping blanks.

        Args:
            text: Cleaned text

        Returns:
            Raw syllable pieces before post-processing
        """
        pieces = []
        start = 0
        for index in self.break_points(text):
            if index > start:
                pieces.append(text[start:index])
            start = index
        if start < len(text):
            pieces.append(text[start:])

        return [piece.strip() for piece in pieces if piece.strip()]

    def post_process(self, syllables: list[str]) -> list[str]:
        """Merge Myanmar digit runs and isolate parentheses.

        Args:
            syllables: Pieces from ``split_at_breaks``

        Returns:
            Final unit list
        """
        result = []
        for segment in syllables:
            if not segment or not segment.strip():
                continue

            if "(" in segment or ")" in segment:
                parts = [p.strip() for p in PARENTHESIS_SPLIT.split(segment)]
                result.extend(p for p in parts if p)
                continue

            if (
                result
                and is_myanmar_digit_run(segment)
                and is_myanmar_digit_run(result[-1])
            ):
                result[-1] += segment
                continue

            result.append(segment)

        return result

    def segment(self, text: str) -> list[str]:
        """Segment text into syllables.

        Args:
            text: Raw text (one line)

        Returns:
            List of syllable strings; empty for empty or blank input
        """
        if not text or not text.strip():
            return []

        cleaned = clean_text(text)
        return self.post_process(self.split_at_breaks(cleaned))


_default_segmenter = SylbreakSegmenter()


def segment_into_syllables(text: str) -> list[str]:
    """Convenience function using a shared SylbreakSegmenter."""
    return _default_segmenter.segment(text)


def count_syllable_units(text: str) -> int:
    """Count the syllables a unit's own text breaks into."""
    return len(segment_into_syllables(text))


def is_under_segmented(text: str, threshold: int = 4) -> bool:
    """Check if a unit is likely under-segmented (more syllables than threshold)."""
    return count_syllable_units(text) > threshold
