"""Bigram statistics over segmented lines and merge suggestions."""

from collections import Counter
from dataclasses import dataclass

from .engines.classifier import has_myanmar_text
from .models import Line


@dataclass
class NgramSuggestion:
    """Two adjacent units that are frequently seen together."""

    bigram: tuple[str, str]
    merged_form: str
    count: int


def calculate_bigram_frequencies(lines: list[Line]) -> Counter:
    """Count adjacent segment pairs across all lines."""
    freq: Counter = Counter()
    for line in lines:
        texts = line.texts
        freq.update(zip(texts, texts[1:]))
    return freq


def get_ngram_suggestions(lines: list[Line], min_count: int = 3) -> list[NgramSuggestion]:
    """Suggest merging Myanmar bigrams seen at least ``min_count`` times.

    Args:
        lines: Segmented lines
        min_count: Minimum number of occurrences

    Returns:
        Suggestions, most frequent first
    """
    suggestions = [
        NgramSuggestion(bigram=(a, b), merged_form=a + b, count=count)
        for (a, b), count in calculate_bigram_frequencies(lines).items()
        if count >= min_count and has_myanmar_text(a) and has_myanmar_text(b)
    ]
    return sorted(suggestions, key=lambda s: s.count, reverse=True)
