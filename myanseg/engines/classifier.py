"""Code-point classification for Myanmar syllable breaking.

Every predicate works on single characters and only consults its immediate
neighbours, so a break decision at position ``i`` is O(1) and needs no regex
lookbehind.
"""

from typing import Optional

from .base import (
    ASCII_BREAK_PUNCTUATION,
    CONSONANT_FIRST,
    CONSONANT_LAST,
    DIGIT_FIRST,
    DIGIT_LAST,
    MYANMAR_RANGES,
    OTHER_BREAK_CODEPOINTS,
    STACKING_MARK,
    VIRAMA,
    VISARGA,
)

# Marks that glue a consonant to whatever follows it
_GLUING_MARKS = frozenset((VIRAMA, STACKING_MARK, VISARGA))


def is_consonant(ch: Optional[str]) -> bool:
    """Check if a character is a Myanmar consonant (U+1000..U+1021)."""
    if not ch:
        return False
    return CONSONANT_FIRST <= ord(ch) <= CONSONANT_LAST


def is_myanmar_digit(ch: Optional[str]) -> bool:
    """Check if a character is a Myanmar digit (U+1040..U+1049)."""
    if not ch:
        return False
    return DIGIT_FIRST <= ord(ch) <= DIGIT_LAST


def is_myanmar_char(ch: Optional[str]) -> bool:
    """Check if a character belongs to the Myanmar or Myanmar Extended-A block."""
    if not ch:
        return False
    cp = ord(ch)
    return any(first <= cp <= last for first, last in MYANMAR_RANGES)


def is_ascii_alnum(ch: str) -> bool:
    """Check for a-z, A-Z, 0-9 only (str.isalnum accepts far more)."""
    return ch.isascii() and ch.isalnum()


def is_ascii_punctuation(ch: str) -> bool:
    return ch in ASCII_BREAK_PUNCTUATION


def is_breakable_consonant(
    ch: str, prev_ch: Optional[str] = None, next_ch: Optional[str] = None
) -> bool:
    """Decide whether a syllable boundary goes right before a consonant.

    A consonant opens a new syllable unless it is stacked under the previous
    one (preceded by the stacking mark) or is itself closed by a virama,
    stacking mark or visarga (the mark keeps it attached to the current
    syllable).

    Args:
        ch: Candidate character
        prev_ch: Character before ``ch`` (None at the start of text)
        next_ch: Character after ``ch`` (None at the end of text)

    Returns:
        True if a boundary should be inserted before ``ch``
    """
    if not is_consonant(ch):
        return False
    if prev_ch == STACKING_MARK:
        return False
    if next_ch in _GLUING_MARKS:
        return False
    return True


def is_other_break_point(ch: str) -> bool:
    """Characters that unconditionally start a new unit.

    ASCII letters and digits, Myanmar independent vowels, digits and
    punctuation, the ASCII marks ``! - / : @ [ ` { ~`` and whitespace. Each such
    character starts its own unit, so a Latin word comes out one letter per
    unit. Other ASCII punctuation such as ``.`` or ``,`` does not break.
    """
    if not ch:
        return False
    if is_ascii_alnum(ch):
        return True
    if ord(ch) in OTHER_BREAK_CODEPOINTS:
        return True
    if is_ascii_punctuation(ch):
        return True
    return ch.isspace()


def is_break_point(text: str, index: int) -> bool:
    """Check whether a boundary goes right before ``text[index]``."""
    ch = text[index]
    prev_ch = text[index - 1] if index > 0 else None
    next_ch = text[index + 1] if index + 1 < len(text) else None
    return is_breakable_consonant(ch, prev_ch, next_ch) or is_other_break_point(ch)


def is_myanmar_digit_run(text: str) -> bool:
    """Check if a non-empty string consists of Myanmar digits only."""
    return bool(text) and all(is_myanmar_digit(ch) for ch in text)


def has_myanmar_text(text: str) -> bool:
    """Check if text contains at least one Myanmar character."""
    return any(is_myanmar_char(ch) for ch in text)
