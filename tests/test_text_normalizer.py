"""
Tests for Myanmar text normalization.
"""

from myanseg.utils import MyanmarTextNormalizer, clean_text, normalize_spaces, split_into_lines


def test_clean_text():
    """Test invisible marks, carriage returns and extra spaces are removed."""
    text = " ကျောင်း\N{ZERO WIDTH SPACE}\N{ZERO WIDTH JOINER}သား\r   တွေ "
    assert clean_text(text) == "ကျောင်းသား တွေ"
    assert clean_text("") == ""


def test_normalize_spaces_keeps_other_whitespace():
    """Test only runs of plain spaces are collapsed."""
    assert normalize_spaces("a   b\tc") == "a b\tc"


def test_remove_zwsp_only():
    """Test the bulk cleanup only strips zero-width spaces."""
    text = "a\N{ZERO WIDTH SPACE}b\N{ZERO WIDTH NON-JOINER}"
    assert MyanmarTextNormalizer.remove_zwsp(text) == "ab\N{ZERO WIDTH NON-JOINER}"


def test_split_into_lines():
    """Test blank lines are dropped."""
    assert split_into_lines("a\n\n  \nb\n") == ["a", "b"]
    assert split_into_lines("") == []
