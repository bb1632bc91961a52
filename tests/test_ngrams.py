"""
Tests for bigram statistics and merge suggestions.
"""

from myanseg.ngrams import calculate_bigram_frequencies, get_ngram_suggestions


def test_bigram_frequencies(make_lines):
    """Test adjacent pairs are counted across lines."""
    lines = make_lines(["a", "b", "c"], ["a", "b"])
    freq = calculate_bigram_frequencies(lines)
    assert freq[("a", "b")] == 2
    assert freq[("b", "c")] == 1


def test_suggestions(make_lines):
    """Test frequent Myanmar bigrams are suggested, most frequent first."""
    lines = make_lines(
        ["ကျောင်း", "သား", "တွေ"],
        ["ကျောင်း", "သား"],
        ["ကျောင်း", "သား", "တွေ"],
        ["သား", "တွေ"],
        ["သား", "တွေ"],
        ["a", "b"], ["a", "b"], ["a", "b"],
    )
    suggestions = get_ngram_suggestions(lines)

    assert [s.merged_form for s in suggestions] == ["သားတွေ", "ကျောင်းသား"]
    assert suggestions[0].count == 4
    assert suggestions[1].bigram == ("ကျောင်း", "သား")


def test_min_count(make_lines):
    """Test rare bigrams are filtered out."""
    lines = make_lines(["ကျောင်း", "သား"], ["ကျောင်း", "သား"])
    assert get_ngram_suggestions(lines) == []
    assert len(get_ngram_suggestions(lines, min_count=2)) == 1
