"""
Tests for the segmentation glossary.
"""

import pytest

from myanseg.glossary import Glossary


class TestAutoMemory:
    def test_track_creates_auto_entry(self):
        """Test the first decision lands in the auto memory."""
        glossary = Glossary()
        entry = glossary.track_segmentation("ကျောင်းသား", ["ကျောင်းသား"])
        assert entry.source == "auto"
        assert entry.count == 1
        assert "ကျောင်းသား" in glossary.auto

    def test_promotion_after_three_uses(self):
        """Test repeated decisions are promoted to the manual glossary."""
        glossary = Glossary()
        for _ in range(2):
            glossary.track_segmentation("ab", ["a", "b"])
        promoted = glossary.track_segmentation("ab", ["a", "b"])

        assert promoted.source == "manual"
        assert promoted.count == 3
        assert "ab" in glossary.manual
        assert "ab" not in glossary.auto

    def test_manual_entries_win(self):
        """Test words in the manual glossary are not tracked."""
        glossary = Glossary()
        glossary.add_manual("ab", ["ab"])
        assert glossary.track_segmentation("ab", ["a", "b"]) is None
        assert glossary.lookup("ab").segments == ["ab"]


class TestManualGlossary:
    def test_add_manual_twice(self):
        """Test re-adding a word updates it and bumps the count."""
        glossary = Glossary()
        glossary.add_manual("ab", ["a", "b"])
        entry = glossary.add_manual("ab", ["ab"])
        assert entry.segments == ["ab"]
        assert entry.count == 2
        assert len(glossary) == 1

    def test_suggestions_manual_first(self):
        """Test both stores contribute suggestions."""
        glossary = Glossary()
        glossary.track_segmentation("ab", ["a", "b"])
        glossary.add_manual("ab", ["ab"])
        assert glossary.get_suggestions("ab") == [["ab"], ["a", "b"]]
        assert glossary.get_suggestions("zz") is None

    def test_remove(self):
        """Test removing entries by source."""
        glossary = Glossary()
        glossary.add_manual("ab", ["ab"])
        glossary.remove("ab", "manual")
        assert glossary.lookup("ab") is None
        with pytest.raises(ValueError):
            glossary.remove("ab", "cloud")


def test_mark_ambiguous():
    """Test ambiguity is recorded on the word and its entries."""
    glossary = Glossary()
    glossary.add_manual("ab", ["ab"])
    glossary.mark_ambiguous("ab")
    assert glossary.is_ambiguous("ab")
    assert glossary.lookup("ab").is_ambiguous


def test_round_trip():
    """Test to_dict and from_dict keep every store."""
    glossary = Glossary()
    glossary.add_manual("ab", ["ab"])
    glossary.track_segmentation("cd", ["c", "d"])
    glossary.mark_ambiguous("ef")

    restored = Glossary.from_dict(glossary.to_dict())
    assert restored.lookup("ab") == glossary.lookup("ab")
    assert restored.lookup("cd") == glossary.lookup("cd")
    assert restored.is_ambiguous("ef")

    restored.clear()
    assert len(restored) == 0
