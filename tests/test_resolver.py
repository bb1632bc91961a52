"""
Tests for conflict resolution.
"""

import logging

import pytest

from myanseg.conflicts import ConflictSession, apply_fix_all, resolve, scan
from myanseg.editor import merge_segments
from myanseg.glossary import Glossary


class TestFixAll:
    def test_prefer_unsplit_form(self, make_lines):
        """Test the split occurrence is rewritten to the joined form."""
        lines = make_lines(["ကျောင်း", "သား", "ကို"], ["ကျောင်းသား"])
        conflict = scan(lines)[0]
        result = apply_fix_all(lines, conflict, "formB")

        assert result[0].texts == ["ကျောင်းသား", "ကို"]
        assert result[0].segments[0].id.startswith("resolved-conflict-0-0-0-0-")
        assert result[1] is lines[1]
        assert lines[0].texts == ["ကျောင်း", "သား", "ကို"]

    def test_prefer_split_form(self, make_lines):
        """Test the joined occurrence is rewritten to the split form."""
        lines = make_lines(["ကျောင်း", "သား", "ကို"], ["ကျောင်းသား"])
        result = apply_fix_all(lines, scan(lines)[0], "formA")
        assert result[1].texts == ["ကျောင်း", "သား"]
        assert result[0] is lines[0]

    def test_several_sites_in_one_line(self, make_lines):
        """Test splices on one line do not disturb each other."""
        lines = make_lines(["ကျောင်း", "သား", "နဲ့", "ကျောင်း", "သား"], ["ကျောင်းသား"])
        conflicts = scan(lines)
        assert len(conflicts) == 1
        result = apply_fix_all(lines, conflicts[0], "formB")
        assert result[0].texts == ["ကျောင်းသား", "နဲ့", "ကျောင်းသား"]

    def test_rescan_after_fix_is_clean(self, make_lines):
        """Test a fixed document no longer conflicts."""
        lines = make_lines(["a", "b", "c"], ["ab"], ["x", "a", "b"])
        result = apply_fix_all(lines, scan(lines)[0], "formA")
        assert scan(result) == []

    def test_stale_site_is_skipped(self, make_lines, caplog):
        """Test a location whose text changed since the scan is left alone."""
        lines = make_lines(["ကျောင်း", "သား", "ကို"], ["ကျောင်းသား"])
        conflict = scan(lines)[0]
        edited = merge_segments(lines, 0, 1)

        with caplog.at_level(logging.WARNING):
            result = apply_fix_all(edited, conflict, "formB")

        assert result[0] is edited[0]
        assert "Skipping" in caplog.text

    @pytest.mark.parametrize("preferred", [None, "formC"])
    def test_invalid_preferred_form(self, make_lines, preferred):
        """Test fix_all requires a valid canonical form."""
        lines = make_lines(["a", "b"], ["ab"])
        with pytest.raises(ValueError):
            apply_fix_all(lines, scan(lines)[0], preferred)


class TestResolve:
    @pytest.mark.parametrize("resolution", ["ignore", "exception"])
    def test_non_rewriting_resolutions(self, make_lines, resolution):
        """Test ignore and exception keep the text and record the choice."""
        lines = make_lines(["a", "b"], ["ab"])
        conflict = scan(lines)[0]
        assert resolve(lines, conflict, resolution) is lines
        assert conflict.resolution == resolution
        assert conflict.resolved

    def test_fix_all_records_resolution(self, make_lines):
        """Test fix_all rewrites and records the choice."""
        lines = make_lines(["a", "b"], ["ab"])
        conflict = scan(lines)[0]
        result = resolve(lines, conflict, "fix_all", "formB")
        assert result[0].texts == ["ab"]
        assert conflict.resolution == "fix_all"

    def test_unknown_resolution(self, make_lines):
        """Test unknown resolutions are rejected."""
        lines = make_lines(["a", "b"], ["ab"])
        with pytest.raises(ValueError):
            resolve(lines, scan(lines)[0], "delete")


class TestConflictSession:
    def test_resolve_by_id(self, make_lines):
        """Test resolving a record from the latest scan."""
        session = ConflictSession()
        session.scan(make_lines(["a", "b"], ["ab"]))
        lines = session.resolve("conflict-0", "fix_all", "formA")

        assert lines[1].texts == ["a", "b"]
        assert session.lines is lines
        assert session.unresolved() == []

    def test_unknown_id(self, make_lines):
        """Test a missing conflict id raises KeyError."""
        session = ConflictSession()
        session.scan(make_lines(["a"]))
        with pytest.raises(KeyError):
            session.get("conflict-9")

    def test_find_by_word(self, make_lines):
        """Test lookup by joined text."""
        session = ConflictSession()
        session.scan(make_lines(["a", "b"], ["ab"]))
        assert session.find_by_word("ab").id == "conflict-0"
        assert session.find_by_word("zz") is None

    def test_glossary_hooks(self, make_lines):
        """Test fix_all feeds the glossary and exception marks ambiguity."""
        glossary = Glossary()
        session = ConflictSession(glossary=glossary)
        session.scan(make_lines(["a", "b"], ["ab"], ["c", "d"], ["cd"]))

        session.resolve(session.find_by_word("ab").id, "fix_all", "formB")
        session.resolve(session.find_by_word("cd").id, "exception")

        assert glossary.lookup("ab").segments == ["ab"]
        assert glossary.is_ambiguous("cd")
