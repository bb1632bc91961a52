"""Shared fixtures for the segmentation tests."""

import pytest

from myanseg.editor import SegmentIdGenerator, build_line


@pytest.fixture
def make_lines():
    """Build a line set from lists of unit texts (line ids start at 1)."""
    def _make(*unit_lists):
        ids = SegmentIdGenerator()
        return [
            build_line(idx + 1, "".join(units), list(units), ids)
            for idx, units in enumerate(unit_lists)
        ]
    return _make
