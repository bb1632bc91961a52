"""Pure editing operations over a line set.

Every function takes the current list of lines and returns a new list. Lines
that are not touched are reused as-is; an invalid index or offset returns the
input list unchanged.
"""

import itertools
from dataclasses import replace
from typing import Optional

from .engines import SegmentationEngine, SylbreakSegmenter
from .engines.sylbreak_engine import is_under_segmented, segment_into_syllables
from .granularity import GranularityRuleEngine
from .models import Line, Segment
from .utils.text_normalizer import normalize_spaces, remove_zwsp, split_into_lines

DEFAULT_UNDER_SEGMENTATION_THRESHOLD = 4


class SegmentIdGenerator:
    """Generates document-unique segment ids."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start + 1)

    def __call__(self, line_id: int, index: int) -> str:
        return f"line-{line_id}-seg-{index}-{next(self._counter)}"


_default_ids = SegmentIdGenerator()


def segment_warnings(
    text: str, threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD
) -> list[str]:
    """Warning tags for one segment's text."""
    return ["under_segmentation"] if is_under_segmented(text, threshold) else []


def _in_range(lines: list[Line], line_index: int, segment_index: int) -> bool:
    if not 0 <= line_index < len(lines):
        return False
    return 0 <= segment_index < len(lines[line_index].segments)


def build_line(
    line_id: int,
    original_text: str,
    units: list[str],
    ids: Optional[SegmentIdGenerator] = None,
    threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD,
) -> Line:
    """Create a pending Line from an ordered list of unit texts."""
    ids = ids or _default_ids
    segments = [
        Segment(id=ids(line_id, idx), text=unit, warnings=segment_warnings(unit, threshold))
        for idx, unit in enumerate(units)
    ]
    return Line(id=line_id, original_text=original_text, segments=segments)


def import_text(
    text: str,
    segmenter: Optional[SegmentationEngine] = None,
    rules_engine: Optional[GranularityRuleEngine] = None,
    ids: Optional[SegmentIdGenerator] = None,
    threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD,
) -> list[Line]:
    """Split raw multi-line text into segmented lines.

    Args:
        text: Newline-delimited input; blank lines are dropped
        segmenter: Engine producing the units (sylbreak by default)
        rules_engine: Optional granularity engine applied after segmentation
        ids: Segment id generator
        threshold: Under-segmentation warning threshold

    Returns:
        Lines numbered from 1, all pending
    """
    segmenter = segmenter or SylbreakSegmenter()
    lines = []
    for index, line_text in enumerate(split_into_lines(text)):
        units = segmenter.segment(line_text)
        if rules_engine is not None:
            units = rules_engine.resegment(units)
        lines.append(build_line(index + 1, line_text, units, ids, threshold))
    return lines


def split_segment(
    lines: list[Line],
    line_index: int,
    segment_index: int,
    position: int,
    ids: Optional[SegmentIdGenerator] = None,
    threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD,
) -> list[Line]:
    """Split one segment at a character offset.

    The left part keeps the segment id; the right part gets a new one.
    """
    if not _in_range(lines, line_index, segment_index):
        return lines
    line = lines[line_index]
    segment = line.segments[segment_index]
    if position <= 0 or position >= len(segment.text):
        return lines

    ids = ids or _default_ids
    left_text = segment.text[:position]
    right_text = segment.text[position:]

    segments = list(line.segments)
    segments[segment_index] = replace(
        segment, text=left_text, warnings=segment_warnings(left_text, threshold)
    )
    segments.insert(
        segment_index + 1,
        Segment(
            id=ids(line.id, segment_index + 1),
            text=right_text,
            warnings=segment_warnings(right_text, threshold),
        ),
    )

    new_lines = list(lines)
    new_lines[line_index] = replace(line, segments=segments, status="pending")
    return new_lines


def merge_segments(
    lines: list[Line],
    line_index: int,
    segment_index: int,
    threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD,
) -> list[Line]:
    """Merge a segment into its predecessor (no-op on the first segment)."""
    if segment_index <= 0 or not _in_range(lines, line_index, segment_index):
        return lines
    line = lines[line_index]
    previous = line.segments[segment_index - 1]
    current = line.segments[segment_index]
    merged_text = previous.text + current.text

    segments = list(line.segments)
    segments[segment_index - 1] = replace(
        previous, text=merged_text, warnings=segment_warnings(merged_text, threshold)
    )
    del segments[segment_index]

    new_lines = list(lines)
    new_lines[line_index] = replace(line, segments=segments, status="pending")
    return new_lines


def edit_segment(
    lines: list[Line],
    line_index: int,
    segment_index: int,
    new_text: str,
    ids: Optional[SegmentIdGenerator] = None,
    threshold: int = DEFAULT_UNDER_SEGMENTATION_THRESHOLD,
) -> list[Line]:
    """Replace one segment with the syllables of its edited text.

    An empty edit removes the segment.
    """
    if not _in_range(lines, line_index, segment_index):
        return lines
    ids = ids or _default_ids
    line = lines[line_index]
    replacement = [
        Segment(
            id=ids(line.id, segment_index + idx),
            text=syllable,
            warnings=segment_warnings(syllable, threshold),
        )
        for idx, syllable in enumerate(segment_into_syllables(new_text))
    ]

    segments = list(line.segments)
    segments[segment_index:segment_index + 1] = replacement

    new_lines = list(lines)
    new_lines[line_index] = replace(line, segments=segments, status="pending")
    return new_lines


def toggle_reviewed(lines: list[Line], line_index: int) -> list[Line]:
    """Flip a line between reviewed and pending."""
    if not 0 <= line_index < len(lines):
        return lines
    line = lines[line_index]
    status = "pending" if line.status == "reviewed" else "reviewed"
    new_lines = list(lines)
    new_lines[line_index] = replace(line, status=status)
    return new_lines


def _rewrite_texts(lines: list[Line], fn) -> list[Line]:
    new_lines = []
    for line in lines:
        segments = [replace(s, text=fn(s.text)) for s in line.segments]
        new_lines.append(
            replace(
                line,
                original_text=fn(line.original_text),
                segments=[s for s in segments if s.text],
            )
        )
    return new_lines


def clean_zwsp(lines: list[Line]) -> list[Line]:
    """Strip zero-width spaces from every segment and original text."""
    return _rewrite_texts(lines, remove_zwsp)


def normalize_line_spaces(lines: list[Line]) -> list[Line]:
    """Collapse repeated spaces in every segment and original text."""
    return _rewrite_texts(lines, normalize_spaces)
