"""Cross-document segmentation consistency scanner.

For every run of 2..4 adjacent units the scanner records which unit texts
produced which concatenated text. A concatenated text that was produced by
two different unit sequences anywhere in the document is a conflict.
"""

import logging
from dataclasses import replace

from ..models import ConflictLocation, ConflictRecord, Line

logger = logging.getLogger(__name__)

MAX_WINDOW = 4

# joined text -> form (tuple of unit texts) -> occurrences, both in first-seen order
FormIndex = dict[str, dict[tuple[str, ...], list[ConflictLocation]]]


def _context(texts: list[str], start: int, size: int) -> str:
    """Unit texts of the window plus one unit of padding on each side."""
    ctx_start = max(0, start - 1)
    ctx_end = min(len(texts), start + size + 1)
    return " ".join(texts[ctx_start:ctx_end])


def _window_texts(lines: list[Line], max_window: int) -> set[str]:
    """Joined text of every multi-unit window in the document."""
    joined = set()
    for line in lines:
        texts = line.texts
        for size in range(2, min(max_window, len(texts)) + 1):
            for start in range(len(texts) - size + 1):
                joined.add("".join(texts[start:start + size]))
    return joined


def build_form_index(lines: list[Line], max_window: int = MAX_WINDOW) -> FormIndex:
    """Index every multi-unit window and every single unit that matches one.

    Lines are visited in order. Within a line, windows come first (size
    ascending, start ascending), then the line's single units. A single unit
    is recorded when any line of the document has a window with the same
    joined text, so it is found whether its line comes before or after the
    multi-unit form.

    Args:
        lines: Current line set
        max_window: Largest window size (units)

    Returns:
        Insertion-ordered index of joined text to forms to locations
    """
    window_texts = _window_texts(lines, max_window)
    index: FormIndex = {}

    for line_idx, line in enumerate(lines):
        texts = line.texts
        for size in range(2, min(max_window, len(texts)) + 1):
            for start in range(len(texts) - size + 1):
                window = tuple(texts[start:start + size])
                joined = "".join(window)
                index.setdefault(joined, {}).setdefault(window, []).append(
                    ConflictLocation(
                        line_id=line.id,
                        line_index=line_idx,
                        segment_indices=list(range(start, start + size)),
                        context=_context(texts, start, size),
                    )
                )

        for start, text in enumerate(texts):
            if text not in window_texts:
                continue
            index.setdefault(text, {}).setdefault((text,), []).append(
                ConflictLocation(
                    line_id=line.id,
                    line_index=line_idx,
                    segment_indices=[start],
                    context=_context(texts, start, 1),
                )
            )

    return index


def scan(lines: list[Line], max_window: int = MAX_WINDOW) -> list[ConflictRecord]:
    """Find character sequences segmented in more than one way.

    Only the first two forms (in scan order) of a sequence are reported; a
    third or later variant is not turned into another record.

    Args:
        lines: Current line set
        max_window: Largest window size (units)

    Returns:
        One unresolved ConflictRecord per conflicting sequence
    """
    conflicts = []
    for word, forms in build_form_index(lines, max_window).items():
        if len(forms) < 2:
            continue
        (form_a, locs_a), (form_b, locs_b) = list(forms.items())[:2]
        if len(forms) > 2:
            logger.debug(f"{word!r} has {len(forms)} forms; reporting the first two")
        conflicts.append(
            ConflictRecord(
                id=f"conflict-{len(conflicts)}",
                word=word,
                form_a=list(form_a),
                form_b=list(form_b),
                locations_a=locs_a,
                locations_b=locs_b,
            )
        )

    logger.debug(f"Scanned {len(lines)} lines, found {len(conflicts)} conflicts")
    return conflicts


def conflicts_for_line(
    conflicts: list[ConflictRecord], line_index: int
) -> list[ConflictRecord]:
    """Unresolved conflicts with an occurrence on the given line."""
    return [c for c in conflicts if not c.resolved and c.touches(line_index)]


def conflicts_for_segment(
    conflicts: list[ConflictRecord], line_index: int, segment_index: int
) -> list[ConflictRecord]:
    """Unresolved conflicts with an occurrence covering the given segment."""
    return [
        c for c in conflicts if not c.resolved and c.touches(line_index, segment_index)
    ]


def mark_conflicts(lines: list[Line], conflicts: list[ConflictRecord]) -> list[Line]:
    """Set segment conflict flags from the unresolved conflicts.

    Pending lines with a flagged segment become ``conflict``; lines whose
    flags did not change are returned as the same objects.
    """
    flagged: dict[int, set[int]] = {}
    for conflict in conflicts:
        if conflict.resolved:
            continue
        for loc in conflict.locations_a + conflict.locations_b:
            flagged.setdefault(loc.line_index, set()).update(loc.segment_indices)

    new_lines = []
    for line_idx, line in enumerate(lines):
        indices = flagged.get(line_idx, set())
        flags = [i in indices for i in range(len(line.segments))]
        status = line.status
        if indices and status == "pending":
            status = "conflict"
        elif not indices and status == "conflict":
            status = "pending"
        if status == line.status and flags == [s.has_conflict for s in line.segments]:
            new_lines.append(line)
            continue
        segments = [
            replace(s, has_conflict=flag) for s, flag in zip(line.segments, flags)
        ]
        new_lines.append(replace(line, segments=segments, status=status))
    return new_lines
