"""Conflict resolution: rewrite non-canonical forms across the document."""

import itertools
import logging
from collections import defaultdict
from dataclasses import replace
from typing import Optional

from ..models import RESOLUTIONS, ConflictRecord, Line, Segment
from .scanner import MAX_WINDOW, scan

logger = logging.getLogger(__name__)

_resolution_counter = itertools.count(1)


def _replacement_segments(
    conflict: ConflictRecord, form: list[str], line_index: int, start: int
) -> list[Segment]:
    run = next(_resolution_counter)
    return [
        Segment(id=f"resolved-{conflict.id}-{line_index}-{start}-{k}-{run}", text=text)
        for k, text in enumerate(form)
    ]


def apply_fix_all(
    lines: list[Line], conflict: ConflictRecord, preferred_form: str
) -> list[Line]:
    """Rewrite every occurrence of the other form to the preferred form.

    Occurrences are grouped per line and spliced right to left, so earlier
    splices never shift the indices of those still to come. A splice whose
    current text no longer equals the conflict's word is skipped.

    Args:
        lines: Line set the conflict was scanned from
        conflict: Conflict record
        preferred_form: "formA" or "formB" (the canonical form)

    Returns:
        New line set; lines without occurrences are the same objects
    """
    if preferred_form == "formA":
        targets, canonical = conflict.locations_b, conflict.form_a
    elif preferred_form == "formB":
        targets, canonical = conflict.locations_a, conflict.form_b
    else:
        raise ValueError(f"fix_all needs preferred_form 'formA' or 'formB', got {preferred_form!r}")

    by_line = defaultdict(list)
    for loc in targets:
        by_line[loc.line_index].append(loc)

    new_lines = list(lines)
    replaced = 0
    for line_index, locations in by_line.items():
        if not 0 <= line_index < len(new_lines):
            logger.warning(f"Skipping {conflict.word!r}: line index {line_index} no longer exists")
            continue
        line = new_lines[line_index]
        segments = list(line.segments)
        changed = False

        for loc in sorted(locations, key=lambda l: l.start, reverse=True):
            start = loc.start
            count = len(loc.segment_indices)
            current = "".join(s.text for s in segments[start:start + count])
            if current != conflict.word:
                logger.warning(
                    f"Skipping splice at line {line_index} idx {start}: "
                    f"expected {conflict.word!r} but found {current!r}"
                )
                continue
            segments[start:start + count] = _replacement_segments(
                conflict, canonical, line_index, start
            )
            changed = True
            replaced += 1

        if changed:
            new_lines[line_index] = replace(line, segments=segments)

    logger.info(
        f"Fix all {conflict.word!r}: applied {preferred_form} at {replaced} of {len(targets)} sites"
    )
    return new_lines


def resolve(
    lines: list[Line],
    conflict: ConflictRecord,
    resolution: str,
    preferred_form: Optional[str] = None,
) -> list[Line]:
    """Resolve one conflict and record the resolution on the record.

    ``ignore`` and ``exception`` leave the text untouched; ``fix_all``
    rewrites the non-preferred form everywhere.
    """
    if resolution not in RESOLUTIONS:
        raise ValueError(f"Unknown resolution: {resolution}")

    new_lines = lines
    if resolution == "fix_all":
        new_lines = apply_fix_all(lines, conflict, preferred_form)

    conflict.resolution = resolution
    return new_lines


class ConflictSession:
    """Keeps the latest scan so its records can be resolved by id.

    A session is the in-memory view of one editing session: records are
    replaced wholesale by every scan, and resolutions only live until then.
    """

    def __init__(self, max_window: int = MAX_WINDOW, glossary=None):
        self.max_window = max_window
        self.glossary = glossary
        self.lines: list[Line] = []
        self.conflicts: list[ConflictRecord] = []

    def scan(self, lines: list[Line]) -> list[ConflictRecord]:
        self.lines = lines
        self.conflicts = scan(lines, self.max_window)
        return self.conflicts

    def get(self, conflict_id: str) -> ConflictRecord:
        for conflict in self.conflicts:
            if conflict.id == conflict_id:
                return conflict
        raise KeyError(conflict_id)

    def find_by_word(self, word: str) -> Optional[ConflictRecord]:
        for conflict in self.conflicts:
            if conflict.word == word:
                return conflict
        return None

    def unresolved(self) -> list[ConflictRecord]:
        return [c for c in self.conflicts if not c.resolved]

    def resolve(
        self,
        conflict_id: str,
        resolution: str,
        preferred_form: Optional[str] = None,
    ) -> list[Line]:
        """Resolve a conflict from the latest scan and return the new line set."""
        conflict = self.get(conflict_id)
        self.lines = resolve(self.lines, conflict, resolution, preferred_form)

        if self.glossary is not None:
            if resolution == "fix_all":
                form = conflict.form_a if preferred_form == "formA" else conflict.form_b
                self.glossary.track_segmentation(conflict.word, form)
            elif resolution == "exception":
                self.glossary.mark_ambiguous(conflict.word)

        return self.lines
