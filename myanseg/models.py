"""Data models for the segmentation editor core."""

from dataclasses import dataclass, field
from typing import Literal, Optional

LineStatus = Literal["pending", "reviewed", "conflict"]
SegmentWarning = Literal["under_segmentation", "long_syllable"]
Resolution = Literal["unresolved", "fix_all", "exception", "ignore"]
PreferredForm = Literal["formA", "formB"]
ConflictType = Literal[
    "under_segmentation", "over_segmentation", "inconsistent_segmentation"
]

RESOLUTIONS = ("fix_all", "exception", "ignore")


@dataclass
class Segment:
    """An atomic annotated unit (syllable, word or phrase)."""

    id: str
    text: str
    warnings: list[str] = field(default_factory=list)
    has_conflict: bool = False


@dataclass
class Line:
    """An ordered sequence of segments plus its source text."""

    id: int
    original_text: str
    segments: list[Segment] = field(default_factory=list)
    status: LineStatus = "pending"

    @property
    def texts(self) -> list[str]:
        return [seg.text for seg in self.segments]

    @property
    def joined_text(self) -> str:
        """Concatenated segment text (no delimiter)."""
        return "".join(self.texts)


@dataclass
class ConflictLocation:
    """One occurrence site of a segmentation form."""

    line_id: int
    line_index: int
    segment_indices: list[int]
    context: str

    @property
    def start(self) -> int:
        return self.segment_indices[0]

    def to_dict(self) -> dict:
        return {
            "lineId": self.line_id,
            "lineIndex": self.line_index,
            "segmentIndices": list(self.segment_indices),
            "context": self.context,
        }


@dataclass
class ConflictRecord:
    """A character sequence segmented two different ways in the document."""

    id: str
    word: str
    form_a: list[str]
    form_b: list[str]
    locations_a: list[ConflictLocation]
    locations_b: list[ConflictLocation]
    type: ConflictType = "inconsistent_segmentation"
    resolution: Resolution = "unresolved"

    @property
    def resolved(self) -> bool:
        return self.resolution != "unresolved"

    @property
    def form_a_key(self) -> str:
        return "|".join(self.form_a)

    @property
    def form_b_key(self) -> str:
        return "|".join(self.form_b)

    def touches(self, line_index: int, segment_index: Optional[int] = None) -> bool:
        """Check if any location of either form lies on a line (and segment)."""
        for loc in self.locations_a + self.locations_b:
            if loc.line_index != line_index:
                continue
            if segment_index is None or segment_index in loc.segment_indices:
                return True
        return False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.word,
            "formA": list(self.form_a),
            "formB": list(self.form_b),
            "locationsA": [loc.to_dict() for loc in self.locations_a],
            "locationsB": [loc.to_dict() for loc in self.locations_b],
            "type": self.type,
            "resolved": self.resolved,
            "resolution": self.resolution,
        }


@dataclass
class GlossaryEntry:
    """A remembered segmentation decision for one word."""

    word: str
    segments: list[str]
    source: Literal["manual", "auto"]
    count: int = 1
    added_at: str = ""
    is_ambiguous: bool = False


@dataclass
class ImportResult:
    """Lines produced by an import plus any non-fatal warnings."""

    lines: list[Line]
    warnings: list[str] = field(default_factory=list)
