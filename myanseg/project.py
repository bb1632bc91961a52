"""Project persistence and CSV reports.

The core never touches storage; these helpers are called at explicit load and
save points with a snapshot of the line set.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from .glossary import Glossary
from .models import ConflictRecord, Line, Segment

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Myanmar_Segmentation_Project"

# Control characters that may interfere with CSV/Excel (except tab, newline, carriage return)
ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def sanitize_text(text: str) -> str:
    """Remove control characters that may interfere with CSV/Excel.

    Args:
        text: Input text

    Returns:
        Sanitized text
    """
    if not text:
        return text
    return ILLEGAL_CHARS.sub("", text)


def line_to_dict(line: Line) -> dict:
    """Compact line form: segment texts only."""
    return {
        "id": line.id,
        "originalText": line.original_text,
        "segments": line.texts,
        "status": line.status,
    }


def line_from_dict(data: dict) -> Line:
    """Rebuild a Line from its compact form (segment ids are regenerated)."""
    line_id = int(data["id"])
    return Line(
        id=line_id,
        original_text=data.get("originalText", ""),
        segments=[
            Segment(id=f"line-{line_id}-seg-{idx}-restored", text=text)
            for idx, text in enumerate(data.get("segments", []))
            if text
        ],
        status=data.get("status", "pending"),
    )


def export_project(lines: list[Line], name: str = DEFAULT_PROJECT_NAME) -> dict:
    """Build the exportable project structure for a line set."""
    now = datetime.now(timezone.utc)
    return {
        "projectMeta": {
            "name": name,
            "createdAt": now.date().isoformat(),
            "totalLines": len(lines),
            "lastModified": now.isoformat(),
        },
        "content": [line_to_dict(line) for line in lines],
    }


def save_project(path: str | Path, lines: list[Line], name: str = DEFAULT_PROJECT_NAME) -> Path:
    """Write a project JSON file.

    Args:
        path: Output file path
        lines: Line set snapshot
        name: Project name stored in the metadata

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_project(lines, name), f, ensure_ascii=False, indent=2)
    logger.info(f"Saved {len(lines)} lines to: {path}")
    return path


def read_project(path: str | Path) -> tuple[list[Line], dict]:
    """Read a project JSON file.

    Returns:
        Tuple of (lines, projectMeta dict)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Project file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    lines = [line_from_dict(item) for item in data.get("content", [])]
    logger.info(f"Loaded {len(lines)} lines from: {path}")
    return lines, data.get("projectMeta", {})


def load_project(path: str | Path) -> list[Line]:
    """Read the lines of a project JSON file."""
    return read_project(path)[0]


def glossary_path_for(project_path: str | Path) -> Path:
    """Glossary file stored next to a project: ``<stem>_glossary.json``."""
    project_path = Path(project_path)
    return project_path.with_name(f"{project_path.stem}_glossary.json")


def load_glossary(path: str | Path) -> Glossary:
    """Read a glossary JSON file, or start an empty glossary if there is none."""
    path = Path(path)
    if not path.exists():
        return Glossary()
    with open(path, "r", encoding="utf-8") as f:
        glossary = Glossary.from_dict(json.load(f))
    logger.info(f"Loaded {len(glossary)} glossary entries from: {path}")
    return glossary


def save_glossary(path: str | Path, glossary: Glossary) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(glossary.to_dict(), f, ensure_ascii=False, indent=2)
    return path


def _sanitize_frame(df: pd.DataFrame) -> pd.DataFrame:
    for col in df.select_dtypes(include=["object"]).columns:
        df[col] = df[col].apply(lambda x: sanitize_text(x) if isinstance(x, str) else x)
    return df


def segments_to_frame(lines: list[Line]) -> pd.DataFrame:
    """One row per segment."""
    rows = []
    for line_idx, line in enumerate(lines):
        for seg_idx, segment in enumerate(line.segments):
            rows.append({
                "Line_ID": line.id,
                "Line_Index": line_idx,
                "Segment_Index": seg_idx,
                "Segment_ID": segment.id,
                "Text": segment.text,
                "Warnings": ",".join(segment.warnings),
                "Status": line.status,
            })
    return pd.DataFrame(
        rows,
        columns=["Line_ID", "Line_Index", "Segment_Index", "Segment_ID", "Text", "Warnings", "Status"],
    )


def conflicts_to_frame(conflicts: list[ConflictRecord]) -> pd.DataFrame:
    """One row per conflict occurrence, labelled with the form it uses."""
    rows = []
    for conflict in conflicts:
        for form_label, form, locations in (
            ("formA", conflict.form_a, conflict.locations_a),
            ("formB", conflict.form_b, conflict.locations_b),
        ):
            for loc in locations:
                rows.append({
                    "Conflict_ID": conflict.id,
                    "Word": conflict.word,
                    "Form": form_label,
                    "Units": "|".join(form),
                    "Line_ID": loc.line_id,
                    "Line_Index": loc.line_index,
                    "Segment_Indices": " ".join(str(i) for i in loc.segment_indices),
                    "Context": loc.context,
                    "Resolution": conflict.resolution,
                })
    return pd.DataFrame(
        rows,
        columns=[
            "Conflict_ID", "Word", "Form", "Units", "Line_ID", "Line_Index",
            "Segment_Indices", "Context", "Resolution",
        ],
    )


def save_segments_csv(path: str | Path, lines: list[Line]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _sanitize_frame(segments_to_frame(lines)).to_csv(path, index=False)
    return path


def save_conflicts_csv(path: str | Path, conflicts: list[ConflictRecord]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _sanitize_frame(conflicts_to_frame(conflicts)).to_csv(path, index=False)
    return path
