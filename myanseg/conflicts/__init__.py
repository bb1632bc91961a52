"""Conflict detection and resolution."""

from .resolver import ConflictSession, apply_fix_all, resolve
from .scanner import (
    build_form_index,
    conflicts_for_line,
    conflicts_for_segment,
    mark_conflicts,
    scan,
)

__all__ = [
    "ConflictSession",
    "apply_fix_all",
    "resolve",
    "build_form_index",
    "conflicts_for_line",
    "conflicts_for_segment",
    "mark_conflicts",
    "scan",
]
