"""Segmentation memory: manual glossary, auto-learned entries, ambiguous words."""

import logging
from dataclasses import asdict, replace
from datetime import datetime, timezone
from typing import Optional

from .models import GlossaryEntry

logger = logging.getLogger(__name__)

AUTO_PROMOTE_THRESHOLD = 3


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Glossary:
    """
    Remembers how words were segmented.

    Manual entries are authoritative. Auto entries count how often the same
    word was segmented by the user and are promoted to manual once they reach
    ``promote_threshold`` uses. Words marked ambiguous are accepted in more
    than one form.
    """

    def __init__(self, promote_threshold: int = AUTO_PROMOTE_THRESHOLD):
        self.promote_threshold = promote_threshold
        self.manual: dict[str, GlossaryEntry] = {}
        self.auto: dict[str, GlossaryEntry] = {}
        self.ambiguous: set[str] = set()

    def add_manual(self, word: str, segments: list[str]) -> GlossaryEntry:
        existing = self.manual.get(word)
        if existing:
            entry = replace(existing, segments=list(segments), count=existing.count + 1)
        else:
            entry = GlossaryEntry(
                word=word,
                segments=list(segments),
                source="manual",
                added_at=_now(),
                is_ambiguous=word in self.ambiguous,
            )
        self.manual[word] = entry
        return entry

    def remove(self, word: str, source: str) -> None:
        if source == "manual":
            self.manual.pop(word, None)
        elif source == "auto":
            self.auto.pop(word, None)
        else:
            raise ValueError(f"Unknown glossary source: {source}")

    def track_segmentation(self, word: str, segments: list[str]) -> Optional[GlossaryEntry]:
        """Record one segmentation decision in the auto memory.

        Args:
            word: Joined text
            segments: Unit texts chosen for it

        Returns:
            The updated entry, or None when the word is already in the manual glossary
        """
        if word in self.manual:
            return None

        existing = self.auto.get(word)
        if existing is None:
            entry = GlossaryEntry(
                word=word, segments=list(segments), source="auto", added_at=_now()
            )
            self.auto[word] = entry
            return entry

        count = existing.count + 1
        if count >= self.promote_threshold:
            promoted = replace(existing, segments=list(segments), count=count, source="manual")
            del self.auto[word]
            self.manual[word] = promoted
            logger.info(f"Promoted {word!r} to the manual glossary after {count} uses")
            return promoted

        entry = replace(existing, segments=list(segments), count=count)
        self.auto[word] = entry
        return entry

    def lookup(self, word: str) -> Optional[GlossaryEntry]:
        """Manual entry first, then auto."""
        return self.manual.get(word) or self.auto.get(word)

    def get_suggestions(self, word: str) -> Optional[list[list[str]]]:
        """Known segmentations for a word, manual first, or None."""
        forms = [e.segments for e in (self.manual.get(word), self.auto.get(word)) if e]
        return forms or None

    def mark_ambiguous(self, word: str) -> None:
        self.ambiguous.add(word)
        for store in (self.manual, self.auto):
            if word in store:
                store[word] = replace(store[word], is_ambiguous=True)

    def is_ambiguous(self, word: str) -> bool:
        return word in self.ambiguous

    def clear(self) -> None:
        self.manual.clear()
        self.auto.clear()
        self.ambiguous.clear()

    def to_dict(self) -> dict:
        return {
            "manual": [asdict(e) for e in self.manual.values()],
            "auto": [asdict(e) for e in self.auto.values()],
            "ambiguous": sorted(self.ambiguous),
        }

    @classmethod
    def from_dict(cls, data: dict, promote_threshold: int = AUTO_PROMOTE_THRESHOLD) -> "Glossary":
        glossary = cls(promote_threshold=promote_threshold)
        for item in data.get("manual", []):
            entry = GlossaryEntry(**item)
            glossary.manual[entry.word] = entry
        for item in data.get("auto", []):
            entry = GlossaryEntry(**item)
            glossary.auto[entry.word] = entry
        glossary.ambiguous = set(data.get("ambiguous", []))
        return glossary

    def __len__(self) -> int:
        return len(self.manual) + len(self.auto)
