"""Segmentation engines."""

from .base import SegmentationEngine
from .remote_engine import ProviderError, RemoteSegmenter
from .sylbreak_engine import SylbreakSegmenter, segment_into_syllables

__all__ = [
    "SegmentationEngine",
    "SylbreakSegmenter",
    "RemoteSegmenter",
    "ProviderError",
    "segment_into_syllables",
]
