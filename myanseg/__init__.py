"""Myanmar syllable segmentation and segmentation consistency checking."""

from .config import Config
from .conflicts import ConflictSession, apply_fix_all, mark_conflicts, resolve, scan
from .engines import ProviderError, RemoteSegmenter, SylbreakSegmenter, segment_into_syllables
from .glossary import Glossary
from .granularity import GranularityRuleEngine
from .models import ConflictLocation, ConflictRecord, ImportResult, Line, Segment
from .pipeline import SegmentationPipeline
from .scheduler import ScanScheduler

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConflictSession",
    "apply_fix_all",
    "mark_conflicts",
    "resolve",
    "scan",
    "ProviderError",
    "RemoteSegmenter",
    "SylbreakSegmenter",
    "segment_into_syllables",
    "Glossary",
    "GranularityRuleEngine",
    "ConflictLocation",
    "ConflictRecord",
    "ImportResult",
    "Line",
    "Segment",
    "SegmentationPipeline",
    "ScanScheduler",
]
