"""Main segmentation pipeline."""

import logging
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from .config import Config
from .conflicts import mark_conflicts
from .editor import SegmentIdGenerator, build_line
from .engines import ProviderError, RemoteSegmenter, SegmentationEngine, SylbreakSegmenter
from .granularity import GranularityRuleEngine
from .models import ConflictRecord, ImportResult, Line
from .project import save_conflicts_csv, save_project, save_segments_csv
from .scheduler import ScanScheduler
from .utils.text_normalizer import split_into_lines

logger = logging.getLogger(__name__)


class SegmentationPipeline:
    """Pipeline for segmenting Myanmar text into reviewable lines."""

    def __init__(self, config: Config, session=None):
        """Initialize segmentation pipeline.

        Args:
            config: Pipeline configuration
            session: Optional requests.Session for the remote engine
        """
        self.config = config
        self.fallback = SylbreakSegmenter()

        if config.segmentation.engine == "remote":
            self.segmenter: SegmentationEngine = RemoteSegmenter(
                config.remote.url, timeout=config.remote.timeout, session=session
            )
        else:
            self.segmenter = self.fallback

        self.rules_engine = GranularityRuleEngine.from_config(config.granularity)
        self.threshold = config.segmentation.under_segmentation_threshold
        self.ids = SegmentIdGenerator()
        self.conflicts: list[ConflictRecord] = []
        self.scheduler = ScanScheduler.from_config(config.conflicts, on_result=self._set_conflicts)

    def _set_conflicts(self, conflicts: list[ConflictRecord]) -> None:
        self.conflicts = conflicts

    def _segment_line(self, text: str) -> tuple[list[str], Optional[str]]:
        """Segment one line, falling back to the local engine on provider failure.

        Returns:
            Tuple of (units, warning or None)
        """
        try:
            return self.segmenter.segment(text), None
        except ProviderError as e:
            logger.warning(f"{self.segmenter.name} segmentation failed, using sylbreak: {e}")
            warning = f"{self.segmenter.name} provider failed for {text[:30]!r}; used sylbreak"
            return self.fallback.segment(text), warning

    def process_text(self, text: str, show_progress: bool = False) -> ImportResult:
        """Segment raw multi-line text.

        Args:
            text: Newline-delimited input; blank lines are dropped
            show_progress: Show a progress bar over lines

        Returns:
            ImportResult with pending lines numbered from 1 and any provider warnings
        """
        texts = split_into_lines(text)
        desc_text = f"{self.segmenter.name.title()} Processing ({self.rules_engine.active_preset or 'custom'})"

        lines: list[Line] = []
        warnings: list[str] = []
        for index, line_text in enumerate(
            tqdm(texts, desc=desc_text, disable=not show_progress)
        ):
            units, warning = self._segment_line(line_text)
            if warning:
                warnings.append(warning)
            units = self.rules_engine.resegment(units)
            lines.append(build_line(index + 1, line_text, units, self.ids, self.threshold))

        if warnings:
            logger.warning(f"{len(warnings)} of {len(lines)} lines fell back to sylbreak")
        return ImportResult(lines=lines, warnings=warnings)

    def schedule_scan(self, lines: list[Line]) -> int:
        """Queue a debounced rescan after an edit.

        The scan runs on the latest queued line set once ``poll_scan`` is called
        after the configured delay; its records replace ``self.conflicts``.
        """
        return self.scheduler.request(lines)

    def poll_scan(self) -> Optional[list[ConflictRecord]]:
        return self.scheduler.poll()

    def scan_conflicts(self, lines: list[Line]) -> list[Line]:
        """Scan a line set now and flag the segments involved in conflicts."""
        self.scheduler.request(lines)
        self.scheduler.flush()
        logger.info(f"Found {len(self.conflicts)} segmentation conflicts")
        return mark_conflicts(lines, self.conflicts)

    def save_outputs(self, lines: list[Line]) -> Path:
        """Write the project JSON and the enabled CSV reports.

        Returns:
            Path of the project JSON
        """
        output = self.config.output
        output.output_dir.mkdir(parents=True, exist_ok=True)
        name = output.project_name

        project_path = save_project(output.output_dir / f"{name}.json", lines, name)
        if output.save_segments_csv:
            path = save_segments_csv(output.output_dir / f"{name}_segments.csv", lines)
            logger.info(f"Segments saved in: {path}")
        if output.save_conflicts_csv:
            path = save_conflicts_csv(output.output_dir / f"{name}_conflicts.csv", self.conflicts)
            logger.info(f"Conflicts saved in: {path}")
        return project_path

    def process_file(self, input_path: Path) -> ImportResult:
        """Segment a UTF-8 text file, scan it for conflicts and save the outputs.

        Args:
            input_path: Path to input text file (one line of text per line)

        Returns:
            ImportResult whose lines carry conflict flags
        """
        logger.info(f"Reading from: {input_path}")
        with open(input_path, "r", encoding="utf-8") as f:
            text = f.read()

        result = self.process_text(text, show_progress=True)
        lines = self.scan_conflicts(result.lines)
        self.save_outputs(lines)
        return ImportResult(lines=lines, warnings=result.warnings)

    def run(self) -> int:
        """Run the segmentation pipeline.

        Returns:
            Number of lines processed
        """
        if not self.config.input_file:
            raise ValueError("Input file not specified in configuration")

        if not self.config.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {self.config.input_file}")

        return len(self.process_file(self.config.input_file).lines)
