"""Debounced conflict scanning.

Edits call ``request`` with the new line set. The scan itself runs only once
the delay has passed without a newer request, on the latest line set; an
earlier pending request is simply superseded. Nothing runs in the background:
the owner drives the scheduler by calling ``poll`` from its event loop.
"""

import logging
import time
from functools import partial
from typing import Callable, Optional

from .conflicts.scanner import scan
from .models import ConflictRecord, Line

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.3


class ScanScheduler:
    """Coalesces rapid edits into a single scan."""

    def __init__(
        self,
        scan_fn: Callable[[list[Line]], list[ConflictRecord]] = scan,
        delay: float = DEFAULT_DELAY,
        clock: Callable[[], float] = time.monotonic,
        on_result: Optional[Callable[[list[ConflictRecord]], None]] = None,
    ):
        """Initialize the scheduler.

        Args:
            scan_fn: Function run on the latest line set
            delay: Debounce delay in seconds
            clock: Monotonic time source (injectable for tests)
            on_result: Optional callback receiving each scan's records
        """
        self.scan_fn = scan_fn
        self.delay = delay
        self.clock = clock
        self.on_result = on_result

        self._ticket = 0
        self._pending_lines: Optional[list[Line]] = None
        self._due_at: Optional[float] = None
        self.last_ticket: Optional[int] = None
        self.last_result: Optional[list[ConflictRecord]] = None

    @classmethod
    def from_config(cls, config, **kwargs) -> "ScanScheduler":
        """Build a scheduler from a ConflictConfig (window size and delay)."""
        return cls(
            scan_fn=partial(scan, max_window=config.max_window),
            delay=config.debounce_seconds,
            **kwargs,
        )

    @property
    def pending(self) -> bool:
        return self._due_at is not None

    def request(self, lines: list[Line]) -> int:
        """Schedule a scan of ``lines``, superseding any pending request.

        Returns:
            Logical timestamp of this request
        """
        self._ticket += 1
        self._pending_lines = lines
        self._due_at = self.clock() + self.delay
        return self._ticket

    def cancel(self) -> None:
        self._pending_lines = None
        self._due_at = None

    def poll(self) -> Optional[list[ConflictRecord]]:
        """Run the pending scan if its delay has elapsed.

        Returns:
            The scan result, or None if nothing was due
        """
        if self._due_at is None or self.clock() < self._due_at:
            return None
        return self._fire()

    def flush(self) -> Optional[list[ConflictRecord]]:
        """Run the pending scan now, regardless of the delay."""
        if self._due_at is None:
            return None
        return self._fire()

    def _fire(self) -> list[ConflictRecord]:
        lines = self._pending_lines or []
        ticket = self._ticket
        self.cancel()

        result = self.scan_fn(lines)
        self.last_ticket = ticket
        self.last_result = result
        logger.debug(f"Scan for request {ticket} found {len(result)} conflicts")
        if self.on_result is not None:
            self.on_result(result)
        return result
