# src/bealsearch/progress.py
from __future__ import annotations

import sys
import time

from bealsearch.fmt import format_duration

_SPINNER = "|/-\\"
_WIDTH = 24


class Progress:
    """Single-line bar redrawn in place while slices of 'a' complete."""

    THROTTLE = 0.05  # seconds between redraws

    def __init__(self, total: int, *, enabled: bool = True, stream=None):
        self.total = max(1, int(total))
        self.enabled = enabled
        self.stream = stream or sys.stdout
        self.found = 0
        self._t0 = time.perf_counter()
        self._drawn_at = 0.0
        self._tick = 0

    def update(self, done: int, a: int, found: int = 0) -> None:
        """Callback for SearchOrchestrator.search_many: `done` slices finished, the last being `a`."""
        self.found += found
        if not self.enabled:
            return
        now = time.perf_counter()
        if done < self.total and now - self._drawn_at < self.THROTTLE:
            return
        self._drawn_at = now
        self._tick += 1

        share = min(done, self.total) / self.total
        filled = int(share * _WIDTH)
        remaining = (now - self._t0) / done * (self.total - done) if done else 0.0
        self.stream.write(
            f"\r[{_SPINNER[self._tick % len(_SPINNER)]}] [{'#' * filled}{'-' * (_WIDTH - filled)}] "
            f"{int(share * 100):3d}%  a={a}  candidates={self.found}  eta {format_duration(remaining)}"
        )
        self.stream.flush()

    def done(self) -> None:
        if self.enabled:
            self.stream.write("\r\x1b[2K")
            self.stream.flush()
