"""Simple timing of repeated code sections."""

from __future__ import annotations

import math
import sys
import time
from typing import TextIO


class Record:
    """Collects durations in milliseconds between beg() and end() calls."""

    def __init__(self) -> None:
        self.records: list[float] = []
        self._start: float | None = None

    def beg(self) -> None:
        """Mark the start of a timed section."""
        self._start = time.perf_counter()

    def end(self) -> float:
        """Mark the end of a timed section and return its duration in milliseconds."""
        if self._start is None:
            raise RuntimeError("end() called before beg()")
        elapsed = (time.perf_counter() - self._start) * 1000.0
        self.records.append(elapsed)
        return elapsed

    def average(self) -> float:
        """Return the mean duration in milliseconds, NaN when nothing was recorded."""
        if not self.records:
            return math.nan
        return math.fsum(self.records) / len(self.records)

    def log(self, stream: TextIO | None = None) -> None:
        """Write every duration and the average to the stream."""
        out = sys.stdout if stream is None else stream
        for duration in self.records:
            out.write(f"{duration:g}ms\n")
        out.write(f"Avg:{self.average():g}ms\n")