"""
histnd.histogram.importer
=========================

Fill a HistogramField from a stream of parsed tuples.

Per tuple
---------
1) update the observed value range (all values, in range or not)
2) in range iff low[d] <= v[d] < high[d] for every d
3) in range  -> increment the cell, update the extent tracker
   otherwise -> count it as out of range
4) count it in the total either way

A failed ParsedLine stops the import. Everything counted so far is kept and
goes on to export. finish() raises NoDataError when nothing landed inside
the histogram.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
import logging
import math

from histnd.errors import NoDataError, ParseError
from histnd.geometry.dimensions import HistogramConfig
from histnd.histogram.field import ExtentTracker, HistogramField
from histnd.io.reader import ParsedLine


log = logging.getLogger("histnd.importer")


class ObservedRange:
    """Min/max of every parsed value per dimension (diagnostics only)."""

    def __init__(self, dims: int) -> None:
        self.min_observed: List[float] = [math.inf] * int(dims)
        self.max_observed: List[float] = [-math.inf] * int(dims)

    def update(self, values: Sequence[float]) -> None:
        for d, v in enumerate(values):
            if v < self.min_observed[d]:
                self.min_observed[d] = v
            if v > self.max_observed[d]:
                self.max_observed[d] = v

    def describe(self) -> str:
        parts = [f"[{lo:g}, {hi:g}]" for lo, hi in zip(self.min_observed, self.max_observed)]
        return "Ranges of values read: " + ", ".join(parts)


@dataclass
class ImportStats:
    total: int = 0
    out_of_range: int = 0
    stopped_at: Optional[int] = None

    @property
    def accepted(self) -> int:
        return self.total - self.out_of_range


class Importer:
    def __init__(
        self,
        config: HistogramConfig,
        field: HistogramField,
        tracker: ExtentTracker,
    ) -> None:
        self.config = config
        self.field = field
        self.tracker = tracker
        self.stats = ImportStats()
        self.observed = ObservedRange(config.dims)

    def add(self, values: Sequence[float]) -> bool:
        """Insert one tuple. Returns True if it was in range."""
        dims = self.config.dimensions
        if len(values) != len(dims):
            raise ValueError(f"Expected a {len(dims)}-tuple, got {len(values)} values")

        self.observed.update(values)
        in_range = all(spec.contains(v) for spec, v in zip(dims, values))
        if in_range:
            pos = [spec.bin_index(v) for spec, v in zip(dims, values)]
            self.field.increment(pos)
            self.tracker.update(pos)
        else:
            self.stats.out_of_range += 1
        self.stats.total += 1
        return in_range

    def consume(self, records: Iterable[ParsedLine]) -> ImportStats:
        """
        Feed parsed lines until the stream ends or a line fails to parse.
        """
        for rec in records:
            if not rec.ok:
                err = ParseError(rec.line_nr, rec.text, self.config.dims)
                log.error("%s", err)
                log.error("Stopping import here ...")
                self.stats.stopped_at = rec.line_nr
                break
            self.add(rec.values)
        return self.stats

    def finish(self) -> ImportStats:
        """
        Report diagnostics; raise NoDataError if no tuple was accepted.

        Ranges and counts are only logged for verbose configs. The lost-tuple
        warning is always logged.
        """
        stats = self.stats
        verbose = self.config.verbose
        if verbose:
            log.info("%s", self.observed.describe())

        if stats.out_of_range > 0:
            log.warning(
                "Lost %d tuples because they were out of the specified range",
                stats.out_of_range,
            )

        if stats.accepted <= 0:
            raise NoDataError("No input data received, giving up")

        if verbose:
            log.info(
                "Read %d tuples, %d were in the specified range",
                stats.total,
                stats.accepted,
            )
        return stats
