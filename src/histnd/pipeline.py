"""
histnd.pipeline
===============

One histogram run: allocate -> import -> export.

Phases never overlap. build_histogram() finishes the import (and raises
NoDataError if nothing was usable) before export_histogram() writes a single
byte, so a failed run leaves the output untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional, TextIO
import logging

from histnd.geometry.dimensions import HistogramConfig
from histnd.histogram.exporter import write_raw, write_table
from histnd.histogram.field import ExtentTracker, HistogramField
from histnd.histogram.importer import ImportStats, Importer, ObservedRange
from histnd.io.reader import read_tuples


@dataclass
class HistogramRun:
    config: HistogramConfig
    field: HistogramField
    tracker: ExtentTracker
    stats: ImportStats
    observed: ObservedRange
    max_count: Optional[int] = None


def build_histogram(
    config: HistogramConfig,
    lines: Iterable[str],
    logger: Optional[logging.Logger] = None,
) -> HistogramRun:
    """
    Allocate the field and import text lines into it.

    Raises
    ------
    NoDataError
      if no tuple landed inside the histogram.
    """
    logger = logger or logging.getLogger("histnd")
    if config.verbose:
        for line in config.describe().splitlines():
            logger.info("%s", line)

    field = HistogramField(config.bin_counts)
    tracker = ExtentTracker(config.dims)
    importer = Importer(config, field, tracker)

    importer.consume(read_tuples(lines, config.dims))
    stats = importer.finish()

    return HistogramRun(
        config=config,
        field=field,
        tracker=tracker,
        stats=stats,
        observed=importer.observed,
    )


def export_histogram(
    run: HistogramRun,
    *,
    text_out: Optional[TextIO] = None,
    binary_out: Optional[BinaryIO] = None,
) -> None:
    """Write raw pixels to binary_out in raw mode, the table to text_out otherwise."""
    if run.config.raw:
        if binary_out is None:
            raise ValueError("Raw output needs a binary stream")
        run.max_count = write_raw(binary_out, run.config, run.field)
        binary_out.flush()
    else:
        if text_out is None:
            raise ValueError("Table output needs a text stream")
        write_table(text_out, run.config, run.field, run.stats, run.tracker)
        text_out.flush()


def run_histogram(
    config: HistogramConfig,
    lines: Iterable[str],
    *,
    text_out: Optional[TextIO] = None,
    binary_out: Optional[BinaryIO] = None,
    logger: Optional[logging.Logger] = None,
) -> HistogramRun:
    """build_histogram() followed by export_histogram()."""
    run = build_histogram(config, lines, logger=logger)
    export_histogram(run, text_out=text_out, binary_out=binary_out)
    return run
