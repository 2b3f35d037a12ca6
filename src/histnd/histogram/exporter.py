"""
histnd.histogram.exporter
=========================

Write a filled HistogramField as a gnuplot table or as a raw grayscale
bitmap.

Table mode
----------
One tab-separated line per bin:
  <midpoint d0> <midpoint d1> ... <value>
value is the integer count, or in relative mode
  count / (prod(bin_size) * total_tuples)
where total_tuples includes out-of-range tuples. Dimension 0 varies
fastest. For 2+ dimensions a blank line closes every dimension-0 sweep
(gnuplot splot/pm3d scan separator).

With omit_outer_zero the traversal is limited to the touched bins plus one
empty border bin per side where available.

Raw mode
--------
Headerless 8-bit or 16-bit big-endian pixels in flat field order
(dimension 0 fastest). Dimension 0 is the image x axis:
  width = bin_count[0], height = bin_count[1]
e.g. `convert -flip -depth 8 -size WxH gray:out.raw out.pgm`.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, List, TextIO, Tuple
import logging

import numpy as np

from histnd.geometry.dimensions import HistogramConfig
from histnd.geometry.indexer import iter_positions
from histnd.histogram.field import ExtentTracker, HistogramField
from histnd.histogram.importer import ImportStats


log = logging.getLogger("histnd.exporter")

_PIXEL_DTYPES = {8: np.dtype(">u1"), 16: np.dtype(">u2")}


# -----------------------------------------------------------------------------
# Traversal ranges
# -----------------------------------------------------------------------------

def effective_ranges(
    config: HistogramConfig,
    tracker: ExtentTracker,
    trim: bool,
) -> List[Tuple[int, int]]:
    """
    Inclusive (lo, hi) bin range per dimension.

    trim=False -> full range [0, bin_count-1].
    trim=True  -> [max(0, min_seen-1), min(bin_count-1, max_seen+1)];
                  dimensions that were never hit keep the full range.
    """
    ranges: List[Tuple[int, int]] = []
    for d, spec in enumerate(config.dimensions):
        last = spec.bin_count - 1
        if trim and tracker.seen(d):
            lo, hi = tracker.bounds(d)
            ranges.append((max(0, lo - 1), min(last, hi + 1)))
        else:
            ranges.append((0, last))
    return ranges


# -----------------------------------------------------------------------------
# Table output
# -----------------------------------------------------------------------------

def iter_table_lines(
    config: HistogramConfig,
    field: HistogramField,
    stats: ImportStats,
    tracker: ExtentTracker,
) -> Iterator[str]:
    """Yield output lines (newline-terminated), blank separators included."""
    ranges = effective_ranges(config, tracker, trim=config.omit_outer_zero)
    norm = config.bin_volume * stats.total
    separate = config.dims > 1

    for pos, wrapped in iter_positions(ranges):
        coords = "".join(
            f"{spec.midpoint(p):f}\t" for spec, p in zip(config.dimensions, pos)
        )
        count = field.get(pos)
        if config.relative:
            yield f"{coords}{count / norm:e}\n"
        else:
            yield f"{coords}{count:d}\n"
        if separate and wrapped:
            yield "\n"


def write_table(
    stream: TextIO,
    config: HistogramConfig,
    field: HistogramField,
    stats: ImportStats,
    tracker: ExtentTracker,
) -> int:
    n = 0
    for line in iter_table_lines(config, field, stats, tracker):
        stream.write(line)
        n += 1
    return n


# -----------------------------------------------------------------------------
# Raw output
# -----------------------------------------------------------------------------

def scale_pixels(counts: np.ndarray, max_count: int, depth: int) -> np.ndarray:
    """
    Scale counts to [0, 2**depth - 1], rounding half up.

    max_count == 0 gives an all-zero image.
    """
    if depth not in _PIXEL_DTYPES:
        raise ValueError(f"Unsupported pixel depth: {depth!r}. Supported: 8, 16.")
    counts = np.asarray(counts, dtype=np.float64)
    if max_count <= 0:
        return np.zeros(counts.shape, dtype=np.uint32)
    full = float(2**depth - 1)
    scaled = np.floor(counts / float(max_count) * full + 0.5)
    return np.clip(scaled, 0.0, full).astype(np.uint32)


def encode_pixels(pixels: np.ndarray, depth: int) -> bytes:
    """Serialize pixels as depth/8 big-endian bytes each, host order independent."""
    if depth not in _PIXEL_DTYPES:
        raise ValueError(f"Unsupported pixel depth: {depth!r}. Supported: 8, 16.")
    return np.asarray(pixels).astype(_PIXEL_DTYPES[depth]).tobytes()


def write_raw(
    stream: BinaryIO,
    config: HistogramConfig,
    field: HistogramField,
) -> int:
    """Write the whole field as raw pixels. Returns the maximum cell count."""
    depth = config.raw_depth
    if depth is None:
        raise ValueError("write_raw() needs a config with raw_depth set")

    peak = field.max_count()
    if config.verbose:
        log.info("Maximum value found: %d", peak)

    pixels = scale_pixels(field.flat, peak, depth)
    stream.write(encode_pixels(pixels, depth))
    return peak


# -----------------------------------------------------------------------------
# Array form (plots)
# -----------------------------------------------------------------------------

def cell_values(
    config: HistogramConfig,
    field: HistogramField,
    stats: ImportStats,
) -> np.ndarray:
    """
    N-d array of the values the table would print, shape bin_counts.

    Relative mode uses the same normalization as the table output.
    """
    counts = field.as_array()
    if config.relative:
        return counts / (config.bin_volume * stats.total)
    return np.array(counts, dtype=np.int64)


def bin_edges(config: HistogramConfig) -> List[np.ndarray]:
    return [
        np.linspace(d.low, d.high, d.bin_count + 1, dtype=float) for d in config.dimensions
    ]
