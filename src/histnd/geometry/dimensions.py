"""
histnd.geometry.dimensions
==========================

Per-dimension binning specs and the validated, immutable histogram config.

Everything downstream (field allocation, importer, exporter) receives a
HistogramConfig built by build_config(). Validation happens once, here,
before any buffer is allocated.

Conventions
-----------
• Each dimension covers the half-open interval [low, high).
• bin_size = (high - low) / bin_count
• Dimension 0 is the fastest-varying axis of the flattened field and the
  x axis of raw bitmaps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple
import math

from histnd.errors import ConfigurationError


MAX_DIM = 100           # dims must be strictly below this
MAX_CELLS = 2**31 - 1   # upper bound on the product of all bin counts


# -----------------------------------------------------------------------------
# Per-dimension spec
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DimensionSpec:
    """
    Bounds and bin count of one histogram dimension.

    low, high : float
        Half-open range [low, high) covered by the bins.
    bin_count : int
        Number of equally sized bins (>= 1).
    """
    low: float
    high: float
    bin_count: int

    @property
    def bin_size(self) -> float:
        return (self.high - self.low) / self.bin_count

    def contains(self, value: float) -> bool:
        # NaN compares False on both sides and is therefore out of range
        return self.low <= value < self.high

    def bin_index(self, value: float) -> int:
        """
        Bin holding an in-range value.

        The quotient can round up to bin_count for values just below high,
        so the result is clamped to the last bin.
        """
        idx = int(math.floor((value - self.low) / self.bin_size))
        return min(max(idx, 0), self.bin_count - 1)

    def midpoint(self, index: int) -> float:
        return self.low + ((index + 0.5) * (self.high - self.low)) / self.bin_count


# -----------------------------------------------------------------------------
# Whole-histogram config
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HistogramConfig:
    """
    Validated configuration consumed by the importer and exporter.

    raw_depth is None for table output, 8 or 16 for raw grayscale output.
    """
    dimensions: Tuple[DimensionSpec, ...]
    relative: bool = False
    raw_depth: Optional[int] = None
    omit_outer_zero: bool = False
    verbose: bool = True

    @property
    def dims(self) -> int:
        return len(self.dimensions)

    @property
    def bin_counts(self) -> Tuple[int, ...]:
        return tuple(d.bin_count for d in self.dimensions)

    @property
    def cell_count(self) -> int:
        return math.prod(self.bin_counts)

    @property
    def bin_volume(self) -> float:
        """Product of all bin sizes."""
        vol = 1.0
        for d in self.dimensions:
            vol *= d.bin_size
        return vol

    @property
    def raw(self) -> bool:
        return self.raw_depth is not None

    def describe(self) -> str:
        lines = [f"Using {self.dims} dimensions, relative = {int(self.relative)} with:"]
        for d in self.dimensions:
            lines.append(
                f"  [{d.low:f}, {d.high:f}), bin_count = {d.bin_count}, bin_size = {d.bin_size:f}"
            )
        return "\n".join(lines)


# -----------------------------------------------------------------------------
# Builder + validation
# -----------------------------------------------------------------------------

def build_config(
    dimensions: Iterable[Any],
    *,
    dims: Optional[int] = None,
    relative: bool = False,
    raw8: bool = False,
    raw16: bool = False,
    omit_outer_zero: bool = False,
    verbose: bool = True,
) -> HistogramConfig:
    """
    Validate inputs and build a HistogramConfig.

    Parameters
    ----------
    dimensions:
      Sequence of DimensionSpec or (low, high, bin_count) triples.
    dims:
      Declared dimensionality. If given, it must match len(dimensions).

    Raises
    ------
    ConfigurationError
      on any invalid combination; nothing is allocated before this passes.
    """
    specs = tuple(_as_spec(d, i) for i, d in enumerate(dimensions))

    n = len(specs) if dims is None else _as_int(dims, "dims")
    if n < 1 or n >= MAX_DIM:
        raise ConfigurationError(
            f"Wrong dimensions specified: {n}, should be between 1 and {MAX_DIM - 1}"
        )
    if len(specs) != n:
        raise ConfigurationError(
            f"Expected {n} (low, high, bins) triples for {n} dimensions, got {len(specs)}"
        )

    if raw8 and raw16:
        raise ConfigurationError("You cannot have both, raw8 and raw16, pick one")

    raw_depth = 8 if raw8 else (16 if raw16 else None)
    if raw_depth is not None:
        if n != 2 or not relative:
            raise ConfigurationError("Raw output requires relative mode and exactly 2 dimensions")
        if omit_outer_zero:
            raise ConfigurationError("Omitting outer zero bins does not work with raw output")

    for i, spec in enumerate(specs):
        if not (math.isfinite(spec.low) and math.isfinite(spec.high)):
            raise ConfigurationError(f"Non-finite bounds for dimension {i}: [{spec.low}, {spec.high})")
        if spec.low >= spec.high or spec.bin_count < 1:
            raise ConfigurationError(
                f"Wrong range arguments for dimension {i}: "
                f"low={spec.low}, high={spec.high}, bins={spec.bin_count}"
            )
        if not (math.isfinite(spec.high - spec.low) and spec.bin_size > 0.0):
            raise ConfigurationError(
                f"Range of dimension {i} is not representable: "
                f"high - low = {spec.high - spec.low}, bin_size = {spec.bin_size}"
            )

    cells = math.prod(s.bin_count for s in specs)
    if cells > MAX_CELLS:
        raise ConfigurationError(f"Histogram too large: {cells} cells (max {MAX_CELLS})")

    if relative:
        # relative values divide by prod(bin_size); it must stay a usable float
        vol = math.prod(s.bin_size for s in specs)
        if not (math.isfinite(vol) and vol > 0.0 and math.isfinite(1.0 / vol)):
            raise ConfigurationError(
                f"Product of bin sizes ({vol!r}) is too small or too large for relative output"
            )

    return HistogramConfig(
        dimensions=specs,
        relative=bool(relative),
        raw_depth=raw_depth,
        omit_outer_zero=bool(omit_outer_zero),
        verbose=bool(verbose),
    )


def _as_spec(item: Any, index: int) -> DimensionSpec:
    if isinstance(item, DimensionSpec):
        return item
    if isinstance(item, dict):
        return DimensionSpec(
            low=_as_float(item.get("low"), f"dimensions[{index}].low"),
            high=_as_float(item.get("high"), f"dimensions[{index}].high"),
            bin_count=_as_int(item.get("bins"), f"dimensions[{index}].bins"),
        )
    if isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 3:
        low, high, bins = item
        return DimensionSpec(
            low=_as_float(low, f"dimensions[{index}].low"),
            high=_as_float(high, f"dimensions[{index}].high"),
            bin_count=_as_int(bins, f"dimensions[{index}].bins"),
        )
    raise ConfigurationError(f"dimensions[{index}] must be a (low, high, bins) triple, got {item!r}")


def _as_float(x: Any, name: str) -> float:
    if x is None:
        raise ConfigurationError(f"Missing required config value: {name}")
    try:
        return float(x)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid float for {name}: {x!r}") from e


def _as_int(x: Any, name: str) -> int:
    if x is None:
        raise ConfigurationError(f"Missing required config value: {name}")
    if isinstance(x, float) and not x.is_integer():
        raise ConfigurationError(f"Invalid int for {name}: {x!r}")
    try:
        return int(x)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid int for {name}: {x!r}") from e
