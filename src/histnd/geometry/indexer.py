"""
histnd.geometry.indexer
=======================

Row-major addressing over a variable-dimensional position space.

Dimension 0 is fastest-varying:
  stride[0] = 1
  stride[d] = stride[d-1] * extents[d-1]
  offset    = sum(pos[d] * stride[d])

Pure functions, no state. The importer uses linearize() for single-cell
read-modify-write, the exporter uses iter_positions() to enumerate cells.
Python ints never overflow, so large fields are safe.
"""

from __future__ import annotations

from typing import Iterator, List, MutableSequence, Sequence, Tuple


def strides(extents: Sequence[int]) -> List[int]:
    out: List[int] = []
    step = 1
    for n in extents:
        out.append(step)
        step *= int(n)
    return out


def linearize(position: Sequence[int], extents: Sequence[int]) -> int:
    """Flat offset of a position in a field of the given extents."""
    offset = 0
    step = 1
    for p, n in zip(position, extents):
        offset += int(p) * step
        step *= int(n)
    return offset


def advance(position: MutableSequence[int], extents: Sequence[int]) -> bool:
    """
    Odometer increment of position (in place).

    Returns True exactly when every dimension wrapped back to 0, i.e. the
    whole space has been enumerated.
    """
    for dim in range(len(extents)):
        position[dim] += 1
        if position[dim] >= extents[dim]:
            position[dim] = 0
        else:
            return False
    return True


def iter_positions(
    ranges: Sequence[Tuple[int, int]],
) -> Iterator[Tuple[Tuple[int, ...], bool]]:
    """
    Enumerate all positions inside inclusive per-dimension ranges.

    Yields (position, wrapped) where wrapped is True when the step after this
    position carried out of dimension 0 (a full dimension-0 sweep ended
    here). The last position always reports wrapped=True.
    """
    offsets = [lo for lo, _ in ranges]
    extents = [hi - lo + 1 for lo, hi in ranges]
    if any(n < 1 for n in extents):
        return

    cursor = [0] * len(extents)
    while True:
        pos = tuple(c + o for c, o in zip(cursor, offsets))
        done = advance(cursor, extents)
        yield pos, done or cursor[0] == 0
        if done:
            return
