import math

import pytest

from histnd.geometry.indexer import advance, iter_positions, linearize, strides


@pytest.mark.parametrize("extents", [[1], [5], [3, 4], [2, 1, 3], [2, 3, 2, 2]])
def test_advance_visits_every_position_once(extents):
    pos = [0] * len(extents)
    seen = [tuple(pos)]
    while not advance(pos, extents):
        seen.append(tuple(pos))

    assert len(seen) == math.prod(extents)
    assert len(set(seen)) == len(seen)
    assert pos == [0] * len(extents)

    offsets = sorted(linearize(p, extents) for p in seen)
    assert offsets == list(range(math.prod(extents)))


def test_advance_order_matches_linear_offsets():
    extents = [3, 2]
    pos = [0, 0]
    order = [linearize(pos, extents)]
    while not advance(pos, extents):
        order.append(linearize(pos, extents))
    assert order == [0, 1, 2, 3, 4, 5]


def test_dimension_zero_is_fastest():
    pos = [0, 0]
    assert advance(pos, [2, 3]) is False
    assert pos == [1, 0]
    assert advance(pos, [2, 3]) is False
    assert pos == [0, 1]


def test_strides_and_linearize():
    assert strides([4, 5, 6]) == [1, 4, 20]
    assert linearize([1, 2, 3], [4, 5, 6]) == 1 + 2 * 4 + 3 * 20


def test_linearize_large_extents_do_not_overflow():
    extents = [70000, 70000, 70000]
    last = [n - 1 for n in extents]
    assert linearize(last, extents) == 70000**3 - 1


def test_iter_positions_with_offsets_and_wrap_flags():
    out = list(iter_positions([(1, 2), (3, 4)]))
    assert [p for p, _ in out] == [(1, 3), (2, 3), (1, 4), (2, 4)]
    assert [w for _, w in out] == [False, True, False, True]


def test_iter_positions_single_bin_dimension_always_wraps():
    out = list(iter_positions([(0, 0), (0, 2)]))
    assert [p for p, _ in out] == [(0, 0), (0, 1), (0, 2)]
    assert all(w for _, w in out)
