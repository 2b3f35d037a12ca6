import numpy as np
import pytest

from histnd.histogram.field import UNSEEN_MAX, UNSEEN_MIN, ExtentTracker, HistogramField


def test_field_starts_zeroed_with_product_size():
    field = HistogramField([3, 4, 2])
    assert field.size == 24
    assert field.total() == 0
    assert field.max_count() == 0


def test_increment_touches_exactly_one_cell():
    field = HistogramField([3, 4])
    assert field.increment([2, 1]) == 1
    assert field.increment([2, 1]) == 2

    flat = np.array(field.flat)
    assert flat[2 + 1 * 3] == 2
    assert flat.sum() == 2
    assert field.get([2, 1]) == 2
    assert field.get([1, 2]) == 0


def test_as_array_axes_follow_dimensions():
    field = HistogramField([3, 4])
    field.set([2, 1], 7)
    arr = field.as_array()
    assert arr.shape == (3, 4)
    assert arr[2, 1] == 7


def test_flat_view_is_read_only():
    field = HistogramField([2])
    with pytest.raises(ValueError):
        field.flat[0] = 5


def test_extent_tracker_starts_unseen_and_never_shrinks():
    tracker = ExtentTracker(2)
    assert not tracker.seen(0)
    assert tracker.bounds(1) == (UNSEEN_MIN, UNSEEN_MAX)

    tracker.update([3, 1])
    tracker.update([1, 4])
    tracker.update([2, 2])
    assert tracker.bounds(0) == (1, 3)
    assert tracker.bounds(1) == (1, 4)
    assert tracker.seen(0) and tracker.seen(1)
