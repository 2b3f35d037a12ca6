import math

import pytest

from histnd.errors import NoDataError
from histnd.geometry.dimensions import build_config
from histnd.histogram.field import ExtentTracker, HistogramField
from histnd.histogram.importer import Importer
from histnd.io.reader import read_tuples


def make_importer(dimensions, **kwargs):
    cfg = build_config(dimensions, **kwargs)
    field = HistogramField(cfg.bin_counts)
    tracker = ExtentTracker(cfg.dims)
    return Importer(cfg, field, tracker)


def test_single_tuple_increments_one_cell():
    imp = make_importer([(0, 2, 2), (0, 2, 2)])
    assert imp.add((1.5, 1.5)) is True
    assert imp.field.get([1, 1]) == 1
    assert imp.field.total() == 1
    assert imp.tracker.bounds(0) == (1, 1)


def test_low_bound_included_high_bound_excluded():
    imp = make_importer([(0, 10, 5)])
    assert imp.add((0.0,)) is True
    assert imp.add((10.0,)) is False
    assert imp.field.get([0]) == 1
    assert imp.stats.total == 2
    assert imp.stats.out_of_range == 1


def test_one_component_out_of_range_drops_tuple():
    imp = make_importer([(0, 1, 2), (0, 1, 2)])
    assert imp.add((0.5, 1.5)) is False
    assert imp.field.total() == 0
    assert not imp.tracker.seen(0)


def test_nan_is_out_of_range_and_ignored_in_observed_range():
    imp = make_importer([(0, 1, 2)])
    imp.add((0.25,))
    imp.add((math.nan,))
    assert imp.stats.out_of_range == 1
    assert imp.observed.min_observed == [0.25]
    assert imp.observed.max_observed == [0.25]


def test_observed_range_includes_out_of_range_values():
    imp = make_importer([(0, 10, 5)])
    for v in (1.0, -4.0, 25.0):
        imp.add((v,))
    assert imp.observed.min_observed == [-4.0]
    assert imp.observed.max_observed == [25.0]


def test_sum_of_cells_equals_accepted():
    imp = make_importer([(0, 1, 4), (-1, 1, 3)])
    data = [(0.1, 0.0), (0.9, -0.9), (1.0, 0.0), (0.5, 2.0), (0.3, 0.3), (-0.1, 0.0)]
    for t in data:
        imp.add(t)
    assert imp.field.total() == imp.stats.total - imp.stats.out_of_range
    assert imp.stats.accepted == 3


def test_wrong_tuple_length_raises():
    imp = make_importer([(0, 1, 2)])
    with pytest.raises(ValueError):
        imp.add((0.1, 0.2))


def test_parse_failure_stops_import_and_keeps_earlier_tuples(caplog):
    imp = make_importer([(0, 10, 10), (0, 10, 10)])
    lines = ["1.0 2.0\n", "bad line\n", "3.0 4.0\n"]
    with caplog.at_level("ERROR", logger="histnd"):
        stats = imp.consume(read_tuples(lines, 2))

    assert stats.total == 1
    assert stats.stopped_at == 2
    assert imp.field.get([1, 2]) == 1
    assert imp.field.get([3, 4]) == 0
    assert "line 2" in caplog.text


def test_finish_raises_when_nothing_in_range():
    imp = make_importer([(0, 1, 2)])
    imp.add((5.0,))
    imp.add((-5.0,))
    with pytest.raises(NoDataError):
        imp.finish()


def test_finish_raises_on_empty_input():
    imp = make_importer([(0, 1, 2)])
    imp.consume(read_tuples([], 1))
    with pytest.raises(NoDataError):
        imp.finish()


def test_finish_reports_counts(caplog):
    imp = make_importer([(0, 10, 5)])
    for v in (1.0, 3.0, 11.0):
        imp.add((v,))
    with caplog.at_level("INFO", logger="histnd"):
        stats = imp.finish()
    assert stats.accepted == 2
    assert "Lost 1 tuples" in caplog.text
    assert "Read 3 tuples, 2 were in the specified range" in caplog.text
