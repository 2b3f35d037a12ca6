import io

import pytest

from histnd import NoDataError, build_config, build_histogram, export_histogram, run_histogram


def test_run_writes_table():
    cfg = build_config([(0, 10, 5)])
    out = io.StringIO()
    run = run_histogram(cfg, ["1\n", "3\n", "3\n", "9\n"], text_out=out)
    assert run.stats.total == 4
    assert out.getvalue().splitlines()[1] == "3.000000\t2"


def test_malformed_line_stops_import_but_exports():
    cfg = build_config([(0, 10, 10), (0, 10, 10)])
    out = io.StringIO()
    run = run_histogram(cfg, io.StringIO("1.0 2.0\nbad line\n3.0 4.0\n"), text_out=out)
    assert run.stats.total == 1
    assert run.stats.stopped_at == 2
    assert run.field.total() == 1
    assert run.field.get([3, 4]) == 0
    assert "1.500000\t2.500000\t1\n" in out.getvalue()


def test_no_data_writes_nothing():
    cfg = build_config([(0, 1, 2), (0, 1, 2)], relative=True, raw8=True)
    out = io.BytesIO()
    with pytest.raises(NoDataError):
        run_histogram(cfg, ["5 5\n", "-1 0.5\n"], binary_out=out)
    assert out.getvalue() == b""


def test_raw_run_records_max_count():
    cfg = build_config([(0, 2, 2), (0, 2, 2)], relative=True, raw8=True)
    out = io.BytesIO()
    run = run_histogram(cfg, ["# x y\n", "1.5 1.5\n"], binary_out=out)
    assert run.max_count == 1
    assert out.getvalue() == b"\x00\x00\x00\xff"


def test_build_without_export_keeps_counts():
    cfg = build_config([(0, 4, 4)])
    run = build_histogram(cfg, ["0.5\n", "0.7\n", "3.2\n"])
    assert run.field.as_array().tolist() == [2, 0, 0, 1]
    assert run.observed.max_observed == [3.2]
    assert run.max_count is None


def test_export_needs_stream_for_active_mode():
    cfg = build_config([(0, 2, 2), (0, 2, 2)], relative=True, raw16=True)
    run = build_histogram(cfg, ["0.5 0.5\n"])
    with pytest.raises(ValueError):
        export_histogram(run, text_out=io.StringIO())


def test_quiet_config_logs_only_warnings(caplog):
    cfg = build_config([(0, 2, 2)], verbose=False)
    with caplog.at_level("INFO", logger="histnd"):
        run_histogram(cfg, ["0.5\n", "7\n"], text_out=io.StringIO())
    messages = [r.getMessage() for r in caplog.records]
    assert not any(m.startswith(("Using", "Ranges", "Read")) for m in messages)
    assert any(m.startswith("Lost 1 tuples") for m in messages)


def test_quiet_raw_run_does_not_log_peak(caplog):
    cfg = build_config([(0, 2, 2), (0, 2, 2)], relative=True, raw8=True, verbose=False)
    with caplog.at_level("INFO", logger="histnd"):
        run_histogram(cfg, ["1.5 1.5\n"], binary_out=io.BytesIO())
    assert not any("Maximum value found" in r.getMessage() for r in caplog.records)


def test_verbose_config_logs_counts(caplog):
    cfg = build_config([(0, 2, 2)])
    with caplog.at_level("INFO", logger="histnd"):
        run_histogram(cfg, ["0.5\n"], text_out=io.StringIO())
    assert "Read 1 tuples, 1 were in the specified range" in caplog.text
