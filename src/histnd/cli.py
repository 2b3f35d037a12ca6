"""
histnd.cli
==========

Command-line front end, usable as a unix filter (stdin -> stdout).

Usage
-----
histnd [-r] [-d <dims>] [-l <low d1> -h <high d1> -w <bins d1> ...]
       [--raw8 | --raw16] [-o] [-q] [--config hist.yaml] [--plot out.png]

The n-th -l, -h and -w belong to dimension n. Note that -h is the high
bound, help is --help only.

Examples
--------
histnd -r -d 1 -l -5.0 -h 5.0 -w 10 < in.dat > out.dat
histnd -d2 -l0 -h2 -w4 -l-1 -h1 -w50 < 2d_in.dat > 2d_out.dat
histnd -r --raw8 -d2 -l0 -h1 -w1000 -l0 -h1 -w1000 < xy.dat > img.raw
  convert -flip -depth 8 -size 1000x1000 gray:img.raw img.pgm

Exit status: 0 on success, 1 on configuration errors or when no tuple was
in range (nothing is written to the output in both cases).
"""

from __future__ import annotations

from pathlib import Path
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, TextIO
import argparse
import io
import logging
import sys

from histnd.errors import ConfigurationError, NoDataError
from histnd.geometry.dimensions import HistogramConfig
from histnd.io import config as cfgio
from histnd.io.logging_utils import setup_logger
from histnd.pipeline import HistogramRun, build_histogram, export_histogram


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="histnd",
        add_help=False,
        description=(
            "Compute a histogram of a sequence of number tuples read until end "
            "of file. Output lines are '<midpoint d1> ... <midpoint dn> <value>' "
            "(as gnuplot likes it), or a raw grayscale image with --raw8/--raw16."
        ),
    )
    p.add_argument("--help", action="help", help="Show this help message and exit")
    p.add_argument(
        "-r",
        "--relative",
        action="store_true",
        help="Compute relative frequencies rather than absolute ones",
    )
    p.add_argument("-d", "--dims", type=int, default=None, help="Input data has this dimensionality")
    p.add_argument(
        "-l", "--low", type=float, action="append", default=None, help="Low bound (one per dimension)"
    )
    p.add_argument(
        "-h", "--high", type=float, action="append", default=None, help="High bound (one per dimension)"
    )
    p.add_argument(
        "-w", "--bins", type=int, action="append", default=None, help="Number of bins (one per dimension)"
    )
    p.add_argument(
        "--raw8",
        action="store_true",
        help="Raw 8-bit grayscale output (needs -r and exactly 2 dimensions)",
    )
    p.add_argument(
        "--raw16",
        action="store_true",
        help="Raw 16-bit big-endian grayscale output (needs -r and exactly 2 dimensions)",
    )
    p.add_argument(
        "-o",
        "--omit-outer-zero",
        action="store_true",
        help="Omit leading and trailing empty bins (not with raw output)",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Be quiet")
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML histogram config; command-line flags override it",
    )
    p.add_argument("--input", type=Path, default=None, help="Read tuples from this file instead of stdin")
    p.add_argument("--output", type=Path, default=None, help="Write the result here instead of stdout")
    p.add_argument("--plot", type=Path, default=None, help="Also save a 1-D/2-D quicklook figure (e.g. out.png)")
    p.add_argument("--log-level", type=str, default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--log-file", type=Path, default=None, help="Also write diagnostics to this file")
    return p


# -----------------------------------------------------------------------------
# Args -> HistogramConfig
# -----------------------------------------------------------------------------

def config_from_args(args: argparse.Namespace) -> HistogramConfig:
    """Merge --config (if any) with command-line flags and validate."""
    section: Dict[str, Any] = {}
    if args.config is not None:
        section = cfgio.histogram_section(cfgio.load_yaml(args.config))

    triples = _dimension_triples(args.low, args.high, args.bins)
    if triples is not None:
        section["dimensions"] = triples
    if args.dims is not None:
        section["dims"] = args.dims
    if args.relative:
        section["relative"] = True
    if args.raw8 and args.raw16:
        raise ConfigurationError("You cannot have both, raw8 and raw16, pick one")
    if args.raw8:
        section["raw"] = 8
    if args.raw16:
        section["raw"] = 16
    if args.omit_outer_zero:
        section["omit_outer_zero"] = True
    if args.quiet:
        section["quiet"] = True

    return cfgio.config_from_mapping({"histogram": section})


def _dimension_triples(
    lows: Optional[List[float]],
    highs: Optional[List[float]],
    bins: Optional[List[int]],
) -> Optional[List[Dict[str, Any]]]:
    if lows is None and highs is None and bins is None:
        return None
    lows, highs, bins = lows or [], highs or [], bins or []
    if not (len(lows) == len(highs) == len(bins)):
        raise ConfigurationError(
            "Specify as many -l/-h/-w triples as dimensions "
            f"(got {len(lows)} -l, {len(highs)} -h, {len(bins)} -w)"
        )
    return [{"low": lo, "high": hi, "bins": n} for lo, hi, n in zip(lows, highs, bins)]


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(level=args.log_level, log_path=args.log_file)

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.stderr.write("\n" + parser.format_help())
        return 1

    if not config.verbose:
        logger.setLevel(logging.WARNING)
        for h in logger.handlers:
            h.setLevel(logging.WARNING)

    try:
        with _open_input(args.input) as src:
            run = build_histogram(config, src, logger=logger)
    except NoDataError as e:
        logger.error("%s", e)
        return 1

    _write_output(run, args.output)

    if args.plot is not None:
        _write_plot(run, args.plot, logger)

    return 0


@contextmanager
def _open_input(path: Optional[Path]) -> Iterator[TextIO]:
    """
    Input file or stdin as text where undecodable bytes become U+FFFD.

    Such a line then fails to parse and stops the import like any other
    malformed line.
    """
    if path is not None:
        with open(path, "r", encoding="utf-8", errors="replace") as src:
            yield src
        return

    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        yield sys.stdin
        return
    src = io.TextIOWrapper(buffer, encoding="utf-8", errors="replace")
    try:
        yield src
    finally:
        # leave sys.stdin.buffer open
        src.detach()


def _write_output(run: HistogramRun, output: Optional[Path]) -> None:
    if output is None:
        if run.config.raw:
            export_histogram(run, binary_out=sys.stdout.buffer)
        else:
            export_histogram(run, text_out=sys.stdout)
        return

    output = Path(output).expanduser()
    if run.config.raw:
        with open(output, "wb") as fh:
            export_histogram(run, binary_out=fh)
    else:
        with open(output, "w", encoding="utf-8", newline="\n") as fh:
            export_histogram(run, text_out=fh)


def _write_plot(run: HistogramRun, path: Path, logger: logging.Logger) -> None:
    if run.config.dims > 2:
        logger.warning("Skipping plot: only 1-D and 2-D histograms can be plotted")
        return

    from histnd.histogram.exporter import bin_edges, cell_values
    from histnd.viz.plot_histogram import plot_histogram, save_figure
    from histnd.viz.style import apply_mpl_defaults

    apply_mpl_defaults()
    fig, _ = plot_histogram(
        bin_edges(run.config),
        cell_values(run.config, run.field, run.stats),
        relative=run.config.relative,
        total=run.stats.total,
        accepted=run.stats.accepted,
    )
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    save_figure(fig, path)
    logger.info("Saved plot: %s", path)


if __name__ == "__main__":
    raise SystemExit(main())
