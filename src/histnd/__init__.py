"""
histnd
======

N-dimensional histograms of numeric tuple streams, written either as a
gnuplot-style table or as a raw 8/16-bit grayscale bitmap.

Layout
------
• geometry/   dimension specs, validated config, row-major indexer
• histogram/  count field, extent tracking, importer, exporter
• io/         tuple reader, YAML config, logging
• viz/        optional matplotlib quicklook
"""

from histnd.errors import ConfigurationError, HistogramError, NoDataError, ParseError
from histnd.geometry.dimensions import DimensionSpec, HistogramConfig, build_config
from histnd.pipeline import HistogramRun, build_histogram, export_histogram, run_histogram

__version__ = "0.2.0"

__all__ = [
    "ConfigurationError",
    "DimensionSpec",
    "HistogramConfig",
    "HistogramError",
    "HistogramRun",
    "NoDataError",
    "ParseError",
    "build_config",
    "build_histogram",
    "export_histogram",
    "run_histogram",
]
