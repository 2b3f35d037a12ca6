"""
errors.py
=========

Exception hierarchy shared by all histnd modules.

• ConfigurationError : fatal, raised before the field is allocated
• ParseError         : describes a malformed input line; import stops there
• NoDataError        : fatal, no tuple landed inside the histogram
"""

from __future__ import annotations


class HistogramError(Exception):
    """Base class for all histnd errors."""


class ConfigurationError(HistogramError, ValueError):
    """Invalid dimensionality, bounds, bin counts or output flags."""


class ParseError(HistogramError, ValueError):
    """A line that does not yield the expected number of numeric tokens."""

    def __init__(self, line_nr: int, text: str, dims: int) -> None:
        self.line_nr = int(line_nr)
        self.text = text
        self.dims = int(dims)
        shown = text.rstrip("\r\n")
        super().__init__(
            f"Error parsing line {self.line_nr}: expected {self.dims} numbers, got {shown!r}"
        )


class NoDataError(HistogramError, RuntimeError):
    """Raised after import when zero tuples were in range."""
