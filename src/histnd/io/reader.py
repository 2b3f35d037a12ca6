"""
reader.py
=========

Line tokenizer for the tuple stream.

Input format
------------
• one tuple per line, `dims` numbers read left to right
• numbers are separated by whitespace or simply by where one number ends
  ("1-2" reads as 1 and -2), like C strtod
• C99 hex floats ("0x1p3", "-0x.8") are accepted as well
• trailing text after the last needed number is ignored
• lines starting with '#' are comments: skipped, but they still count for
  line numbers in diagnostics

Parsing never raises. Each line becomes a ParsedLine result and the caller
decides what to do with a failed one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple
import math
import re


_NUMBER = re.compile(
    r"""\s*
    (
      [+-]?
      (?:
        0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?
        | (?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?
        | inf(?:inity)?
        | nan
      )
    )""",
    re.VERBOSE | re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedLine:
    line_nr: int
    text: str
    values: Optional[Tuple[float, ...]]

    @property
    def ok(self) -> bool:
        return self.values is not None


def _to_float(token: str) -> float:
    if "x" not in token.lower():
        return float(token)
    try:
        return float.fromhex(token)
    except OverflowError:
        # strtod saturates to +-inf
        return -math.inf if token.startswith("-") else math.inf


def parse_tuple(text: str, dims: int) -> Optional[Tuple[float, ...]]:
    """Read `dims` numbers from the start of text, or None if there are fewer."""
    values = []
    pos = 0
    for _ in range(dims):
        m = _NUMBER.match(text, pos)
        if m is None:
            return None
        values.append(_to_float(m.group(1)))
        pos = m.end()
    return tuple(values)


def read_tuples(lines: Iterable[str], dims: int) -> Iterator[ParsedLine]:
    for line_nr, line in enumerate(lines, start=1):
        if line.startswith("#"):
            continue
        yield ParsedLine(line_nr=line_nr, text=line, values=parse_tuple(line, dims))
