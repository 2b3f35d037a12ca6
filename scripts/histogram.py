#!/usr/bin/env python3
"""
histogram.py
============

Run a histogram from the repository checkout without installing the
`histnd` console script.

Usage
-----
python scripts/histogram.py -d2 -l0 -h2 -w4 -l-1 -h1 -w50 < 2d_in.dat > 2d_out.dat
python scripts/histogram.py --config configs/example_2d.yaml --input xy.dat --plot xy.png
"""

from __future__ import annotations

from histnd.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
