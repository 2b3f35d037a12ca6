# src/histnd/io/config.py
"""
histnd.io.config
================

YAML loading for histogram configs, used by the CLI (--config).

Expected shape
--------------
histogram:
  dims: 2                  # optional, defaults to len(dimensions)
  relative: true
  raw: 8                   # 8, 16 or null
  omit_outer_zero: false
  quiet: false
  dimensions:
    - {low: 0.0, high: 2.0, bins: 4}
    - {low: -1.0, high: 1.0, bins: 50}

A top-level mapping without the `histogram:` key is read as the section
itself.

What does NOT belong here
-------------------------
- Validation rules (that's histnd.geometry.dimensions.build_config)
- Command-line parsing (that's histnd.cli)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from histnd.errors import ConfigurationError
from histnd.geometry.dimensions import HistogramConfig, build_config


_KNOWN_KEYS = {"dims", "relative", "raw", "omit_outer_zero", "quiet", "dimensions"}


# -----------------------------------------------------------------------------
# YAML loading + normalization
# -----------------------------------------------------------------------------

def load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load YAML from path using safe loader.

    Normalization:
      - empty YAML -> {}
      - top-level must be a dict (mapping); otherwise error
    """
    path = Path(path).expanduser().resolve()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML: {path}\n{e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Top-level YAML must be a mapping/dict: {path}")

    return data


def histogram_section(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the `histogram:` section (or data itself if the key is absent)."""
    section = data.get("histogram", data)
    if not isinstance(section, dict):
        raise ConfigurationError("'histogram' must be a mapping")
    unknown = sorted(set(section) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown histogram config keys: {', '.join(unknown)}")
    return dict(section)


# -----------------------------------------------------------------------------
# Mapping -> HistogramConfig
# -----------------------------------------------------------------------------

def config_from_mapping(data: Mapping[str, Any]) -> HistogramConfig:
    section = histogram_section(data)

    dimensions = section.get("dimensions", [])
    if not isinstance(dimensions, list):
        raise ConfigurationError("'dimensions' must be a list of {low, high, bins} mappings")

    raw = section.get("raw", None)
    if raw not in (None, 8, 16):
        raise ConfigurationError(f"'raw' must be 8, 16 or null (got {raw!r})")

    return build_config(
        dimensions,
        dims=section.get("dims", None),
        relative=_as_bool(section.get("relative", False), "relative"),
        raw8=raw == 8,
        raw16=raw == 16,
        omit_outer_zero=_as_bool(section.get("omit_outer_zero", False), "omit_outer_zero"),
        verbose=not _as_bool(section.get("quiet", False), "quiet"),
    )


def load_config(path: Path) -> HistogramConfig:
    return config_from_mapping(load_yaml(path))


def _as_bool(x: Optional[Any], name: str) -> bool:
    if isinstance(x, bool):
        return x
    if x is None:
        return False
    raise ConfigurationError(f"'{name}' must be true or false (got {x!r})")
