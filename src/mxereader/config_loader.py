"""Load decode options from YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from mxereader.models import DecodeOptions


def load_decode_options(config_path: str | Path) -> DecodeOptions:
    """
    Build ``DecodeOptions`` from a YAML file.

    Options may sit at the top level or under a ``decode`` mapping::

        decode:
          magic_check: strict
          strict_data_type: false
          max_cells: 50000000
    """
    config_path = Path(config_path)
    payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if payload is None:
        return DecodeOptions()
    if not isinstance(payload, dict):
        raise ValueError("Decode options YAML must define a top-level mapping")

    section: Any = payload.get("decode", payload)
    if section is None:
        return DecodeOptions()
    if not isinstance(section, dict):
        raise ValueError("decode must be a mapping")

    unknown = sorted(set(section) - set(DecodeOptions.model_fields))
    if unknown:
        raise ValueError(f"Unknown decode option(s): {', '.join(map(str, unknown))}")

    return DecodeOptions(**section)
