"""
mxereader/tests/test_config_loader.py - Tests for YAML decode options.
"""

# Standard library imports
from __future__ import annotations

from pathlib import Path

# Third-party imports
import pytest

# Local imports
from mxereader.config_loader import load_decode_options
from mxereader.enums import MagicCheck


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "mxe.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadDecodeOptions:
    """Tests for load_decode_options()."""

    def test_nested_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "decode:\n  magic_check: strict\n  strict_data_type: true\n  max_cells: 1000\n",
        )

        options = load_decode_options(path)

        assert options.magic_check is MagicCheck.STRICT
        assert options.strict_data_type is True
        assert options.max_cells == 1000

    def test_top_level_mapping(self, tmp_path: Path) -> None:
        options = load_decode_options(_write(tmp_path, "magic_check: warn\n"))

        assert options.magic_check is MagicCheck.WARN

    def test_yaml_boolean_magic_check(self, tmp_path: Path) -> None:
        options = load_decode_options(_write(tmp_path, "magic_check: off\n"))

        assert options.magic_check is MagicCheck.IGNORE

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        options = load_decode_options(_write(tmp_path, ""))

        assert options.magic_check is MagicCheck.IGNORE
        assert options.max_cells is None

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "decode:\n  max_cells: 5\n")

        assert load_decode_options(str(path)).max_cells == 5

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="top-level mapping"):
            load_decode_options(_write(tmp_path, "- strict\n"))

    def test_non_mapping_section_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="decode must be a mapping"):
            load_decode_options(_write(tmp_path, "decode: strict\n"))

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unknown decode option"):
            load_decode_options(_write(tmp_path, "decode:\n  verify: yes\n"))
