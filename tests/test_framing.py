"""
mxereader/tests/test_framing.py - Tests for the MXE framing reader.

Tests cover:
- Short (0x77) and long (0x7A) block shapes
- Unknown block markers
- Magic/version validation modes
- Truncation inside the framing bytes
"""

# Standard library imports
from __future__ import annotations

import io
import logging

# Third-party imports
import pytest

# Local imports
from mxereader.enums import BlockShape, MagicCheck
from mxereader.errors import TruncatedStreamError, UnrecognizedFormatError
from mxereader.framing import read_preamble
from mxereader.models import DecodeOptions
from mxereader.stream import ByteCursor


def _cursor(data: bytes) -> tuple[ByteCursor, io.BytesIO]:
    stream = io.BytesIO(data)
    return ByteCursor(stream), stream


class TestBlockShapes:
    """Tests for block shape dispatch."""

    def test_short_block_skips_one_byte(self) -> None:
        """Should consume the marker plus one length byte."""
        cursor, _ = _cursor(b"\xac\xed\x00\x05\x77\x40REST")

        preamble = read_preamble(cursor)

        assert preamble.block_shape is BlockShape.SHORT
        assert preamble.block_length == 0x40
        assert cursor.offset == 6
        assert cursor.read_exact(4, "next") == b"REST"

    def test_long_block_skips_four_bytes(self) -> None:
        """Should consume the marker plus four length bytes."""
        cursor, _ = _cursor(b"\xac\xed\x00\x05\x7a\x00\x00\x04\x00REST")

        preamble = read_preamble(cursor)

        assert preamble.block_shape is BlockShape.LONG
        assert preamble.block_length == 1024
        assert cursor.offset == 9
        assert cursor.read_exact(4, "next") == b"REST"

    @pytest.mark.parametrize("filler", [b"\x00\x00\x00\x00", b"\xff\xff\xff\xff", b"\x12\x34\x56\x78"])
    def test_long_block_filler_value_is_ignored(self, filler: bytes) -> None:
        """Should align the cursor regardless of the long block length value."""
        cursor, _ = _cursor(b"\xac\xed\x00\x05\x7a" + filler + b"NEXT")

        read_preamble(cursor)

        assert cursor.read_exact(4, "next") == b"NEXT"

    @pytest.mark.parametrize("marker", [0x00, 0x70, 0x73, 0x76, 0x78, 0x79, 0x7B, 0xFF])
    def test_unknown_marker_raises(self, marker: int) -> None:
        """Should reject unknown markers without reading past the preamble."""
        cursor, stream = _cursor(b"\xac\xed\x00\x05" + bytes([marker]) + b"\x00" * 16)

        with pytest.raises(UnrecognizedFormatError, match="not a recognized MXE format"):
            read_preamble(cursor)

        assert cursor.offset == 5
        assert stream.tell() == 5


class TestMagicCheck:
    """Tests for stream magic/version validation."""

    BAD_HEAD: bytes = b"\xca\xfe\x00\x07\x77\x40"

    def test_ignore_is_default(self) -> None:
        """Should accept any magic bytes by default."""
        cursor, _ = _cursor(self.BAD_HEAD)

        preamble = read_preamble(cursor)

        assert preamble.magic == b"\xca\xfe"
        assert preamble.version == b"\x00\x07"
        assert not preamble.has_known_magic

    def test_strict_rejects_bad_magic(self) -> None:
        """Should raise under MagicCheck.STRICT."""
        cursor, _ = _cursor(self.BAD_HEAD)
        options = DecodeOptions(magic_check=MagicCheck.STRICT)

        with pytest.raises(UnrecognizedFormatError, match="Unexpected stream header"):
            read_preamble(cursor, options)

    def test_strict_accepts_good_magic(self) -> None:
        """Should pass real Java stream headers under MagicCheck.STRICT."""
        cursor, _ = _cursor(b"\xac\xed\x00\x05\x77\x40")
        options = DecodeOptions(magic_check="strict")

        preamble = read_preamble(cursor, options)

        assert preamble.has_known_magic

    def test_warn_logs_and_continues(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log a warning and keep decoding under MagicCheck.WARN."""
        cursor, _ = _cursor(self.BAD_HEAD)
        options = DecodeOptions(magic_check="warn")

        with caplog.at_level(logging.WARNING, logger="mxereader.framing"):
            preamble = read_preamble(cursor, options)

        assert preamble.block_shape is BlockShape.SHORT
        assert "Unexpected stream header" in caplog.text


class TestFramingTruncation:
    """Tests for streams that end inside the framing bytes."""

    def test_short_preamble(self) -> None:
        """Should name the preamble when fewer than 5 bytes exist."""
        cursor, _ = _cursor(b"\xac\xed\x00")

        with pytest.raises(TruncatedStreamError) as exc_info:
            read_preamble(cursor)

        assert exc_info.value.field == "preamble"

    def test_missing_long_block_length(self) -> None:
        """Should name the block length when it is cut short."""
        cursor, _ = _cursor(b"\xac\xed\x00\x05\x7a\x00\x00")

        with pytest.raises(TruncatedStreamError) as exc_info:
            read_preamble(cursor)

        assert exc_info.value.field == "block length"
        assert exc_info.value.offset == 5
