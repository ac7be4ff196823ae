"""Enum definitions for MXE framing, payload types and decode options."""

from __future__ import annotations

from enum import Enum

import numpy as np

from mxereader.utils import TC_BLOCKDATA, TC_BLOCKDATALONG


class BlockShape(str, Enum):
    """Block data variant announced by the fifth preamble byte."""

    SHORT = "short"
    LONG = "long"

    @classmethod
    def from_marker(cls, marker: int) -> BlockShape | None:
        """Return the block shape for a marker byte, or ``None`` if unknown."""
        return _BLOCK_MARKERS.get(marker)

    @property
    def length_width(self) -> int:
        """Number of block length bytes that follow the marker."""
        return 1 if self is BlockShape.SHORT else 4


_BLOCK_MARKERS: dict[int, BlockShape] = {
    TC_BLOCKDATA: BlockShape.SHORT,
    TC_BLOCKDATALONG: BlockShape.LONG,
}


class DataType(str, Enum):
    """Cell value encodings selected by the header type tag."""

    FLOAT32 = "32-bit float"
    INT8 = "Signed byte"
    INT32 = "4-byte integer"
    UNKNOWN = "Unknown"

    @classmethod
    def from_tag(cls, tag: int) -> DataType:
        """Resolve a header type tag; unrecognized tags map to ``UNKNOWN``."""
        return _DATA_TYPE_TAGS.get(tag, cls.UNKNOWN)

    @property
    def is_supported(self) -> bool:
        return self is not DataType.UNKNOWN

    @property
    def dtype(self) -> np.dtype:
        """On-disk numpy dtype of one element (big-endian where it matters)."""
        if self is DataType.UNKNOWN:
            raise ValueError("Unknown data type has no element encoding")
        return _DATA_TYPE_DTYPES[self]

    @property
    def width(self) -> int:
        """Element width in bytes."""
        return self.dtype.itemsize


_DATA_TYPE_TAGS: dict[int, DataType] = {
    1: DataType.FLOAT32,
    2: DataType.INT8,
    3: DataType.INT32,
}

_DATA_TYPE_DTYPES: dict[DataType, np.dtype] = {
    DataType.FLOAT32: np.dtype(">f4"),
    DataType.INT8: np.dtype("i1"),
    DataType.INT32: np.dtype(">i4"),
}


class MagicCheck(str, Enum):
    """How strictly the stream magic/version bytes are validated."""

    IGNORE = "ignore"
    WARN = "warn"
    STRICT = "strict"

    @classmethod
    def from_alias(cls, value: str | None) -> MagicCheck:
        """Normalize magic check aliases into a canonical ``MagicCheck``."""
        normalized = str(value or cls.IGNORE.value).strip().lower()
        aliases: dict[str, MagicCheck] = {
            "ignore": cls.IGNORE,
            "off": cls.IGNORE,
            "none": cls.IGNORE,
            "false": cls.IGNORE,
            "warn": cls.WARN,
            "warning": cls.WARN,
            "lenient": cls.WARN,
            "strict": cls.STRICT,
            "error": cls.STRICT,
            "true": cls.STRICT,
        }
        if normalized not in aliases:
            raise ValueError(f"Unsupported magic check mode: {value}")
        return aliases[normalized]
