"""
mxereader/tests/fixtures.py - Synthetic MXE file builders for tests.

Helpers that pack header fields and cell values big-endian, assemble the
Java stream framing, and write gzip-compressed ``.mxe`` files.
"""

# Standard library imports
from __future__ import annotations

import gzip
import struct
from pathlib import Path
from typing import Sequence

STREAM_HEAD: bytes = b"\xac\xed\x00\x05"

# Element formats for the supported type tags
ELEMENT_FORMATS: dict[int, str] = {
    1: ">f",
    2: ">b",
    3: ">i",
}


def pack_header(
    xll: float = 100.0,
    yll: float = 200.0,
    cellsize: float = 0.5,
    nrow: int = 2,
    ncol: int = 3,
    nodata: int = -9999,
    data_type_tag: int = 3,
) -> bytes:
    """Pack the seven header fields big-endian, in file order."""
    return struct.pack(">dddiiii", xll, yll, cellsize, nrow, ncol, nodata, data_type_tag)


def pack_values(values: Sequence[float], data_type_tag: int) -> bytes:
    fmt = ELEMENT_FORMATS[data_type_tag]
    return b"".join(struct.pack(fmt, v) for v in values)


def build_mxe_bytes(
    values: Sequence[float] = (1, 2, 3, 4, 5, 6),
    *,
    long_block: bool = False,
    block_length: int | None = None,
    head: bytes = STREAM_HEAD,
    marker: int | None = None,
    payload: bytes | None = None,
    **header_fields,
) -> bytes:
    """
    Build the decompressed byte stream of an MXE file.

    ``payload`` overrides the packed ``values``; header fields not given
    default to the ``pack_header`` defaults.
    """
    tag: int = header_fields.get("data_type_tag", 3)
    body: bytes = pack_header(**header_fields)
    if payload is None:
        payload = pack_values(values, tag)

    if marker is None:
        marker = 0x7A if long_block else 0x77
    if long_block:
        length_field = struct.pack(">i", 1024 if block_length is None else block_length)
    else:
        length_field = bytes([0x40 if block_length is None else block_length])

    return head + bytes([marker]) + length_field + body + payload


def write_mxe(path: Path, raw: bytes | None = None, **kwargs) -> Path:
    """Write a gzip-compressed MXE file and return its path."""
    if raw is None:
        raw = build_mxe_bytes(**kwargs)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(gzip.compress(raw))
    return path
