"""
MXE utility constants.

Binary layout constants and lookup tables shared by the decoding stages.
"""

from __future__ import annotations

import struct
from typing import Final

import numpy as np

# Java object serialization stream header (java.io.ObjectStreamConstants)
STREAM_MAGIC: Final[bytes] = b"\xac\xed"
STREAM_VERSION: Final[bytes] = b"\x00\x05"
PREAMBLE_SIZE: Final[int] = 5

# Block data markers that follow the stream header
TC_BLOCKDATA: Final[int] = 0x77
TC_BLOCKDATALONG: Final[int] = 0x7A

# Header fields in on-disk order, all big-endian
HEADER_FIELDS: Final[tuple[tuple[str, struct.Struct], ...]] = (
    ("xll", struct.Struct(">d")),
    ("yll", struct.Struct(">d")),
    ("cellsize", struct.Struct(">d")),
    ("nrow", struct.Struct(">i")),
    ("ncol", struct.Struct(">i")),
    ("nodata", struct.Struct(">i")),
    ("data_type_tag", struct.Struct(">i")),
)

# Largest element count numpy can index on this platform
MAX_INDEX: Final[int] = int(np.iinfo(np.intp).max)

# Common representation for decoded cell values
GRID_DTYPE: Final[np.dtype] = np.dtype(np.float64)

# Upper bound on a single read from the decompressed stream
READ_CHUNK: Final[int] = 1 << 20
