"""
mxereader/reader

MXE file reader - Pure Python implementation.

Reads the gzip-compressed Java data streams that MaxEnt writes for its
cached ``.mxe`` grids, without requiring Java or MaxEnt.

MXE Format Notes:
- Whole file: gzip stream
- Bytes 0-4: Java serialization magic, version and block marker
- 1 or 4 bytes: block length (ignored)
- 3 x float64 + 4 x int32: raster header (big-endian)
- nrow * ncol elements: cell values, encoding chosen by the header type tag
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np

from mxereader.decoder import decode_payload
from mxereader.framing import Preamble, read_preamble
from mxereader.header import read_header_fields
from mxereader.models import DecodeOptions, RasterGrid, RasterHeader
from mxereader.stream import ByteCursor, open_mxe, open_mxe_stream

logger = logging.getLogger(__name__)


def _decode_cursor(
    cursor: ByteCursor,
    options: DecodeOptions,
    source: str | None,
) -> RasterGrid:
    preamble: Preamble = read_preamble(cursor, options)
    header: RasterHeader = read_header_fields(cursor, options)
    data: np.ndarray | None = decode_payload(cursor, header, options)

    grid = RasterGrid(
        header=header,
        data_type=header.data_type,
        block_shape=preamble.block_shape,
        data=data,
        source=source,
    )
    logger.info(
        f"Decoded {source or 'MXE stream'}: {header.nrow}x{header.ncol} "
        f"{grid.data_type.value}, {cursor.offset} bytes"
    )
    return grid


def decode(
    filepath: str | Path,
    options: DecodeOptions | None = None,
) -> RasterGrid:
    """
    Decode an MXE file into a ``RasterGrid``.

    Args:
        filepath: Path to the ``.mxe`` file.
        options: Decode options; defaults to ``DecodeOptions()``.

    Returns:
        The decoded grid. ``grid.data`` is ``None`` only for an unrecognized
        data type tag.

    Raises:
        MXENotFoundError: If the file cannot be found or opened.
        UnrecognizedFormatError: If the stream is not an MXE stream.
        TruncatedStreamError: If the stream ends early.
        InvalidHeaderError: If the header dimensions are impossible.

    Example:
        >>> grid = decode("bio1.mxe")
        >>> print(grid.header.extent)
        >>> values = grid.to_masked()
    """
    opts: DecodeOptions = options or DecodeOptions()
    with open_mxe(filepath) as cursor:
        return _decode_cursor(cursor, opts, str(filepath))


def decode_stream(
    fileobj: BinaryIO,
    options: DecodeOptions | None = None,
    source: str | None = None,
) -> RasterGrid:
    """
    Decode gzip-compressed MXE bytes from an open binary stream.

    Args:
        fileobj: Readable binary stream; it is not closed.
        options: Decode options; defaults to ``DecodeOptions()``.
        source: Optional label stored on the grid and used in log messages.

    Returns:
        The decoded grid.
    """
    opts: DecodeOptions = options or DecodeOptions()
    with open_mxe_stream(fileobj) as cursor:
        return _decode_cursor(cursor, opts, source)


def read_header(
    filepath: str | Path,
    options: DecodeOptions | None = None,
) -> RasterHeader:
    """
    Read only the header of an MXE file, leaving the payload untouched.

    Args:
        filepath: Path to the ``.mxe`` file.
        options: Decode options; defaults to ``DecodeOptions()``.

    Returns:
        The ``RasterHeader``.
    """
    opts: DecodeOptions = options or DecodeOptions()
    with open_mxe(filepath) as cursor:
        read_preamble(cursor, opts)
        return read_header_fields(cursor, opts)
