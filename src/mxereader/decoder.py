"""
MXE payload decoder.

The cell values follow the header as one contiguous run of
``nrow * ncol`` elements in row-major order. Their encoding depends on the
header type tag:

    Tag   Width   Encoding
    1     4       big-endian IEEE-754 float32
    2     1       signed byte
    3     4       big-endian int32

Every supported encoding is widened to float64, which holds all float32,
int8 and int32 values exactly. Any other tag leaves the payload unread.
"""

from __future__ import annotations

import logging

import numpy as np

from mxereader.enums import DataType
from mxereader.errors import UnsupportedDataTypeError
from mxereader.header import check_dimensions
from mxereader.models import DecodeOptions, RasterHeader
from mxereader.stream import ByteCursor
from mxereader.utils import GRID_DTYPE

logger = logging.getLogger(__name__)


def decode_values(raw: bytes, data_type: DataType) -> np.ndarray:
    """
    Convert raw payload bytes into a flat float64 array.

    Args:
        raw: Payload bytes; length must be a multiple of the element width.
        data_type: A supported ``DataType``.

    Returns:
        New float64 array with one value per element.
    """
    return np.frombuffer(raw, dtype=data_type.dtype).astype(GRID_DTYPE)


def decode_payload(
    cursor: ByteCursor,
    header: RasterHeader,
    options: DecodeOptions | None = None,
) -> np.ndarray | None:
    """
    Read and decode the cell values described by ``header``.

    Args:
        cursor: Cursor positioned just after the header fields.
        header: Header read from the same stream.
        options: Decode options (``strict_data_type``, ``max_cells``).

    Returns:
        Flat float64 array of ``nrow * ncol`` values, or ``None`` when the
        type tag is not one this reader understands.

    Raises:
        InvalidHeaderError: If the dimensions are impossible; nothing is read.
        TruncatedStreamError: If the stream ends before the last element.
        UnsupportedDataTypeError: For unknown tags when ``strict_data_type``.
    """
    opts: DecodeOptions = options or DecodeOptions()
    data_type: DataType = header.data_type

    if not data_type.is_supported:
        if opts.strict_data_type:
            raise UnsupportedDataTypeError(header.data_type_tag)
        logger.warning(
            f"Unsupported MXE data type tag {header.data_type_tag}; "
            f"returning header without cell data"
        )
        return None

    cells: int = check_dimensions(
        header.nrow, header.ncol, width=data_type.width, max_cells=opts.max_cells
    )
    logger.debug(f"Reading {cells} cells of {data_type.value}")

    raw: bytes = cursor.read_exact(cells * data_type.width, "payload")
    values: np.ndarray = decode_values(raw, data_type)
    values.setflags(write=False)
    return values
