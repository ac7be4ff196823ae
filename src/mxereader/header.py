"""
MXE header field reader.

All files examined share the same header layout, written big-endian
directly after the framing bytes:

    Field          Format            Meaning
    xll            64-bit float      x of the lower left EDGE of the grid
    yll            64-bit float      y of the bottom EDGE of the grid
    cellsize       64-bit float      side of the SQUARE cells
    nrow           32-bit integer    number of rows
    ncol           32-bit integer    number of columns
    nodata         32-bit integer    value marking cells without data
    data_type_tag  32-bit integer    1 = float32, 2 = signed byte, 3 = int32
"""

from __future__ import annotations

import logging
from typing import Any

from mxereader.errors import InvalidHeaderError
from mxereader.models import DecodeOptions, RasterHeader
from mxereader.stream import ByteCursor
from mxereader.utils import HEADER_FIELDS, MAX_INDEX

logger = logging.getLogger(__name__)


def check_dimensions(
    nrow: int,
    ncol: int,
    width: int = 1,
    max_cells: int | None = None,
) -> int:
    """
    Validate raster dimensions before anything is allocated for them.

    Args:
        nrow: Row count from the header.
        ncol: Column count from the header.
        width: Element width in bytes of the payload.
        max_cells: Optional caller supplied cap on the cell count.

    Returns:
        The cell count ``nrow * ncol``.

    Raises:
        InvalidHeaderError: On negative dimensions or a cell/byte count that
            cannot be allocated.
    """
    if nrow < 0:
        raise InvalidHeaderError("nrow", nrow, "row count is negative")
    if ncol < 0:
        raise InvalidHeaderError("ncol", ncol, "column count is negative")

    cells: int = nrow * ncol
    if cells * width > MAX_INDEX:
        raise InvalidHeaderError(
            "nrow*ncol", cells, f"exceeds the platform limit of {MAX_INDEX} bytes"
        )
    if max_cells is not None and cells > max_cells:
        raise InvalidHeaderError(
            "nrow*ncol", cells, f"exceeds the configured limit of {max_cells} cells"
        )
    return cells


def read_header_fields(
    cursor: ByteCursor,
    options: DecodeOptions | None = None,
) -> RasterHeader:
    """
    Read the seven raster header fields in file order.

    Args:
        cursor: Cursor positioned just after the framing bytes.
        options: Decode options; ``max_cells`` bounds the dimensions.

    Returns:
        The populated ``RasterHeader``.

    Raises:
        TruncatedStreamError: If any field is cut short; ``field`` names it.
        InvalidHeaderError: If the dimensions are impossible.
    """
    opts: DecodeOptions = options or DecodeOptions()
    values: dict[str, Any] = {}
    for name, fmt in HEADER_FIELDS:
        raw: bytes = cursor.read_exact(fmt.size, name)
        values[name] = fmt.unpack(raw)[0]

    check_dimensions(values["nrow"], values["ncol"], max_cells=opts.max_cells)
    logger.debug(f"Header fields: {values}")

    return RasterHeader(**values)
