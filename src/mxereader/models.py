"""
MXE data models using Pydantic.

Represents the decoded raster: the fixed header, the cell values and the
options that control decoding.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mxereader.enums import BlockShape, DataType, MagicCheck
from mxereader.errors import UnsupportedDataTypeError
from mxereader.utils import GRID_DTYPE

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1


class DecodeOptions(BaseModel):
    """
    Options controlling how strictly an MXE stream is decoded.

    Example:
        >>> opts = DecodeOptions(magic_check="strict", max_cells=10_000_000)
        >>> opts.magic_check
        <MagicCheck.STRICT: 'strict'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    magic_check: MagicCheck = Field(
        MagicCheck.IGNORE,
        description="Validation of the stream magic and version bytes",
    )
    strict_data_type: bool = Field(
        False,
        description="Raise instead of returning a header-only grid for unknown type tags",
    )
    max_cells: int | None = Field(
        None,
        gt=0,
        description="Upper bound on nrow * ncol accepted from a header",
    )

    @field_validator("magic_check", mode="before")
    @classmethod
    def _normalize_magic_check(cls, value: Any) -> MagicCheck:
        if isinstance(value, MagicCheck):
            return value
        if isinstance(value, bool):
            return MagicCheck.STRICT if value else MagicCheck.IGNORE
        return MagicCheck.from_alias(value)


class RasterHeader(BaseModel):
    """
    Geometry and encoding fields stored at the start of an MXE stream.

    Example:
        >>> h = RasterHeader(
        ...     xll=100.0, yll=200.0, cellsize=0.5,
        ...     nrow=2, ncol=3, nodata=-9999, data_type_tag=3,
        ... )
        >>> h.extent
        (100.0, 200.0, 101.5, 201.0)
    """

    model_config = ConfigDict(frozen=True)

    xll: float = Field(..., description="x-coordinate of the lower left edge")
    yll: float = Field(..., description="y-coordinate of the lower left edge")
    cellsize: float = Field(..., description="Side length of a square cell")
    nrow: int = Field(..., ge=0, le=INT32_MAX, description="Number of rows")
    ncol: int = Field(..., ge=0, le=INT32_MAX, description="Number of columns")
    nodata: int = Field(..., ge=INT32_MIN, le=INT32_MAX, description="No-data sentinel")
    data_type_tag: int = Field(
        ..., ge=INT32_MIN, le=INT32_MAX, description="Payload element type tag"
    )

    @property
    def data_type(self) -> DataType:
        return DataType.from_tag(self.data_type_tag)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.nrow, self.ncol)

    @property
    def cell_count(self) -> int:
        return self.nrow * self.ncol

    @property
    def extent(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(xmin, ymin, xmax, ymax)``."""
        return (
            self.xll,
            self.yll,
            self.xll + self.ncol * self.cellsize,
            self.yll + self.nrow * self.cellsize,
        )


class RasterGrid(BaseModel):
    """
    A decoded MXE raster.

    ``data`` holds ``nrow * ncol`` cell values widened to float64 in file
    order (row-major, northern row first). It is ``None`` only when the
    header carries a type tag this reader does not know, in which case
    ``data_type`` is ``DataType.UNKNOWN``.

    Example:
        >>> grid = decode("bio1.mxe")
        >>> grid.header.shape
        (2, 3)
        >>> grid.to_array()
        array([[1., 2., 3.],
               [4., 5., 6.]])
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    header: RasterHeader
    data_type: DataType
    block_shape: BlockShape
    data: np.ndarray | None = None
    source: str | None = Field(None, description="File name or stream label")

    @model_validator(mode="after")
    def _validate(self) -> RasterGrid:
        if self.data_type is not self.header.data_type:
            raise ValueError(
                f"data_type {self.data_type.value!r} does not match "
                f"header tag {self.header.data_type_tag}"
            )
        if self.data is None:
            if self.data_type.is_supported:
                raise ValueError(f"Missing cell data for {self.data_type.value}")
            return self
        if not self.data_type.is_supported:
            raise ValueError("Cell data given for an unknown data type")

        values = np.asarray(self.data, dtype=GRID_DTYPE)
        if values.ndim != 1:
            raise ValueError(f"Cell data must be flat, got shape {values.shape}")
        if values.size != self.header.cell_count:
            raise ValueError(
                f"Expected {self.header.cell_count} cell values, got {values.size}"
            )
        # Only an array that owns its read-only buffer can be shared as is
        if values.flags.writeable or not values.flags.owndata:
            values = values.copy()
            values.setflags(write=False)
        object.__setattr__(self, "data", values)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterGrid):
            return NotImplemented
        if (self.header, self.data_type, self.block_shape, self.source) != (
            other.header,
            other.data_type,
            other.block_shape,
            other.source,
        ):
            return False
        if self.data is None or other.data is None:
            return self.data is None and other.data is None
        return bool(np.array_equal(self.data, other.data, equal_nan=True))

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_supported(self) -> bool:
        return self.data is not None

    def _require_data(self) -> np.ndarray:
        if self.data is None:
            raise UnsupportedDataTypeError(self.header.data_type_tag)
        return self.data

    def to_array(self) -> np.ndarray:
        """Return a writable ``(nrow, ncol)`` copy of the cell values."""
        return self._require_data().reshape(self.header.shape).copy()

    def to_masked(self) -> np.ndarray:
        """Like ``to_array`` but with no-data cells replaced by NaN."""
        grid = self.to_array()
        grid[grid == self.header.nodata] = np.nan
        return grid

    def to_dataframe(self, drop_nodata: bool = True) -> pd.DataFrame:
        """
        Flatten the raster into a long table of cell centres.

        Args:
            drop_nodata: Omit cells equal to the header no-data value.

        Returns:
            DataFrame with columns ``row``, ``col``, ``x``, ``y``, ``value``.
        """
        values = self._require_data()
        header = self.header
        rows, cols = np.indices(header.shape).reshape(2, -1)

        df = pd.DataFrame(
            {
                "row": rows,
                "col": cols,
                "x": header.xll + (cols + 0.5) * header.cellsize,
                "y": header.yll + (header.nrow - rows - 0.5) * header.cellsize,
                "value": values,
            }
        )
        if drop_nodata:
            df = df[df["value"] != header.nodata].reset_index(drop=True)
        return df
