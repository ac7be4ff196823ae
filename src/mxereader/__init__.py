"""
mxereader - Native MXE raster reader.

Pure Python implementation for reading MaxEnt ``.mxe`` grid files
without requiring Java or MaxEnt.
"""

from mxereader.config_loader import load_decode_options
from mxereader.enums import BlockShape, DataType, MagicCheck
from mxereader.errors import (
    InvalidHeaderError,
    MXEError,
    MXENotFoundError,
    TruncatedStreamError,
    UnrecognizedFormatError,
    UnsupportedDataTypeError,
)
from mxereader.models import DecodeOptions, RasterGrid, RasterHeader
from mxereader.reader import decode, decode_stream, read_header
from mxereader.version import __version__

__all__ = [
    "__version__",
    "decode",
    "decode_stream",
    "read_header",
    "load_decode_options",
    "DecodeOptions",
    "RasterHeader",
    "RasterGrid",
    "BlockShape",
    "DataType",
    "MagicCheck",
    "MXEError",
    "MXENotFoundError",
    "UnrecognizedFormatError",
    "TruncatedStreamError",
    "InvalidHeaderError",
    "UnsupportedDataTypeError",
]
