"""Exception types raised while decoding MXE files."""

from __future__ import annotations


class MXEError(Exception):
    """Base class for every MXE decoding failure."""

    pass


class MXENotFoundError(MXEError, FileNotFoundError):
    """Raised when the input path is missing, not a file, or unreadable."""

    pass


class UnrecognizedFormatError(MXEError, ValueError):
    """Raised when the stream is not an MXE stream this reader understands."""

    pass


class TruncatedStreamError(MXEError, EOFError):
    """Raised when the stream ends before a field has all of its bytes."""

    def __init__(
        self,
        field: str,
        offset: int,
        expected: int,
        received: int,
    ) -> None:
        self.field = field
        self.offset = offset
        self.expected = expected
        self.received = received
        super().__init__(
            f"Stream ended while reading {field} at offset {offset}: "
            f"expected {expected} bytes, got {received}"
        )


class InvalidHeaderError(MXEError, ValueError):
    """Raised when header values describe an impossible raster."""

    def __init__(self, field: str, value: int, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value}: {reason}")


class UnsupportedDataTypeError(MXEError, ValueError):
    """Raised when cell values are requested for an unrecognized type tag."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"Unsupported MXE data type tag: {tag}")
