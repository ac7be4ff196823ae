"""
MXE stream opener.

An MXE file is a gzip-compressed Java data stream. This module opens the
file (or wraps a caller supplied stream) in a gzip layer and exposes it as a
forward-only ``ByteCursor`` with exact-length reads.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from mxereader.errors import (
    MXENotFoundError,
    TruncatedStreamError,
    UnrecognizedFormatError,
)
from mxereader.utils import READ_CHUNK

logger = logging.getLogger(__name__)


class ByteCursor:
    """
    Forward-only reader over a binary stream that tracks its offset.

    Offsets count bytes of the decompressed stream consumed so far.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def read_exact(self, size: int, field: str) -> bytes:
        """
        Read exactly ``size`` bytes.

        Args:
            size: Number of bytes required.
            field: Name of the value being read, used in error messages.

        Returns:
            The bytes read.

        Raises:
            TruncatedStreamError: If the stream ends first.
            UnrecognizedFormatError: If the underlying stream is not gzip data.
        """
        chunks: list[bytes] = []
        remaining: int = size
        try:
            while remaining > 0:
                chunk: bytes = self._stream.read(min(remaining, READ_CHUNK))
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except EOFError as exc:
            # gzip member ended before its end-of-stream marker
            raise self._truncated(field, size, sum(map(len, chunks))) from exc
        except (gzip.BadGzipFile, zlib.error) as exc:
            raise UnrecognizedFormatError(
                f"Corrupt or non-gzip MXE stream while reading {field}: {exc}"
            ) from exc

        data: bytes = b"".join(chunks)
        if len(data) < size:
            raise self._truncated(field, size, len(data))
        self._offset += size
        return data

    def _truncated(self, field: str, size: int, received: int) -> TruncatedStreamError:
        return TruncatedStreamError(
            field=field,
            offset=self._offset,
            expected=size,
            received=received,
        )


def _resolve_path(filepath: str | Path | None) -> Path:
    if filepath is None:
        raise MXENotFoundError("No file name supplied")
    path = Path(filepath)
    if not path.exists():
        raise MXENotFoundError(f"MXE file not found: {path}")
    if not path.is_file():
        raise MXENotFoundError(f"MXE path is not a file: {path}")
    return path


@contextmanager
def open_mxe(filepath: str | Path | None) -> Iterator[ByteCursor]:
    """
    Open an MXE file for decoding.

    The file handle and decompressor are released when the block exits,
    whether or not decoding succeeded.

    Args:
        filepath: Path to the ``.mxe`` file.

    Yields:
        A ``ByteCursor`` positioned at the start of the decompressed stream.

    Raises:
        MXENotFoundError: If the path is missing, not a file, or unreadable.
    """
    path: Path = _resolve_path(filepath)
    try:
        raw: BinaryIO = open(path, "rb")
    except OSError as exc:
        raise MXENotFoundError(f"Cannot open MXE file {path}: {exc}") from exc

    logger.debug(f"Opened {path}")
    with raw, gzip.GzipFile(fileobj=raw, mode="rb") as stream:
        yield ByteCursor(stream)


@contextmanager
def open_mxe_stream(fileobj: BinaryIO) -> Iterator[ByteCursor]:
    """
    Wrap an already open binary stream of gzip-compressed MXE bytes.

    Only the gzip layer is closed on exit; ``fileobj`` stays open and is
    owned by the caller.
    """
    with gzip.GzipFile(fileobj=fileobj, mode="rb") as stream:
        yield ByteCursor(stream)
