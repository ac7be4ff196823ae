"""
MXE framing reader.

MaxEnt writes its grids through ``java.io.DataOutputStream`` wrapped in an
``ObjectOutputStream``, so the decompressed stream starts with a Java
serialization header followed by a block data marker:

- Bytes 0-1: stream magic ``AC ED``
- Bytes 2-3: stream version ``00 05``
- Byte 4: ``0x77`` (short block, 1 length byte follows) or
  ``0x7A`` (long block, 4 length bytes follow)

The block length is not needed to decode the raster; it is consumed only to
keep the cursor aligned with the header fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mxereader.enums import BlockShape, MagicCheck
from mxereader.errors import UnrecognizedFormatError
from mxereader.models import DecodeOptions
from mxereader.stream import ByteCursor
from mxereader.utils import PREAMBLE_SIZE, STREAM_MAGIC, STREAM_VERSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preamble:
    """Framing bytes read ahead of the raster header."""

    magic: bytes
    version: bytes
    block_shape: BlockShape
    block_length: int

    @property
    def has_known_magic(self) -> bool:
        return self.magic == STREAM_MAGIC and self.version == STREAM_VERSION


def _check_magic(magic: bytes, version: bytes, mode: MagicCheck) -> None:
    if mode is MagicCheck.IGNORE:
        return
    if magic == STREAM_MAGIC and version == STREAM_VERSION:
        return

    message = (
        f"Unexpected stream header {magic.hex()} {version.hex()} "
        f"(expected {STREAM_MAGIC.hex()} {STREAM_VERSION.hex()})"
    )
    if mode is MagicCheck.STRICT:
        raise UnrecognizedFormatError(message)
    logger.warning(message)


def read_preamble(
    cursor: ByteCursor,
    options: DecodeOptions | None = None,
) -> Preamble:
    """
    Read the stream header and skip the block length that follows it.

    Args:
        cursor: Cursor at the start of the decompressed stream.
        options: Decode options; only ``magic_check`` is used here.

    Returns:
        The parsed ``Preamble``. The cursor is left at the first header field.

    Raises:
        UnrecognizedFormatError: If the block marker is unknown, or the magic
            bytes mismatch under ``MagicCheck.STRICT``.
        TruncatedStreamError: If the stream ends inside the framing bytes.
    """
    opts: DecodeOptions = options or DecodeOptions()
    head: bytes = cursor.read_exact(PREAMBLE_SIZE, "preamble")
    magic, version, marker = head[0:2], head[2:4], head[4]

    _check_magic(magic, version, opts.magic_check)

    block_shape: BlockShape | None = BlockShape.from_marker(marker)
    if block_shape is None:
        raise UnrecognizedFormatError(
            f"This is not a recognized MXE format: block marker 0x{marker:02X}"
        )

    length_bytes: bytes = cursor.read_exact(block_shape.length_width, "block length")
    block_length: int = int.from_bytes(length_bytes, "big")
    logger.debug(f"{block_shape.value} block, length field {block_length}")

    return Preamble(
        magic=magic,
        version=version,
        block_shape=block_shape,
        block_length=block_length,
    )
