"""
zlib compression of chromatogram blobs.

A blob whose length equals the expected uncompressed size was stored
without compression. :func:`compress` only stores raw when that test will
recognise the buffer again.
"""

from __future__ import annotations

import logging
import zlib
from typing import Optional

from .constants import COMPRESSION_LEVEL

logger = logging.getLogger(__name__)


def compress(data: bytes,
             level: int = COMPRESSION_LEVEL,
             expected_size: Optional[int] = None) -> bytes:
    """
    Compress a buffer with zlib.

    Args:
        data: Uncompressed bytes.
        level: zlib effort level (0-9).
        expected_size: Size the reader will predict for this buffer. The
            buffer is stored raw only if it is non-empty, has exactly this
            size and does not shrink under compression.

    Returns:
        The compressed bytes, or *data* itself when stored raw.
    """
    data = bytes(data)
    compressed = zlib.compress(data, level)
    if data and len(data) == expected_size and len(compressed) >= len(data):
        return data
    if len(compressed) == expected_size:
        # Would be read back as a raw buffer; pad with an empty sync block.
        compressor = zlib.compressobj(level)
        compressed = (compressor.compress(data)
                      + compressor.flush(zlib.Z_SYNC_FLUSH)
                      + compressor.flush())
    return compressed


def uncompress(data: bytes, expected_size: Optional[int] = None) -> bytes:
    """
    Reverse :func:`compress`.

    Args:
        data: Bytes as stored.
        expected_size: Predicted uncompressed size. A buffer of exactly this
            length was stored without compression and is returned unchanged.
            Any other decompressed size is logged and accepted.

    Returns:
        The uncompressed bytes.
    """
    data = bytes(data)
    if expected_size is not None and len(data) == expected_size:
        return data

    result = zlib.decompress(data)
    if expected_size is not None and len(result) != expected_size:
        logger.debug("Uncompressed %d bytes, expected %d",
                     len(result), expected_size)
    return result
