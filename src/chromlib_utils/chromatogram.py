"""
Chromatogram blob codec.

Converts the compressed ``Chromatogram`` blob of a precursor record into
per-transition time/intensity series, and back. Two payload formats are
read; new blobs are always written in the flat format.
"""

from __future__ import annotations

import logging
from typing import Optional

from .compression import compress, uncompress
from .constants import (
    COMPRESSION_LEVEL, FORMAT_FLAT, KNOWN_FORMATS,
    TIME_DTYPE, INTENSITY_DTYPE,
)
from .raw_stream import RawTimeIntensities
from .time_intensities import (
    ChromatogramTimeIntensities,
    ExtractionOptions,
    bytes_to_time_intensities,
    time_intensities_to_bytes,
)

logger = logging.getLogger(__name__)


class UnknownFormatError(ValueError):
    """The stored chromatogram format code is not one this codec reads."""

    def __init__(self, format_code: int):
        super().__init__(f"Unknown chromatogram format {format_code}")
        self.format_code = format_code


def expected_uncompressed_size(num_transitions: int, num_points: int) -> int:
    """
    Predicted size of a flat buffer: one shared time slot plus one intensity
    slot per transition, for every point.
    """
    return (TIME_DTYPE.itemsize + INTENSITY_DTYPE.itemsize * num_transitions) * num_points


def decode_chromatogram(compressed: Optional[bytes],
                        num_transitions: int,
                        num_points: int,
                        format_code: int = FORMAT_FLAT
                        ) -> Optional[ChromatogramTimeIntensities]:
    """
    Decode a stored chromatogram blob.

    Args:
        compressed: The blob as stored. None or empty means no chromatogram.
        num_transitions: Transition count from the owning record.
        num_points: Point count from the owning record. Only used by the
            flat format; format 1 streams carry their own counts.
        format_code: ``0`` (flat) or ``1`` (self-describing stream).

    Returns:
        A :class:`ChromatogramTimeIntensities`, or None if there is no blob.
        Mass errors and scan ids are never extracted.

    Raises:
        UnknownFormatError: For any other format code.
    """
    if not compressed:
        return None
    if format_code not in KNOWN_FORMATS:
        raise UnknownFormatError(format_code)

    expected_size = expected_uncompressed_size(num_transitions, num_points)
    # A different size is normal for format 1 streams.
    uncompressed = uncompress(compressed, expected_size)

    if format_code == FORMAT_FLAT:
        return bytes_to_time_intensities(uncompressed, num_points, num_transitions,
                                         ExtractionOptions.NONE)

    raw = RawTimeIntensities.read_from_bytes(uncompressed)
    if len(raw.transition_time_intensities) != num_transitions:
        logger.debug("Stream has %d transitions, record says %d",
                     len(raw.transition_time_intensities), num_transitions)
    return raw.interpolate()


def encode_chromatogram(data: Optional[ChromatogramTimeIntensities]) -> Optional[bytes]:
    """
    Encode time/intensities as a compressed flat (format 0) blob.

    Mass errors and scan ids are appended when present. The zlib effort
    level is always :data:`COMPRESSION_LEVEL`. The flat buffer is stored
    uncompressed only when decode will recognise it by its size, so empty
    chromatograms and buffers with optional blocks are always compressed.

    Args:
        data: The series to store, or None.

    Returns:
        The compressed blob, or None if *data* is None.
    """
    if data is None:
        return None
    flat = time_intensities_to_bytes(data)
    expected_size = expected_uncompressed_size(data.num_transitions, data.num_points)
    return compress(flat, COMPRESSION_LEVEL, expected_size)
