"""
Time/intensity containers and the flat (format 0) binary layout.

The flat layout stores, back to back::

    times          float32[num_points]
    intensities    float32[num_points]  x num_transitions
    mass errors    int16[num_points]    x num_transitions  (optional)
    scan ids       int32[num_points]    x num_transitions  (optional)

The point and transition counts are not part of the buffer; they come from
the owning precursor record.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import (
    TIME_DTYPE, INTENSITY_DTYPE, MASS_ERROR_DTYPE, SCAN_ID_DTYPE,
)


@dataclass
class ChromatogramTimeIntensities:
    """Times shared by all transitions of a precursor, plus per-transition series."""
    times: np.ndarray
    intensities: List[np.ndarray]
    mass_errors: Optional[List[np.ndarray]] = None
    scan_ids: Optional[List[np.ndarray]] = None

    @property
    def num_points(self) -> int:
        return len(self.times)

    @property
    def num_transitions(self) -> int:
        return len(self.intensities)


@dataclass(frozen=True)
class ExtractionOptions:
    """Which optional blocks to read from a flat buffer."""
    extract_mass_errors: bool = False
    extract_scan_ids: bool = False


ExtractionOptions.NONE = ExtractionOptions()


def _read_blocks(buffer: bytes, offset: int, dtype: np.dtype,
                 num_blocks: int, num_points: int, what: str
                 ) -> List[np.ndarray]:
    end = offset + dtype.itemsize * num_blocks * num_points
    if end > len(buffer):
        raise ValueError(
            f"Chromatogram buffer of {len(buffer)} bytes is too short for "
            f"{num_blocks} {what} block(s) of {num_points} points"
        )
    native = dtype.newbyteorder('=')
    blocks = []
    for i in range(num_blocks):
        if num_points == 0:
            blocks.append(np.zeros(0, dtype=native))
            continue
        start = offset + i * dtype.itemsize * num_points
        block = np.frombuffer(buffer, dtype=dtype, count=num_points, offset=start)
        blocks.append(block.astype(native))
    return blocks


def bytes_to_time_intensities(buffer: bytes,
                              num_points: int,
                              num_transitions: int,
                              options: ExtractionOptions = ExtractionOptions.NONE
                              ) -> ChromatogramTimeIntensities:
    """
    Parse an uncompressed flat chromatogram buffer.

    Args:
        buffer: Uncompressed bytes in the flat layout.
        num_points: Number of time points.
        num_transitions: Number of transitions.
        options: Which optional blocks to extract. Mass error and scan id
            blocks are only read when requested; bytes past the requested
            blocks are ignored.

    Returns:
        A :class:`ChromatogramTimeIntensities`. ``mass_errors`` and
        ``scan_ids`` are None unless extracted.

    Raises:
        ValueError: If the buffer is too short for the requested shape.
    """
    offset = 0
    times = _read_blocks(buffer, offset, TIME_DTYPE, 1, num_points, 'time')[0]
    offset += TIME_DTYPE.itemsize * num_points

    intensities = _read_blocks(buffer, offset, INTENSITY_DTYPE,
                               num_transitions, num_points, 'intensity')
    offset += INTENSITY_DTYPE.itemsize * num_transitions * num_points

    mass_errors = None
    if options.extract_mass_errors:
        mass_errors = _read_blocks(buffer, offset, MASS_ERROR_DTYPE,
                                   num_transitions, num_points, 'mass error')
        offset += MASS_ERROR_DTYPE.itemsize * num_transitions * num_points

    scan_ids = None
    if options.extract_scan_ids:
        scan_ids = _read_blocks(buffer, offset, SCAN_ID_DTYPE,
                                num_transitions, num_points, 'scan id')

    return ChromatogramTimeIntensities(times, intensities, mass_errors, scan_ids)


def _block_bytes(values: Sequence, dtype: np.dtype) -> bytes:
    return np.asarray(values).astype(dtype).tobytes()


def time_intensities_to_bytes(data: ChromatogramTimeIntensities) -> bytes:
    """
    Serialize time/intensities in the flat layout.

    Mass errors and scan ids are written only when present.
    """
    parts = [_block_bytes(data.times, TIME_DTYPE)]
    parts.extend(_block_bytes(block, INTENSITY_DTYPE) for block in data.intensities)
    if data.mass_errors is not None:
        parts.extend(_block_bytes(block, MASS_ERROR_DTYPE) for block in data.mass_errors)
    if data.scan_ids is not None:
        parts.extend(_block_bytes(block, SCAN_ID_DTYPE) for block in data.scan_ids)
    return b''.join(parts)
