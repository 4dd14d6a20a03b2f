"""
Self-describing chromatogram stream (format 1).

Unlike the flat layout, each transition carries its own time axis and point
count::

    int32 num_transitions
    repeat num_transitions:
        int32   num_points
        float32 times[num_points]
        float32 intensities[num_points]

Reading a stream and interpolating it onto one shared time axis yields the
same :class:`ChromatogramTimeIntensities` shape as the flat layout.
"""

from __future__ import annotations

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import List

from .constants import COUNT_DTYPE, TIME_DTYPE, INTENSITY_DTYPE
from .time_intensities import ChromatogramTimeIntensities

logger = logging.getLogger(__name__)


@dataclass
class TimeIntensities:
    """Times and intensities of a single transition."""
    times: np.ndarray
    intensities: np.ndarray

    @property
    def num_points(self) -> int:
        return len(self.times)


@dataclass
class RawTimeIntensities:
    """Per-transition series as stored, before interpolation."""
    transition_time_intensities: List[TimeIntensities] = field(default_factory=list)

    @classmethod
    def read_from_bytes(cls, buffer: bytes) -> RawTimeIntensities:
        """
        Parse a format 1 stream.

        Trailing bytes after the last transition are ignored.

        Raises:
            ValueError: If the stream ends before a declared count or array.
        """
        reader = _StreamReader(buffer)
        num_transitions = reader.read_count()
        transitions = []
        for _ in range(num_transitions):
            num_points = reader.read_count()
            times = reader.read_array(TIME_DTYPE, num_points)
            intensities = reader.read_array(INTENSITY_DTYPE, num_points)
            transitions.append(TimeIntensities(times, intensities))
        return cls(transitions)

    def to_bytes(self) -> bytes:
        """Serialize as a format 1 stream."""
        parts = [np.array([len(self.transition_time_intensities)], dtype=COUNT_DTYPE).tobytes()]
        for ti in self.transition_time_intensities:
            parts.append(np.array([ti.num_points], dtype=COUNT_DTYPE).tobytes())
            parts.append(np.asarray(ti.times).astype(TIME_DTYPE).tobytes())
            parts.append(np.asarray(ti.intensities).astype(INTENSITY_DTYPE).tobytes())
        return b''.join(parts)

    def common_times(self) -> np.ndarray:
        """Sorted union of every transition's sample times."""
        if not self.transition_time_intensities:
            return np.zeros(0, dtype=np.float32)
        return np.unique(np.concatenate(
            [np.asarray(ti.times, dtype=np.float32) for ti in self.transition_time_intensities]
        ))

    def interpolate(self) -> ChromatogramTimeIntensities:
        """
        Resample every transition onto the common time axis.

        Intensities between a transition's own samples are linearly
        interpolated; outside its sampled range they are 0. Mass errors and
        scan ids are not carried over.
        """
        times = self.common_times()
        intensities = []
        for ti in self.transition_time_intensities:
            if ti.num_points == 0:
                intensities.append(np.zeros(len(times), dtype=np.float32))
                continue
            order = np.argsort(ti.times, kind='stable')
            values = np.interp(times, np.asarray(ti.times)[order],
                               np.asarray(ti.intensities)[order],
                               left=0.0, right=0.0)
            intensities.append(values.astype(np.float32))
        logger.debug("Interpolated %d transitions onto %d time points",
                     len(intensities), len(times))
        return ChromatogramTimeIntensities(times, intensities, None, None)


class _StreamReader:
    """Sequential little-endian reader over a byte buffer."""

    def __init__(self, buffer: bytes):
        self._buffer = buffer
        self._offset = 0

    def _take(self, size: int) -> int:
        start = self._offset
        if start + size > len(self._buffer):
            raise ValueError(
                f"Chromatogram stream truncated at byte {start}: "
                f"needed {size} more byte(s), {len(self._buffer) - start} left"
            )
        self._offset += size
        return start

    def read_count(self) -> int:
        start = self._take(COUNT_DTYPE.itemsize)
        count = int(np.frombuffer(self._buffer, dtype=COUNT_DTYPE, count=1, offset=start)[0])
        if count < 0:
            raise ValueError(f"Negative count {count} at byte {start}")
        return count

    def read_array(self, dtype: np.dtype, count: int) -> np.ndarray:
        start = self._take(dtype.itemsize * count)
        if count == 0:
            return np.zeros(0, dtype=dtype.newbyteorder('='))
        values = np.frombuffer(self._buffer, dtype=dtype, count=count, offset=start)
        return values.astype(dtype.newbyteorder('='))
