"""Tests for the chromatogram module."""

import zlib

import numpy as np
import pytest

from chromlib_utils.chromatogram import (
    UnknownFormatError,
    decode_chromatogram,
    encode_chromatogram,
    expected_uncompressed_size,
)
from chromlib_utils.raw_stream import RawTimeIntensities, TimeIntensities
from chromlib_utils.time_intensities import (
    ChromatogramTimeIntensities,
    time_intensities_to_bytes,
)


@pytest.fixture
def chromatogram():
    times = np.linspace(10.0, 12.0, 50).astype(np.float32)
    intensities = [np.arange(50, dtype=np.float32) * (i + 1) for i in range(4)]
    return ChromatogramTimeIntensities(times, intensities)


class TestExpectedUncompressedSize:
    def test_formula(self):
        assert expected_uncompressed_size(3, 10) == (4 + 4 * 3) * 10

    def test_zero(self):
        assert expected_uncompressed_size(5, 0) == 0


class TestEncodeChromatogram:
    def test_none(self):
        assert encode_chromatogram(None) is None

    def test_compressed_at_level_3(self, chromatogram):
        flat = time_intensities_to_bytes(chromatogram)
        assert encode_chromatogram(chromatogram) == zlib.compress(flat, 3)

    def test_writes_flat_layout(self, chromatogram):
        blob = encode_chromatogram(chromatogram)
        assert zlib.decompress(blob) == time_intensities_to_bytes(chromatogram)


class TestDecodeChromatogram:
    def test_none(self):
        assert decode_chromatogram(None, 2, 10, 0) is None

    def test_empty(self):
        assert decode_chromatogram(b'', 2, 10, 1) is None

    def test_roundtrip_flat(self, chromatogram):
        blob = encode_chromatogram(chromatogram)
        result = decode_chromatogram(blob, chromatogram.num_transitions,
                                     chromatogram.num_points, 0)
        np.testing.assert_array_equal(result.times, chromatogram.times)
        assert len(result.intensities) == 4
        for actual, expected in zip(result.intensities, chromatogram.intensities):
            np.testing.assert_array_equal(actual, expected)
        assert result.mass_errors is None
        assert result.scan_ids is None

    def test_mass_errors_not_extracted(self, chromatogram):
        chromatogram.mass_errors = [np.zeros(50, dtype=np.int16)] * 4
        blob = encode_chromatogram(chromatogram)
        result = decode_chromatogram(blob, 4, 50, 0)
        assert result.mass_errors is None
        np.testing.assert_array_equal(result.intensities[3], chromatogram.intensities[3])

    def test_stored_uncompressed(self):
        data = ChromatogramTimeIntensities(np.array([1.0], dtype=np.float32),
                                           [np.array([2.0], dtype=np.float32)])
        flat = time_intensities_to_bytes(data)
        result = decode_chromatogram(flat, 1, 1, 0)
        np.testing.assert_array_equal(result.times, [1.0])
        np.testing.assert_array_equal(result.intensities[0], [2.0])

    def test_roundtrip_zero_points(self):
        empty = ChromatogramTimeIntensities(np.zeros(0, dtype=np.float32),
                                            [np.zeros(0, dtype=np.float32)] * 2)
        blob = encode_chromatogram(empty)
        assert blob
        result = decode_chromatogram(blob, 2, 0, 0)
        assert result is not None
        assert result.num_points == 0
        assert result.num_transitions == 2

    def test_roundtrip_tiny_with_mass_errors(self):
        data = ChromatogramTimeIntensities(np.array([1.0], dtype=np.float32),
                                           [np.array([2.0], dtype=np.float32)],
                                           mass_errors=[np.array([3], dtype=np.int16)])
        blob = encode_chromatogram(data)
        result = decode_chromatogram(blob, 1, 1, 0)
        np.testing.assert_array_equal(result.times, [1.0])
        np.testing.assert_array_equal(result.intensities[0], [2.0])
        assert result.mass_errors is None

    def test_raw_stream(self):
        raw = RawTimeIntensities([
            TimeIntensities(np.array([1.0, 2.0], dtype=np.float32),
                            np.array([10.0, 20.0], dtype=np.float32)),
            TimeIntensities(np.array([1.0, 1.5, 2.0], dtype=np.float32),
                            np.array([3.0, 4.0, 5.0], dtype=np.float32)),
        ])
        blob = zlib.compress(raw.to_bytes(), 3)
        # the record's point count does not have to match the stream
        result = decode_chromatogram(blob, 2, 99, 1)
        np.testing.assert_array_equal(result.times, [1.0, 1.5, 2.0])
        np.testing.assert_allclose(result.intensities[0], [10.0, 15.0, 20.0])
        np.testing.assert_array_equal(result.intensities[1], [3.0, 4.0, 5.0])
        assert result.mass_errors is None
        assert result.scan_ids is None

    def test_raw_stream_transition_count_mismatch(self):
        raw = RawTimeIntensities([
            TimeIntensities(np.array([1.0], dtype=np.float32),
                            np.array([10.0], dtype=np.float32)),
        ])
        blob = zlib.compress(raw.to_bytes(), 3)
        result = decode_chromatogram(blob, 5, 1, 1)
        assert result.num_transitions == 1

    @pytest.mark.parametrize('format_code', [2, 7, -1])
    def test_unknown_format(self, chromatogram, format_code):
        blob = encode_chromatogram(chromatogram)
        with pytest.raises(UnknownFormatError) as excinfo:
            decode_chromatogram(blob, 4, 50, format_code)
        assert excinfo.value.format_code == format_code

    def test_unknown_format_checked_before_uncompress(self):
        with pytest.raises(UnknownFormatError):
            decode_chromatogram(b'garbage', 1, 1, 7)

    def test_unknown_format_is_value_error(self):
        assert issubclass(UnknownFormatError, ValueError)
