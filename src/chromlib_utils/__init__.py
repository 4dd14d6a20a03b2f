"""
chromlib-utils: Chromatogram library precursor records.

Modules:
    chromatogram      - Chromatogram blob codec (decode/encode)
    time_intensities  - Time/intensity containers, flat (format 0) layout
    raw_stream        - Self-describing (format 1) stream and interpolation
    compression       - zlib compress/uncompress of blobs
    ion_mobility      - Ion mobility and CCS resolution
    precursor         - Precursor record tying the above together
    constants         - Format codes, dtypes, column names
"""

__version__ = "0.1.0"

# chromatogram
from .chromatogram import (
    UnknownFormatError,
    decode_chromatogram,
    encode_chromatogram,
    expected_uncompressed_size,
)

# time_intensities
from .time_intensities import (
    ChromatogramTimeIntensities,
    ExtractionOptions,
    bytes_to_time_intensities,
    time_intensities_to_bytes,
)

# raw_stream
from .raw_stream import RawTimeIntensities, TimeIntensities

# compression
from .compression import compress, uncompress

# ion_mobility
from .ion_mobility import (
    IonMobilityUnits,
    IonMobilityInputs,
    ResolvedIonMobility,
    parse_ion_mobility_units,
    resolve_ion_mobility,
)

# precursor
from .precursor import Precursor, SchemaVersion

# constants (commonly used)
from .constants import FORMAT_FLAT, FORMAT_RAW_STREAM, COMPRESSION_LEVEL

__all__ = [
    # version
    "__version__",
    # chromatogram
    "UnknownFormatError",
    "decode_chromatogram",
    "encode_chromatogram",
    "expected_uncompressed_size",
    # time_intensities
    "ChromatogramTimeIntensities",
    "ExtractionOptions",
    "bytes_to_time_intensities",
    "time_intensities_to_bytes",
    # raw_stream
    "RawTimeIntensities",
    "TimeIntensities",
    # compression
    "compress",
    "uncompress",
    # ion_mobility
    "IonMobilityUnits",
    "IonMobilityInputs",
    "ResolvedIonMobility",
    "parse_ion_mobility_units",
    "resolve_ion_mobility",
    # precursor
    "Precursor",
    "SchemaVersion",
    # constants
    "FORMAT_FLAT",
    "FORMAT_RAW_STREAM",
    "COMPRESSION_LEVEL",
]
