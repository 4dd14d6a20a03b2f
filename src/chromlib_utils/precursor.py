"""
Precursor records of a chromatogram library.

One :class:`Precursor` holds the union of the fields of every schema version,
tagged with the :class:`SchemaVersion` it was read as. Fields that a version
does not store keep their defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

from .chromatogram import decode_chromatogram, encode_chromatogram
from .constants import (
    FORMAT_FLAT, BASE_COLUMNS, FORMAT_1_2_COLUMNS, FORMAT_1_3_COLUMNS,
)
from .ion_mobility import IonMobilityInputs, ResolvedIonMobility, resolve_ion_mobility
from .time_intensities import ChromatogramTimeIntensities


class SchemaVersion(IntEnum):
    """Library schema versions, oldest first."""
    FORMAT_0 = 0
    FORMAT_1_2 = 1
    FORMAT_1_3 = 2

    @property
    def columns(self) -> Dict[str, str]:
        """Persisted column name -> field name for this version."""
        columns = dict(BASE_COLUMNS)
        if self >= SchemaVersion.FORMAT_1_2:
            columns.update(FORMAT_1_2_COLUMNS)
        if self >= SchemaVersion.FORMAT_1_3:
            columns.update(FORMAT_1_3_COLUMNS)
        return columns


@dataclass
class Precursor:
    """
    A precursor ion and its stored chromatogram.

    Example::

        precursor = Precursor.from_row(row, SchemaVersion.FORMAT_1_3)
        chrom = precursor.chromatogram_data
        im = precursor.get_ion_mobility_and_ccs()
    """
    schema_version: SchemaVersion = SchemaVersion.FORMAT_1_3

    peptide_id: int = 0
    sample_file_id: int = 0
    isotope_label: Optional[str] = None
    mz: float = 0.0
    charge: int = 0
    neutral_mass: float = 0.0
    modified_sequence: Optional[str] = None
    collision_energy: float = 0.0
    declustering_potential: float = 0.0
    total_area: float = 0.0
    num_transitions: int = 0
    num_points: int = 0
    average_mass_error_ppm: float = 0.0
    chromatogram: Optional[bytes] = field(default=None, repr=False)

    # schema 1.2
    chromatogram_format: int = FORMAT_FLAT
    uncompressed_size: int = 0

    # schema 1.3
    adduct: Optional[str] = None
    explicit_ion_mobility: float = 0.0
    explicit_ion_mobility_units: Optional[str] = None
    explicit_ccs_sqa: float = 0.0
    explicit_compensation_voltage: float = 0.0
    ccs: float = 0.0
    ion_mobility_ms1: float = 0.0
    ion_mobility_fragment: float = 0.0
    ion_mobility_window: float = 0.0
    ion_mobility_type: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any],
                 schema_version: SchemaVersion = SchemaVersion.FORMAT_1_3) -> Precursor:
        """
        Build a record from a row keyed by persisted column name.

        Columns unknown to *schema_version* are ignored; NULL values keep
        the field default.
        """
        columns = schema_version.columns
        values = {}
        for column, value in row.items():
            name = columns.get(column)
            if name is not None and value is not None:
                values[name] = value
        return cls(schema_version=schema_version, **values)

    def get_chromatogram_format(self) -> int:
        """Format code of the stored blob. Schema 0 only has the flat format."""
        if self.schema_version == SchemaVersion.FORMAT_0:
            return FORMAT_FLAT
        return self.chromatogram_format

    @property
    def chromatogram_data(self) -> Optional[ChromatogramTimeIntensities]:
        return decode_chromatogram(self.chromatogram, self.num_transitions,
                                   self.num_points, self.get_chromatogram_format())

    @chromatogram_data.setter
    def chromatogram_data(self, value: Optional[ChromatogramTimeIntensities]):
        self.chromatogram = encode_chromatogram(value)

    def ion_mobility_inputs(self) -> IonMobilityInputs:
        return IonMobilityInputs(
            explicit_ion_mobility=self.explicit_ion_mobility,
            explicit_ion_mobility_units=self.explicit_ion_mobility_units,
            explicit_ccs_sqa=self.explicit_ccs_sqa,
            explicit_compensation_voltage=self.explicit_compensation_voltage,
            ccs=self.ccs,
            ion_mobility_ms1=self.ion_mobility_ms1,
            ion_mobility_fragment=self.ion_mobility_fragment,
            ion_mobility_window=self.ion_mobility_window,
            ion_mobility_type=self.ion_mobility_type,
        )

    def get_ion_mobility_and_ccs(self) -> ResolvedIonMobility:
        """Effective ion mobility and CCS, recomputed from the current fields."""
        return resolve_ion_mobility(self.ion_mobility_inputs())
