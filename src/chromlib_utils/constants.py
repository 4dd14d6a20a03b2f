"""
Chromatogram format codes, binary layout dtypes, compression settings and
persisted column names for chromatogram library precursor records.

All binary values are little-endian.
"""

import numpy as np

# =============================================================================
# Chromatogram format codes
# =============================================================================

FORMAT_FLAT = 0
"""Legacy flat layout: times, then one intensity block per transition."""

FORMAT_RAW_STREAM = 1
"""Self-describing stream with per-transition time lists."""

KNOWN_FORMATS = (FORMAT_FLAT, FORMAT_RAW_STREAM)

# =============================================================================
# Binary layout
# =============================================================================

TIME_DTYPE = np.dtype('<f4')
INTENSITY_DTYPE = np.dtype('<f4')
MASS_ERROR_DTYPE = np.dtype('<i2')
SCAN_ID_DTYPE = np.dtype('<i4')
COUNT_DTYPE = np.dtype('<i4')

# =============================================================================
# Compression
# =============================================================================

COMPRESSION_LEVEL = 3
"""zlib effort level used for every chromatogram blob written."""

# =============================================================================
# Persisted column names
# =============================================================================

BASE_COLUMNS = {
    'PeptideId': 'peptide_id',
    'SampleFileId': 'sample_file_id',
    'IsotopeLabel': 'isotope_label',
    'Mz': 'mz',
    'Charge': 'charge',
    'NeutralMass': 'neutral_mass',
    'ModifiedSequence': 'modified_sequence',
    'CollisionEnergy': 'collision_energy',
    'DeclusteringPotential': 'declustering_potential',
    'TotalArea': 'total_area',
    'NumTransitions': 'num_transitions',
    'NumPoints': 'num_points',
    'AverageMassErrorPPM': 'average_mass_error_ppm',
    'Chromatogram': 'chromatogram',
}
"""Columns present in every schema version."""

FORMAT_1_2_COLUMNS = {
    'ChromatogramFormat': 'chromatogram_format',
    'UncompressedSize': 'uncompressed_size',
}
"""Columns added in schema version 1.2."""

FORMAT_1_3_COLUMNS = {
    'Adduct': 'adduct',
    'ExplicitIonMobility': 'explicit_ion_mobility',
    'ExplicitIonMobilityUnits': 'explicit_ion_mobility_units',
    'ExplicitCcsSqa': 'explicit_ccs_sqa',
    'ExplicitCompensationVoltage': 'explicit_compensation_voltage',
    'CCS': 'ccs',
    'IonMobilityMS1': 'ion_mobility_ms1',
    'IonMobilityFragment': 'ion_mobility_fragment',
    'IonMobilityWindow': 'ion_mobility_window',
    'IonMobilityType': 'ion_mobility_type',
}
"""Columns added in schema version 1.3 (ion mobility)."""
