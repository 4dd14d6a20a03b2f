"""
Ion mobility and collision cross-section (CCS) resolution.

A precursor record may carry explicit (user supplied) ion mobility values,
instrument derived values, and a separately stored compensation voltage.
:func:`resolve_ion_mobility` picks the values that were actually used for
chromatogram extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IonMobilityUnits(Enum):
    """Kinds of ion mobility measurement, with their stored integer values."""
    none = 0
    drift_time_msec = 1
    inverse_K0_Vsec_per_cm2 = 2
    compensation_V = 3
    waters_sonar = 4


_UNITS_BY_NAME = {units.name.lower(): units for units in IonMobilityUnits}


def parse_ion_mobility_units(text: Optional[str],
                             default: IonMobilityUnits = IonMobilityUnits.none
                             ) -> IonMobilityUnits:
    """
    Parse an ion mobility unit name.

    Accepts the enum name in any case, or the decimal integer value.

    Args:
        text: Stored unit string, possibly empty or None.
        default: Returned when *text* is not recognised.

    Returns:
        The matching :class:`IonMobilityUnits`, or *default*.
    """
    if not text:
        return default
    text = text.strip()
    units = _UNITS_BY_NAME.get(text.lower())
    if units is not None:
        return units
    try:
        return IonMobilityUnits(int(text))
    except ValueError:
        return default


@dataclass(frozen=True)
class IonMobilityInputs:
    """Ion mobility fields of a precursor record. Zero means not measured."""
    explicit_ion_mobility: float = 0.0
    explicit_ion_mobility_units: Optional[str] = None
    explicit_ccs_sqa: float = 0.0
    explicit_compensation_voltage: float = 0.0
    ccs: float = 0.0
    ion_mobility_ms1: float = 0.0
    ion_mobility_fragment: float = 0.0
    ion_mobility_window: float = 0.0
    ion_mobility_type: Optional[str] = None


@dataclass(frozen=True)
class ResolvedIonMobility:
    """Ion mobility of a precursor, its fragment offset, and CCS."""
    units: IonMobilityUnits = IonMobilityUnits.none
    value: Optional[float] = None
    high_energy_offset: Optional[float] = None
    ccs: Optional[float] = None

    @property
    def has_ion_mobility(self) -> bool:
        return self.value is not None

    @property
    def has_ccs(self) -> bool:
        return self.ccs is not None

    @property
    def is_empty(self) -> bool:
        return self == ResolvedIonMobility.EMPTY

    @property
    def high_energy_value(self) -> Optional[float]:
        """Ion mobility for the fragment (MS2) stage."""
        if self.value is None:
            return None
        return self.value + (self.high_energy_offset or 0.0)


ResolvedIonMobility.EMPTY = ResolvedIonMobility()


def resolve_ion_mobility(inputs: IonMobilityInputs) -> ResolvedIonMobility:
    """
    Pick the effective ion mobility and CCS of a precursor.

    Explicit values win over derived ones, since they are what chromatogram
    extraction used. Once the units resolve to compensation voltage, a stored
    compensation voltage replaces the ion mobility value. A resolved ion
    mobility of zero means nothing was measured and gives
    :attr:`ResolvedIonMobility.EMPTY`.

    Args:
        inputs: The record's ion mobility fields.

    Returns:
        A :class:`ResolvedIonMobility`. Never raises.
    """
    explicit = inputs.explicit_ion_mobility or 0.0

    units = parse_ion_mobility_units(
        inputs.explicit_ion_mobility_units if explicit != 0 else inputs.ion_mobility_type
    )
    ion_mobility = explicit if explicit != 0 else (inputs.ion_mobility_ms1 or 0.0)
    if units == IonMobilityUnits.compensation_V and inputs.explicit_compensation_voltage:
        ion_mobility = inputs.explicit_compensation_voltage
    if ion_mobility == 0:
        return ResolvedIonMobility.EMPTY

    if explicit != 0:
        ion_mobility_ms2 = explicit
    elif inputs.ion_mobility_fragment:
        ion_mobility_ms2 = inputs.ion_mobility_fragment
    else:
        ion_mobility_ms2 = ion_mobility

    ccs = inputs.explicit_ccs_sqa or inputs.ccs or None

    return ResolvedIonMobility(
        units=units,
        value=ion_mobility,
        high_energy_offset=ion_mobility_ms2 - ion_mobility,
        ccs=ccs,
    )
