"""Fill-if-NaN reconciliation of oxide, metal and carbon concentrations.

Every operation here only writes into slots that are currently NaN, so a
known value is never overwritten and repeated application is harmless.
Records may be plain dicts of floats, dicts of numpy arrays or DataFrames;
a rule is skipped unless both its source and destination keys are present.
"""

import math
from dataclasses import dataclass
from typing import Iterable, MutableMapping, Tuple

import numpy as np

from ..data.units import ELEMENT_MASS_G_MOL, metal_fraction

Record = MutableMapping[str, object]


@dataclass(frozen=True)
class ConversionRule:
    source: str
    dest: str
    factor: float


# Fe2O3 wt% -> FeO wt%
FE2O3_TO_FEO = (55.845 + 15.999) / (55.845 + 1.5 * 15.999)

# Metal (ppm) -> oxide (wt%), divided by unit_ratio when applied
OXIDE_RULES: Tuple[ConversionRule, ...] = (
    ConversionRule("Si", "SiO2", 2.13932704290547),
    ConversionRule("Ti", "TiO2", 1.66847584248889),
    ConversionRule("Al", "Al2O3", 1.88944149488507),
    ConversionRule("Fe", "FeOT", 1.28648836426407),
    ConversionRule("Fe", "Fe2O3T", 1.42973254639611),
    ConversionRule("Mg", "MgO", 1.65825961736268),
    ConversionRule("Ca", "CaO", 1.39919258253823),
    ConversionRule("Mn", "MnO", 1.29121895771597),
    ConversionRule("Li", "Li2O", 2.1526657060518732),
    ConversionRule("Na", "Na2O", 1.34795912485574),
    ConversionRule("K", "K2O", 1.20459963614796),
    ConversionRule("P", "P2O5", 2.29133490474735),
    ConversionRule("Cr", "Cr2O3", 1.46154369861159),
    ConversionRule("Ni", "NiO", 1.27258582901258),
    ConversionRule("Co", "CoO", 1.27147688434143),
    ConversionRule("S", "SO3", 1.0 / metal_fraction("S", 1, 3)),
    ConversionRule("H", "H2O", 8.93601190476191),
)

# Oxide (wt%) -> metal (ppm), multiplied by unit_ratio when applied
METAL_RULES: Tuple[ConversionRule, ...] = (
    ConversionRule("MnO", "Mn", 1.0 / 1.29121895771597),
    ConversionRule("P2O5", "P", 1.0 / 2.29133490474735),
    ConversionRule("Cr2O3", "Cr", 1.0 / 1.46154369861159),
    ConversionRule("NiO", "Ni", 1.0 / 1.27258582901258),
    ConversionRule("CoO", "Co", 1.0 / 1.27147688434143),
    ConversionRule("SrO", "Sr", metal_fraction("Sr", 1, 1)),
    ConversionRule("BaO", "Ba", metal_fraction("Ba", 1, 1)),
    ConversionRule("Li2O", "Li", 1.0 / 2.1526657060518732),
    ConversionRule("SO3", "S", metal_fraction("S", 1, 3)),
)

_C = ELEMENT_MASS_G_MOL["C"]
_O = ELEMENT_MASS_G_MOL["O"]
_CA = ELEMENT_MASS_G_MOL["Ca"]
_MG = ELEMENT_MASS_G_MOL["Mg"]
_CO2 = _C + 2 * _O
_CACO3 = _CA + _C + 3 * _O
_MGCO3 = _MG + _C + 3 * _O

CACO3_TO_CO2 = _CO2 / _CACO3
MGCO3_TO_CO2 = _CO2 / _MGCO3
TIC_TO_CO2 = _CO2 / _C
CO2_TO_TIC = _C / _CO2

CARBONATE_RULES: Tuple[ConversionRule, ...] = (
    ConversionRule("CaCO3", "CaO", (_CA + _O) / _CACO3),
    ConversionRule("CaCO3", "CO2", CACO3_TO_CO2),
    ConversionRule("MgCO3", "MgO", (_MG + _O) / _MGCO3),
    ConversionRule("MgCO3", "CO2", MGCO3_TO_CO2),
    ConversionRule("TIC", "CO2", TIC_TO_CO2),
)

TIC_RULE = ConversionRule("CO2", "TIC", CO2_TO_TIC)
REDERIVE_CO2_RULE = ConversionRule("TIC", "CO2", TIC_TO_CO2)


def _as_float(value: np.ndarray):
    return float(value) if np.ndim(value) == 0 else value


def _values(record: Record, key: str) -> np.ndarray:
    return np.asarray(record[key], dtype=float)


def _get(record: Record, key: str):
    return record[key] if key in record else math.nan


def _has(record: Record, *keys: str) -> bool:
    return all(key in record for key in keys)


def _nonnegative(values: np.ndarray) -> np.ndarray:
    # Negative differences mean the carbon analyses disagree
    return np.where(values < 0, np.nan, values)


def nanadd(a, b):
    """Add two values, treating NaN as zero unless both terms are NaN."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    total = np.where(np.isnan(a), 0.0, a) + np.where(np.isnan(b), 0.0, b)
    total = np.where(np.isnan(a) & np.isnan(b), np.nan, total)
    return _as_float(total)


def fill_missing(record: Record, dest: str, values) -> None:
    """Write ``values`` into the NaN entries of ``record[dest]``."""
    current = _values(record, dest)
    values = np.asarray(values, dtype=float)
    mask = np.isnan(current) & ~np.isnan(values)
    if not mask.any():
        return
    if current.ndim == 0:
        record[dest] = float(values)
        return
    updated = current.copy()
    updated[mask] = np.broadcast_to(values, updated.shape)[mask]
    record[dest] = updated


def apply_rules(record: Record, rules: Iterable[ConversionRule], scale: float = 1.0) -> Record:
    for rule in rules:
        if not _has(record, rule.source, rule.dest):
            continue
        fill_missing(record, rule.dest, _values(record, rule.source) * (rule.factor * scale))
    return record


def feo_conversion(FeO=math.nan, Fe2O3=math.nan, FeOT=math.nan, Fe2O3T=math.nan):
    """Compile FeO, Fe2O3, FeOT and Fe2O3T data into a single FeOT value."""
    FeO = np.asarray(FeO, dtype=float)
    Fe2O3 = np.asarray(Fe2O3, dtype=float)
    FeOT = np.asarray(FeOT, dtype=float)
    Fe2O3T = np.asarray(Fe2O3T, dtype=float)
    combined = np.where(
        np.isnan(Fe2O3T),
        nanadd(Fe2O3 * FE2O3_TO_FEO, FeO),
        Fe2O3T * FE2O3_TO_FEO,
    )
    return _as_float(np.where(np.isnan(FeOT), combined, FeOT))


def fe_oxide_conversion_inplace(record: Record) -> Record:
    if "FeOT" not in record:
        return record
    total = feo_conversion(
        _get(record, "FeO"),
        _get(record, "Fe2O3"),
        record["FeOT"],
        _get(record, "Fe2O3T"),
    )
    fill_missing(record, "FeOT", total)
    return record


def fe_oxide_conversion(record: Record) -> Record:
    return fe_oxide_conversion_inplace(record.copy())


def oxide_conversion_inplace(record: Record, unit_ratio: float = 10000) -> Record:
    """Fill oxides (TiO2, Al2O3, ...) from metals (Ti, Al, ...).

    Metals are expected as ppm with the default ``unit_ratio``; use
    ``unit_ratio=1`` when metals are reported as wt%.
    """
    return apply_rules(record, OXIDE_RULES, 1.0 / unit_ratio)


def oxide_conversion(record: Record, unit_ratio: float = 10000) -> Record:
    return oxide_conversion_inplace(record.copy(), unit_ratio)


def metal_conversion_inplace(record: Record, unit_ratio: float = 10000) -> Record:
    """Fill metals (Mn, P, ...) from oxides (MnO, P2O5, ...)."""
    return apply_rules(record, METAL_RULES, unit_ratio)


def metal_conversion(record: Record, unit_ratio: float = 10000) -> Record:
    return metal_conversion_inplace(record.copy(), unit_ratio)


def carbonate_conversion_inplace(record: Record, unit_ratio: float = 10000) -> Record:
    """Reconcile carbonates, CO2 and the TC/TOC/TIC carbon budget in place.

    The steps run once in a fixed order; a value derived late in the
    sequence is not fed back into earlier steps.
    """
    if _has(record, "CaCO3", "MgCO3", "CO2"):
        carbonate_co2 = nanadd(
            _values(record, "CaCO3") * CACO3_TO_CO2,
            _values(record, "MgCO3") * MGCO3_TO_CO2,
        )
        fill_missing(record, "CO2", carbonate_co2)

    apply_rules(record, CARBONATE_RULES)

    # C is reported in ppm, TC in wt%
    if _has(record, "C", "TC"):
        fill_missing(record, "TC", _values(record, "C") / unit_ratio)

    apply_rules(record, (TIC_RULE,))

    if _has(record, "TC", "TOC", "TIC"):
        fill_missing(record, "TC", _values(record, "TOC") + _values(record, "TIC"))
        fill_missing(record, "TOC", _nonnegative(_values(record, "TC") - _values(record, "TIC")))
        fill_missing(record, "TIC", _nonnegative(_values(record, "TC") - _values(record, "TOC")))
        apply_rules(record, (REDERIVE_CO2_RULE,))

    if "C" in record:
        candidates = []
        if "TC" in record:
            candidates.append(_values(record, "TC"))
        if _has(record, "TOC", "TIC"):
            candidates.append(_values(record, "TOC") + _values(record, "TIC"))
        if _has(record, "TOC", "CO2"):
            candidates.append(_values(record, "TOC") + _values(record, "CO2") * CO2_TO_TIC)
        if "TOC" in record:
            candidates.append(_values(record, "TOC"))
        if "TIC" in record:
            candidates.append(_values(record, "TIC"))
        if "CO2" in record:
            candidates.append(_values(record, "CO2") * CO2_TO_TIC)
        for carbon in candidates:
            fill_missing(record, "C", carbon * unit_ratio)

    return record


def carbonate_conversion(record: Record, unit_ratio: float = 10000) -> Record:
    return carbonate_conversion_inplace(record.copy(), unit_ratio)
