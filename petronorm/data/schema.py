"""Input schema helpers."""

import math
from typing import Dict, Iterable, List, Mapping, Sequence

from .units import MAJOR_OXIDES

METAL_SPECIES = [
    "Si", "Ti", "Al", "Fe", "Mg", "Ca", "Mn", "Li", "Na", "K", "P",
    "Cr", "Ni", "Co", "S", "H", "Sr", "Ba", "C",
]
OXIDE_SPECIES = [
    *MAJOR_OXIDES,
    "FeOT", "Fe2O3T", "Li2O", "Cr2O3", "NiO", "CoO", "SrO", "BaO", "SO3", "H2O", "CO2",
]
CARBON_SPECIES = ["CaCO3", "MgCO3", "TC", "TOC", "TIC"]

RECOGNIZED_SPECIES: List[str] = [*OXIDE_SPECIES, *METAL_SPECIES, *CARBON_SPECIES]


def _rows_from_samples(samples: object) -> List[Mapping[str, object]]:
    if hasattr(samples, "to_dict"):
        return samples.to_dict(orient="records")
    if isinstance(samples, Sequence):
        return list(samples)
    raise TypeError("Unsupported samples input type.")


def parse_numeric(value: object, detection_policy: str) -> float:
    """Parse a reported concentration; anything unusable becomes NaN."""
    if value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return math.nan
    if text.startswith("<") or text.startswith(">"):
        prefix = text[0]
        number = text[1:].strip()
        try:
            limit = float(number)
        except ValueError:
            return math.nan
        if detection_policy == "drop":
            return math.nan
        if detection_policy == "zero":
            return 0.0 if prefix == "<" else limit
        if detection_policy == "half":
            return 0.5 * limit if prefix == "<" else limit
        return limit
    try:
        return float(text)
    except ValueError:
        return math.nan


def composition_record(
    sample: Mapping[str, object],
    detection_policy: str = "half",
    species: Iterable[str] = RECOGNIZED_SPECIES,
) -> Dict[str, object]:
    """Build a record holding every recognized species, NaN where unreported.

    Keys that are not chemical species (ids, site names) are copied as-is.
    """
    species = list(species)
    record: Dict[str, object] = {
        key: value for key, value in sample.items() if key not in species
    }
    for name in species:
        record[name] = parse_numeric(sample.get(name), detection_policy)
    return record


def composition_records(
    samples: object,
    detection_policy: str = "half",
) -> List[Dict[str, object]]:
    return [composition_record(row, detection_policy) for row in _rows_from_samples(samples)]


def missing_oxides(record: Mapping[str, float], oxides: Iterable[str] = MAJOR_OXIDES) -> List[str]:
    return [oxide for oxide in oxides if math.isnan(float(record.get(oxide, math.nan)))]
