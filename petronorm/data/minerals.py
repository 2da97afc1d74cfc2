"""Standardized normative mineral library."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class NormativeMineral:
    name: str
    abbreviation: str
    formula: str


# Canonical output order of the norm
MINERAL_LIBRARY: Mapping[str, NormativeMineral] = MappingProxyType(
    {
        "quartz": NormativeMineral("quartz", "Qz", "SiO2"),
        "orthoclase": NormativeMineral("orthoclase", "Or", "KAlSi3O8"),
        "plagioclase": NormativeMineral("plagioclase", "Pl", "NaAlSi3O8-CaAl2Si2O8"),
        "corundum": NormativeMineral("corundum", "Crn", "Al2O3"),
        "nepheline": NormativeMineral("nepheline", "Ne", "NaAlSiO4"),
        "diopside": NormativeMineral("diopside", "Di", "Ca(Mg,Fe)Si2O6"),
        "orthopyroxene": NormativeMineral("orthopyroxene", "Opx", "(Mg,Fe)SiO3"),
        "olivine": NormativeMineral("olivine", "Ol", "(Mg,Fe)2SiO4"),
        "magnetite": NormativeMineral("magnetite", "Mag", "Fe3O4"),
        "ilmenite": NormativeMineral("ilmenite", "Ilm", "FeTiO3"),
        "apatite": NormativeMineral("apatite", "Ap", "Ca5(PO4)3(OH,F)"),
    }
)

NORMATIVE_MINERALS = tuple(MINERAL_LIBRARY)

ABBREVIATIONS: Mapping[str, str] = MappingProxyType(
    {mineral.abbreviation: name for name, mineral in MINERAL_LIBRARY.items()}
)

# Formula weights (g/mol). For the Fe-Mg silicates this is the weight
# excluding the (Mg,Fe)O part, which is blended from FMO_WEIGHT by Mg/(Mg+Fe);
# plagioclase is blended from the albite and anorthite end-members.
FORMULA_WEIGHT: Mapping[str, float] = MappingProxyType(
    {
        "quartz": 60.0843,
        "orthoclase": 278.3315,
        "albite": 262.2230,
        "anorthite": 278.2093,
        "corundum": 101.9613,
        "nepheline": 142.0544,
        "diopside": 172.248,
        "orthopyroxene": 60.0843,
        "olivine": 60.0843,
        "magnetite": 231.5386,
        "ilmenite": 151.7452,
        "apatite": 504.3152,
    }
)

FMO_WEIGHT: Mapping[str, float] = MappingProxyType({"Mg": 40.3044, "Fe": 71.8464})


def get_mineral(name: str) -> NormativeMineral:
    """Look up a normative mineral by name or abbreviation."""
    if name in ABBREVIATIONS:
        return MINERAL_LIBRARY[ABBREVIATIONS[name]]
    normalized = name.lower().replace(" ", "_")
    if normalized in MINERAL_LIBRARY:
        return MINERAL_LIBRARY[normalized]
    raise ValueError(f"Mineral '{name}' not found in library.")
