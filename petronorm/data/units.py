"""Molar masses and unit conversion helpers."""

from typing import Dict, List

ELEMENT_MASS_G_MOL: Dict[str, float] = {
    "H": 1.008,
    "Li": 6.94,
    "C": 12.011,
    "O": 15.999,
    "Na": 22.990,
    "Mg": 24.305,
    "Al": 26.982,
    "Si": 28.085,
    "P": 30.974,
    "S": 32.06,
    "K": 39.0983,
    "Ca": 40.078,
    "Ti": 47.867,
    "Cr": 51.996,
    "Mn": 54.938,
    "Fe": 55.845,
    "Co": 58.933,
    "Ni": 58.693,
    "Sr": 87.62,
    "Ba": 137.327,
}

# Oxide molar masses used by the normative calculation
OXIDE_MASS_G_MOL: Dict[str, float] = {
    "SiO2": 60.0843,
    "TiO2": 79.8988,
    "Al2O3": 101.9613,
    "Fe2O3": 159.6922,
    "FeO": 71.8464,
    "MnO": 70.9374,
    "MgO": 40.3044,
    "CaO": 56.0794,
    "Na2O": 61.9789,
    "K2O": 94.1960,
    "P2O5": 141.9445,
}

MAJOR_OXIDES: List[str] = list(OXIDE_MASS_G_MOL)


def oxide_mass(metal: str, n_metal: int, n_oxygen: int) -> float:
    if metal not in ELEMENT_MASS_G_MOL:
        raise KeyError(f"Unknown element: {metal}")
    return n_metal * ELEMENT_MASS_G_MOL[metal] + n_oxygen * ELEMENT_MASS_G_MOL["O"]


def metal_fraction(metal: str, n_metal: int, n_oxygen: int) -> float:
    """Mass fraction of ``metal`` in the oxide M(n_metal)O(n_oxygen)."""
    return n_metal * ELEMENT_MASS_G_MOL[metal] / oxide_mass(metal, n_metal, n_oxygen)


def wt_pct_to_moles(value: float, oxide: str) -> float:
    if oxide not in OXIDE_MASS_G_MOL:
        raise KeyError(f"Unknown oxide: {oxide}")
    return value / OXIDE_MASS_G_MOL[oxide]
