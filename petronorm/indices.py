"""Alteration indices and Eu anomaly interpolation."""

import math

import numpy as np

# Ionic radii (pm) and chondrite abundances for Tb, Gd, Sm, Nd
REE_RADII_PM = np.array([106.3, 107.8, 109.8, 112.3])
REE_CHONDRITE = np.array([0.0374, 0.2055, 0.1530, 0.4670])
EU_RADIUS_PM = 108.7
EU_CHONDRITE = 0.0580


def cia(Al2O3: float, CaO: float, Na2O: float, K2O: float) -> float:
    """Chemical Index of Alteration (Nesbitt and Young, 1982).

    CaO should be the silicate fraction only, excluding Ca in calcite or apatite.
    """
    a = Al2O3 / 101.96007714
    c = CaO / 56.0774
    n = Na2O / 61.978538564
    k = K2O / 94.19562
    denom = a + c + n + k
    if denom == 0:
        return math.nan
    return a / denom * 100


def wip(Na2O: float, MgO: float, K2O: float, CaO: float) -> float:
    """Weathering Index of Parker (1970)."""
    na = Na2O / 30.9895
    mg = MgO / 40.3044
    k = K2O / 47.0980
    ca = CaO / 56.0774
    # Divisors are Nicholls' bond strengths
    return (na / 0.35 + mg / 0.9 + k / 0.25 + ca / 0.7) * 100


def eustar(Nd: float, Sm: float, Gd: float, Tb: float) -> float:
    """Expected Eu from a log-linear fit against ionic radius.

    Needs at least one of Tb/Gd and one of Sm/Nd so the value at the Eu
    radius is interpolated rather than extrapolated.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        y = np.log(np.array([Tb, Gd, Sm, Nd], dtype=float) / REE_CHONDRITE)
    known = np.isfinite(y)
    if not (known[:2].any() and known[2:].any()):
        return math.nan
    x = REE_RADII_PM[known]
    design = np.column_stack([np.ones_like(x), x])
    (a, b), *_ = np.linalg.lstsq(design, y[known], rcond=None)
    return float(EU_CHONDRITE * math.exp(a + b * EU_RADIUS_PM))


def eustar_simple(Sm: float, Gd: float) -> float:
    """Expected Eu as the geometric mean of chondrite-normalized Sm and Gd."""
    return EU_CHONDRITE * math.sqrt(Sm / 0.1530 * Gd / 0.2055)
