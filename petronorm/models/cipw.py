"""CIPW normative mineral calculation."""

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Iterator, Mapping, Tuple

import numpy as np

from ..data.minerals import FORMULA_WEIGHT, FMO_WEIGHT
from ..data.units import MAJOR_OXIDES, wt_pct_to_moles
from .conversions import nanadd


@dataclass(frozen=True)
class NormativeAssemblage:
    """Normative mineral abundances in weight percent."""

    quartz: float
    orthoclase: float
    plagioclase: float
    corundum: float
    nepheline: float
    diopside: float
    orthopyroxene: float
    olivine: float
    magnetite: float
    ilmenite: float
    apatite: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        for item in fields(self):
            yield item.name, getattr(self, item.name)

    @property
    def total(self) -> float:
        return float(sum(value for _, value in self))

    def clamped(self) -> "NormativeAssemblage":
        """Copy with negative abundances set to zero; NaN is left alone."""
        return replace(self, **{name: 0.0 for name, value in self if value < 0})


def _divide(num: float, den: float) -> float:
    # IEEE semantics: 0/0 -> nan, x/0 -> +-inf
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(num), np.float64(den)))


def _weight(moles: float, formula_weight: float) -> float:
    if moles == 0:
        return 0.0
    return moles * formula_weight


def cipw_norm(SiO2, TiO2, Al2O3, Fe2O3, FeO, MnO, MgO, CaO, Na2O, K2O, P2O5) -> NormativeAssemblage:
    """Allocate major-element oxides (wt%) to eleven normative minerals (wt%).

    Cations are assigned in a fixed order: apatite, ilmenite, magnetite,
    orthoclase, albite, anorthite and corundum, then the Fe-Mg silicates.
    When silica runs short, orthopyroxene is converted to olivine first and
    albite is desilicated to nepheline only if olivine alone cannot absorb
    the deficit. Negative amounts are returned as computed.
    """
    SiO2 = wt_pct_to_moles(SiO2, "SiO2")
    TiO2 = wt_pct_to_moles(TiO2, "TiO2")
    Al2O3 = wt_pct_to_moles(Al2O3, "Al2O3")
    Fe2O3 = wt_pct_to_moles(Fe2O3, "Fe2O3")
    FeO = wt_pct_to_moles(FeO, "FeO")
    MnO = wt_pct_to_moles(MnO, "MnO")
    MgO = wt_pct_to_moles(MgO, "MgO")
    CaO = wt_pct_to_moles(CaO, "CaO")
    Na2O = wt_pct_to_moles(Na2O, "Na2O")
    K2O = wt_pct_to_moles(K2O, "K2O")
    P2O5 = wt_pct_to_moles(P2O5, "P2O5")

    # Mn2+ substitutes for Fe2+
    FeO = nanadd(FeO, MnO)

    CaO -= 10.0 / 3.0 * P2O5
    apatite = 2.0 / 3.0 * P2O5
    FeO -= TiO2
    ilmenite = TiO2
    FeO -= Fe2O3
    magnetite = Fe2O3
    Al2O3 -= K2O
    orthoclase = K2O
    Al2O3 -= Na2O
    albite = Na2O

    if CaO > Al2O3:
        CaO -= Al2O3
        anorthite = Al2O3
        Al2O3 = 0.0
    else:
        Al2O3 -= CaO
        anorthite = CaO
        CaO = 0.0
    if Al2O3 > 0:
        corundum = Al2O3
    else:
        corundum = 0.0

    mg_fraction = _divide(MgO, MgO + FeO)
    fmo_weight = mg_fraction * FMO_WEIGHT["Mg"] + (1 - mg_fraction) * FMO_WEIGHT["Fe"]
    FMO = FeO + MgO
    if CaO > 0:
        FMO -= CaO
        diopside = CaO
    else:
        diopside = 0.0
    orthopyroxene = FMO

    pSi1 = 6 * orthoclase + 6 * albite + 2 * anorthite + 2 * diopside + orthopyroxene
    if pSi1 < SiO2:
        quartz = SiO2 - pSi1
        nepheline = 0.0
        olivine = 0.0
    else:
        quartz = 0.0
        pSi2 = 6 * orthoclase + 6 * albite + 2 * anorthite + 2 * diopside
        pSi3 = SiO2 - pSi2
        if FMO > 2 * pSi3:
            orthopyroxene = 0.0
            olivine = FMO
            FMO = 0.0
            pSi4 = 6 * orthoclase + 2 * anorthite + 2 * diopside + 0.5 * olivine
            pSi5 = SiO2 - pSi4
            residual_albite = (pSi5 - 2 * Na2O) / 4
            nepheline = Na2O - residual_albite
        else:
            nepheline = 0.0
            orthopyroxene = 2 * pSi3 - FMO
            olivine = FMO - pSi3

    orthoclase *= 2
    nepheline *= 2
    albite *= 2
    an_fraction = _divide(anorthite, anorthite + albite)
    plag_weight = an_fraction * FORMULA_WEIGHT["anorthite"] + (1 - an_fraction) * FORMULA_WEIGHT["albite"]
    plagioclase = albite + anorthite

    return NormativeAssemblage(
        quartz=_weight(quartz, FORMULA_WEIGHT["quartz"]),
        orthoclase=_weight(orthoclase, FORMULA_WEIGHT["orthoclase"]),
        plagioclase=_weight(plagioclase, plag_weight),
        corundum=_weight(corundum, FORMULA_WEIGHT["corundum"]),
        nepheline=_weight(nepheline, FORMULA_WEIGHT["nepheline"]),
        diopside=_weight(diopside, FORMULA_WEIGHT["diopside"] + fmo_weight),
        orthopyroxene=_weight(orthopyroxene, FORMULA_WEIGHT["orthopyroxene"] + fmo_weight),
        olivine=_weight(olivine, FORMULA_WEIGHT["olivine"] + 2 * fmo_weight),
        magnetite=_weight(magnetite, FORMULA_WEIGHT["magnetite"]),
        ilmenite=_weight(ilmenite, FORMULA_WEIGHT["ilmenite"]),
        apatite=_weight(apatite, FORMULA_WEIGHT["apatite"]),
    )


def cipw_norm_record(record: Mapping[str, float]) -> NormativeAssemblage:
    return cipw_norm(*(float(record[oxide]) for oxide in MAJOR_OXIDES))


def silica_saturation(assemblage: NormativeAssemblage) -> str:
    """Classify the norm; NaN in quartz, olivine or nepheline gives "undetermined"."""
    if any(math.isnan(value) for value in (assemblage.quartz, assemblage.olivine, assemblage.nepheline)):
        return "undetermined"
    if assemblage.quartz > 0:
        return "oversaturated"
    if assemblage.olivine > 0 or assemblage.nepheline > 0:
        return "undersaturated"
    return "saturated"
