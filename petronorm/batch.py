"""Sample-level pipeline: reconcile, compute the norm, flag."""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .config import Config
from .data.qc import oxide_total, qc_flags
from .data.schema import composition_records, missing_oxides
from .data.units import MAJOR_OXIDES
from .indices import cia, wip
from .models.cipw import NormativeAssemblage, cipw_norm_record, silica_saturation
from .models.conversions import (
    carbonate_conversion_inplace,
    fe_oxide_conversion_inplace,
    feo_conversion,
    metal_conversion_inplace,
    oxide_conversion_inplace,
)

logger = logging.getLogger(__name__)


@dataclass
class NormResult:
    sample_id: str
    assemblage: Optional[NormativeAssemblage] = None
    silica_saturation: Optional[str] = None
    oxide_total: float = math.nan
    cia: float = math.nan
    wip: float = math.nan
    qc_flags: List[str] = field(default_factory=list)
    skipped_reason: Optional[str] = None


def reconcile_record(record: Dict[str, object], config: Config) -> Dict[str, object]:
    """Run every reconciliation pass over ``record`` in place."""
    oxide_conversion_inplace(record, config.unit_ratio)
    metal_conversion_inplace(record, config.unit_ratio)
    carbonate_conversion_inplace(record, config.unit_ratio)
    fe_oxide_conversion_inplace(record)
    return record


def reconcile_samples(samples: object, config: Config) -> pd.DataFrame:
    records = composition_records(samples, config.detection_limit_policy)
    return pd.DataFrame([reconcile_record(record, config) for record in records])


def _split_iron(record: Dict[str, object], config: Config) -> Tuple[float, float]:
    FeO = float(record.get("FeO", math.nan))
    Fe2O3 = float(record.get("Fe2O3", math.nan))
    if config.iron_mode == "ferrous":
        total = feo_conversion(
            FeO,
            Fe2O3,
            float(record.get("FeOT", math.nan)),
            float(record.get("Fe2O3T", math.nan)),
        )
        if math.isnan(total):
            return math.nan, math.nan
        return total, 0.0
    if math.isnan(FeO) and math.isnan(Fe2O3):
        # Only a total was reported; treat it all as ferrous
        total = feo_conversion(
            FeOT=float(record.get("FeOT", math.nan)),
            Fe2O3T=float(record.get("Fe2O3T", math.nan)),
        )
        if math.isnan(total):
            return math.nan, math.nan
        return total, 0.0
    if math.isnan(FeO) and not math.isnan(Fe2O3):
        FeO = 0.0
    elif math.isnan(Fe2O3) and not math.isnan(FeO):
        Fe2O3 = 0.0
    return FeO, Fe2O3


def norm_inputs(record: Dict[str, object], config: Config) -> Tuple[Dict[str, float], List[str]]:
    """Major-oxide inputs for the norm, plus the oxides that are still missing."""
    oxides = {oxide: float(record.get(oxide, math.nan)) for oxide in MAJOR_OXIDES}
    oxides["FeO"], oxides["Fe2O3"] = _split_iron(record, config)
    missing = missing_oxides(oxides)
    if missing and config.missing_policy == "impute_zero":
        for oxide in missing:
            oxides[oxide] = 0.0
    return oxides, missing


def norm_sample(record: Dict[str, object], config: Config, sample_id: str = "") -> NormResult:
    if config.reconcile:
        reconcile_record(record, config)
    oxides, missing = norm_inputs(record, config)
    result = NormResult(sample_id=sample_id, oxide_total=oxide_total(oxides))
    if missing and config.missing_policy == "skip":
        result.skipped_reason = "missing_oxides:" + ",".join(missing)
        result.qc_flags = qc_flags(oxides, tolerance=config.total_tolerance)
        logger.debug("Skipping sample %s: %s", sample_id, result.skipped_reason)
        return result

    assemblage = cipw_norm_record(oxides)
    result.qc_flags = qc_flags(oxides, assemblage, config.total_tolerance)
    if config.clamp_negative_minerals:
        assemblage = assemblage.clamped()
    result.assemblage = assemblage
    result.silica_saturation = silica_saturation(assemblage)
    result.cia = cia(oxides["Al2O3"], oxides["CaO"], oxides["Na2O"], oxides["K2O"])
    result.wip = wip(oxides["Na2O"], oxides["MgO"], oxides["K2O"], oxides["CaO"])
    return result


def norm_samples(samples: object, config: Config) -> List[NormResult]:
    """Compute the CIPW norm for every row of a DataFrame or list of mappings."""
    config.validate()
    records = composition_records(samples, config.detection_limit_policy)
    results: List[NormResult] = []
    for index, record in enumerate(records):
        sample_id = record.get(config.id_key)
        if sample_id is None or (isinstance(sample_id, float) and math.isnan(sample_id)):
            sample_id = str(index)
        results.append(norm_sample(record, config, str(sample_id)))
    skipped = sum(1 for result in results if result.skipped_reason)
    logger.info("Computed norms for %d samples (%d skipped)", len(results) - skipped, skipped)
    return results
