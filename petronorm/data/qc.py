"""Quality control utilities."""

import math
from typing import Iterable, List, Mapping, Optional

from .units import MAJOR_OXIDES


def oxide_total(record: Mapping[str, float], oxides: Iterable[str] = MAJOR_OXIDES) -> float:
    values = [float(record.get(oxide, math.nan)) for oxide in oxides]
    return sum(value for value in values if not math.isnan(value))


def nonnegative(values: Iterable[float]) -> bool:
    return all(v >= 0 for v in values if not math.isnan(v))


def qc_flags(
    record: Mapping[str, float],
    assemblage: Optional[object] = None,
    tolerance: float = 5.0,
) -> List[str]:
    """Diagnostic flags for a sample; nothing here rejects data."""
    flags = []
    if not nonnegative(float(record.get(oxide, math.nan)) for oxide in MAJOR_OXIDES):
        flags.append("negative_concentration")
    if abs(oxide_total(record) - 100.0) > tolerance:
        flags.append("oxide_total")
    if assemblage is not None:
        values = [value for _, value in assemblage]
        if not nonnegative(values):
            flags.append("negative_mineral")
        if any(math.isnan(value) for value in values):
            flags.append("nan_mineral")
    return flags
