"""Tabular output helpers."""

import math
from typing import List

from ..batch import NormResult
from ..data.minerals import NORMATIVE_MINERALS


def norm_results_table(results: List[NormResult]) -> List[dict]:
    rows = []
    for result in results:
        if result.assemblage is not None:
            minerals = result.assemblage.as_dict()
            total = result.assemblage.total
        else:
            minerals = {name: math.nan for name in NORMATIVE_MINERALS}
            total = math.nan
        rows.append(
            {
                "sample_id": result.sample_id,
                "skipped_reason": result.skipped_reason,
                "silica_saturation": result.silica_saturation,
                **minerals,
                "norm_total": total,
                "oxide_total": result.oxide_total,
                "cia": result.cia,
                "wip": result.wip,
                "qc_flags": ",".join(result.qc_flags),
            }
        )
    return rows
