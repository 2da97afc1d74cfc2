"""Export helpers."""

import csv
import json
import math
from typing import List

from .tables import norm_results_table
from ..batch import NormResult


def _json_safe(row: dict) -> dict:
    # JSON has no NaN
    return {
        key: None if isinstance(value, float) and math.isnan(value) else value
        for key, value in row.items()
    }


def export_norm_results_csv(results: List[NormResult], path: str) -> None:
    rows = norm_results_table(results)
    if not rows:
        return
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)


def export_norm_results_json(results: List[NormResult], path: str) -> None:
    rows = [_json_safe(row) for row in norm_results_table(results)]
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(rows, handle, indent=2)
