"""Petrological summary report for petronorm results."""

import collections
import math
from typing import Any, Dict, List

from ..data.minerals import MINERAL_LIBRARY


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not math.isnan(value)


def print_norm_report(rows: List[Dict[str, Any]]) -> None:
    """Print a summary of normative mineralogy from result table rows."""
    if not rows:
        print("No results found.")
        return

    computed = [r for r in rows if not r.get("skipped_reason")]
    n_rows = len(rows)
    print(f"CIPW NORM SUMMARY FOR {n_rows} SAMPLES")
    print("=" * 60)

    skipped = n_rows - len(computed)
    if skipped:
        print(f"  - Skipped (missing oxides): {skipped} samples")
    if not computed:
        return

    # 1. Silica saturation
    saturation_counts = collections.Counter(r.get("silica_saturation") for r in computed)
    print("\nSILICA SATURATION:")
    for cls, count in saturation_counts.items():
        if cls:
            print(f"  - {cls.capitalize()}: {count} samples ({100*count/len(computed):.1f}%)")

    # 2. Mean normative mineralogy
    print("\nMEAN NORMATIVE MINERALOGY (wt%):")
    for name, mineral in MINERAL_LIBRARY.items():
        values = [r[name] for r in computed if _is_number(r.get(name))]
        if not values:
            continue
        mean = sum(values) / len(values)
        if mean != 0:
            print(f"  - {mineral.abbreviation:<4} {name:<14} {mean:8.2f}")

    # 3. Alteration
    cia_values = [r["cia"] for r in computed if _is_number(r.get("cia"))]
    if cia_values:
        print("\nALTERATION:")
        print(f"  - Mean CIA: {sum(cia_values)/len(cia_values):.1f} (Fresh igneous: 45-55)")

    # 4. Quality flags
    flag_counts: Dict[str, int] = collections.Counter()
    for r in rows:
        for flag in (r.get("qc_flags") or "").split(","):
            if flag:
                flag_counts[flag] += 1
    if flag_counts:
        print("\nQUALITY FLAGS:")
        for flag, count in flag_counts.items():
            print(f"  - [WARNING] {flag}: {count} samples")
