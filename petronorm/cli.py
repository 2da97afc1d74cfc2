"""Command-line interface for petronorm."""

import argparse
import csv
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .batch import norm_samples
from .config import Config, load_config
from .data.minerals import MINERAL_LIBRARY
from .outputs.export import export_norm_results_csv, export_norm_results_json
from .outputs.interpret import print_norm_report
from .outputs.tables import norm_results_table

logger = logging.getLogger(__name__)


def _read_samples(path: str, id_key: str) -> List[Dict[str, object]]:
    with open(path, "r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None or id_key not in reader.fieldnames:
            raise ValueError(f"samples CSV must include a '{id_key}' column.")
        rows: List[Dict[str, object]] = []
        for row in reader:
            parsed: Dict[str, object] = {}
            for key, value in row.items():
                if key is None or value is None:
                    continue
                parsed[key] = value if value != "" else None
            rows.append(parsed)
    return rows


def _build_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config else Config()
    overrides = {}
    if args.unit_ratio is not None:
        overrides["unit_ratio"] = args.unit_ratio
    if args.iron_mode is not None:
        overrides["iron_mode"] = args.iron_mode
    if args.missing_policy is not None:
        overrides["missing_policy"] = args.missing_policy
    if args.detection_policy is not None:
        overrides["detection_limit_policy"] = args.detection_policy
    if args.total_tolerance is not None:
        overrides["total_tolerance"] = args.total_tolerance
    if args.id_key is not None:
        overrides["id_key"] = args.id_key
    if args.no_reconcile:
        overrides["reconcile"] = False
    if args.clamp_negative:
        overrides["clamp_negative_minerals"] = True
    config = replace(config, **overrides)
    config.validate()
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute CIPW norms from bulk-rock analyses.")
    parser.add_argument("--samples", help="Path to samples CSV.")
    parser.add_argument("--output", help="Output file path.")
    parser.add_argument("--format", choices=["json", "csv"], default="json")
    parser.add_argument("--config", type=str, help="YAML file with Config values.")
    parser.add_argument(
        "--unit-ratio",
        type=float,
        help="Metal ppm per oxide wt%% (10000 for ppm metals, 1 for wt%% metals).",
    )
    parser.add_argument(
        "--iron-mode",
        choices=["reported", "ferrous"],
        help="Use FeO/Fe2O3 as reported, or recast all iron as FeO.",
    )
    parser.add_argument(
        "--missing-policy",
        choices=["skip", "impute_zero"],
        help="How to handle missing major oxides.",
    )
    parser.add_argument(
        "--detection-policy",
        choices=["half", "zero", "value", "drop"],
        help="How to handle detection limits like '<0.01'.",
    )
    parser.add_argument("--total-tolerance", type=float)
    parser.add_argument("--id-key", type=str, help="Column holding the sample identifier.")
    parser.add_argument("--no-reconcile", action="store_true", help="Skip oxide/metal/carbon reconciliation.")
    parser.add_argument("--clamp-negative", action="store_true", help="Report negative normative minerals as zero.")
    parser.add_argument("--interpret", action="store_true", help="Print a summary report after the norm.")
    parser.add_argument("--plot", type=str, help="Save a bar chart of the mean norm to this path.")
    parser.add_argument(
        "--list-minerals",
        action="store_true",
        help="Print the normative minerals and exit.",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_minerals:
        print("Normative Minerals:")
        for name, mineral in MINERAL_LIBRARY.items():
            print(f"  - {mineral.abbreviation:<4} {name}: {mineral.formula}")
        return

    if not args.samples or not args.output:
        parser.error("--samples and --output are required unless --list-minerals is used.")

    config = _build_config(args)
    samples = _read_samples(args.samples, config.id_key)
    results = norm_samples(samples, config)
    skipped = [result for result in results if result.skipped_reason]
    if skipped:
        logger.warning("%d of %d samples skipped for missing oxides", len(skipped), len(results))

    if args.format == "csv":
        export_norm_results_csv(results, args.output)
    else:
        export_norm_results_json(results, args.output)

    if args.plot:
        from .outputs.plots import plot_mean_norm
        plot_mean_norm(results, args.plot)

    if args.interpret:
        print_norm_report(norm_results_table(results))


if __name__ == "__main__":
    main()
