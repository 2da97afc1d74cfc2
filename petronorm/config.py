"""Configuration defaults for petronorm."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

import yaml

IRON_MODES = {"reported", "ferrous"}
MISSING_POLICIES = {"skip", "impute_zero"}
DETECTION_POLICIES = {"half", "zero", "value", "drop"}


@dataclass
class Config:
    # Metal ppm per oxide wt%; use 1 when metals are reported as wt%
    unit_ratio: float = 10000.0
    reconcile: bool = True
    iron_mode: str = "reported"
    missing_policy: str = "skip"
    detection_limit_policy: str = "half"
    clamp_negative_minerals: bool = False
    total_tolerance: float = 5.0
    id_key: str = "sample_id"

    def validate(self) -> None:
        if self.unit_ratio <= 0:
            raise ValueError("unit_ratio must be positive.")
        if self.iron_mode not in IRON_MODES:
            raise ValueError("iron_mode must be 'reported' or 'ferrous'.")
        if self.missing_policy not in MISSING_POLICIES:
            raise ValueError("missing_policy must be 'skip' or 'impute_zero'.")
        if self.detection_limit_policy not in DETECTION_POLICIES:
            raise ValueError(
                "detection_limit_policy must be one of: half, zero, value, drop."
            )
        if self.total_tolerance < 0:
            raise ValueError("total_tolerance must be non-negative.")
        if not self.id_key:
            raise ValueError("id_key must be a non-empty column name.")


def default_config() -> Config:
    return Config()


def load_config(path: Union[str, Path]) -> Config:
    """Read a YAML mapping of Config fields; a missing or empty file gives defaults."""
    path = Path(path)
    if not path.exists():
        return default_config()
    with open(path, "r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a mapping of config values.")
    known = {item.name for item in fields(Config)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")
    config = Config(**payload)
    config.validate()
    return config
