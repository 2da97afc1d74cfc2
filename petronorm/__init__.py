"""petronorm package entry points."""

from .config import Config, load_config
from .models.cipw import NormativeAssemblage, cipw_norm, cipw_norm_record, silica_saturation
from .models.conversions import (
    carbonate_conversion,
    carbonate_conversion_inplace,
    fe_oxide_conversion,
    fe_oxide_conversion_inplace,
    feo_conversion,
    metal_conversion,
    metal_conversion_inplace,
    oxide_conversion,
    oxide_conversion_inplace,
)
from .batch import NormResult, norm_samples, reconcile_samples
from .indices import cia, eustar, eustar_simple, wip

__all__ = [
    "Config",
    "load_config",
    "NormativeAssemblage",
    "cipw_norm",
    "cipw_norm_record",
    "silica_saturation",
    "feo_conversion",
    "fe_oxide_conversion",
    "fe_oxide_conversion_inplace",
    "oxide_conversion",
    "oxide_conversion_inplace",
    "metal_conversion",
    "metal_conversion_inplace",
    "carbonate_conversion",
    "carbonate_conversion_inplace",
    "NormResult",
    "norm_samples",
    "reconcile_samples",
    "cia",
    "wip",
    "eustar",
    "eustar_simple",
]

__version__ = "0.1.0"
