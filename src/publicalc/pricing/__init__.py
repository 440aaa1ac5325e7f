"""Sponsorship pricing engine.

Re-exports key functions and types for convenient access:
    from publicalc.pricing import run_publi_calculator, normalize_params
"""

from publicalc.pricing.assembler import ValueComponents, assemble_value, calculate_base_value
from publicalc.pricing.calculator import run_publi_calculator
from publicalc.pricing.calibration import (
    CalibrationOutcome,
    blend_calibration,
    clamp_factor,
    is_strategic_waiver_eligible,
)
from publicalc.pricing.composer import (
    BrandRiskResult,
    ComposedMultipliers,
    compose_brand_risk,
    compose_multipliers,
)
from publicalc.pricing.explanation import build_explanation
from publicalc.pricing.multipliers import (
    DEFAULT_MULTIPLIER_TABLES,
    ConfidenceSpread,
    MultiplierTables,
)
from publicalc.pricing.normalizer import derive_legacy_format, normalize_params
from publicalc.pricing.resolver import (
    PricingDataSource,
    ResolvedBaseline,
    clamp_period_days,
    resolve_baseline,
    window_bucket,
)

__all__ = [
    "DEFAULT_MULTIPLIER_TABLES",
    "BrandRiskResult",
    "CalibrationOutcome",
    "ComposedMultipliers",
    "ConfidenceSpread",
    "MultiplierTables",
    "PricingDataSource",
    "ResolvedBaseline",
    "ValueComponents",
    "assemble_value",
    "blend_calibration",
    "build_explanation",
    "calculate_base_value",
    "clamp_factor",
    "clamp_period_days",
    "compose_brand_risk",
    "compose_multipliers",
    "derive_legacy_format",
    "is_strategic_waiver_eligible",
    "normalize_params",
    "resolve_baseline",
    "run_publi_calculator",
    "window_bucket",
]
