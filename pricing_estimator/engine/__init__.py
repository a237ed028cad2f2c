"""Pricing engine — pure cost, multiplier, variable-impact and total functions."""

from pricing_estimator.engine.impact_rules import formula_registry, rule_impact
from pricing_estimator.engine.pricing_engine import (
    annual_report_tier,
    compute_total,
    industry_multiplier,
    price_breakdown,
    service_cost,
    variable_impact,
)

__all__ = [
    "annual_report_tier",
    "compute_total",
    "formula_registry",
    "industry_multiplier",
    "price_breakdown",
    "rule_impact",
    "service_cost",
    "variable_impact",
]
