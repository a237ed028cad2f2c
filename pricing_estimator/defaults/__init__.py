"""Seed configuration — pricing plans, industry table, pricing variables."""

from pricing_estimator.defaults.pricing import DEFAULT_PRICING
from pricing_estimator.defaults.industries import DEFAULT_INDUSTRIES
from pricing_estimator.defaults.variables import DEFAULT_VARIABLES, build_default_variables

__all__ = ["DEFAULT_PRICING", "DEFAULT_INDUSTRIES", "DEFAULT_VARIABLES", "build_default_variables"]
