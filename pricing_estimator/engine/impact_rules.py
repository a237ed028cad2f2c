from __future__ import annotations

import logging
from typing import Callable, Dict

from pricing_estimator.models.enums import ImpactFormula
from pricing_estimator.models.schemas import PricingImpactRule

logger = logging.getLogger(__name__)

# (rule, variable value, base cost of the rule's service) -> monthly amount
ImpactFn = Callable[[PricingImpactRule, float, float], float]

# Registry: formula -> impact function
formula_registry: Dict[str, ImpactFn] = {}


def register(formula: ImpactFormula) -> Callable[[ImpactFn], ImpactFn]:
    """
    Decorator to register an impact function for a formula.
    Raises ValueError if another function already owns the formula.
    """
    key = ImpactFormula(formula).value

    def decorator(fn: ImpactFn) -> ImpactFn:
        existing = formula_registry.get(key)
        if existing is not None and existing is not fn:
            raise ValueError(
                f"Duplicate impact registration for formula '{key}': "
                f"{existing.__name__} vs {fn.__name__}"
            )
        formula_registry[key] = fn
        return fn

    return decorator


@register(ImpactFormula.LINEAR)
def linear_impact(rule: PricingImpactRule, value: float, base_cost: float) -> float:
    impact = rule.amount * value
    if rule.min_value is not None:
        impact = max(impact, rule.min_value)
    if rule.max_value is not None:
        impact = min(impact, rule.max_value)
    return impact


@register(ImpactFormula.THRESHOLD)
def threshold_impact(rule: PricingImpactRule, value: float, base_cost: float) -> float:
    # Same lookup as revenue tiers: first bound >= value, else the last entry
    if not rule.thresholds:
        return 0.0
    for threshold in rule.thresholds:
        if value <= threshold.value:
            return threshold.amount
    return rule.thresholds[-1].amount


@register(ImpactFormula.PERCENTAGE)
def percentage_impact(rule: PricingImpactRule, value: float, base_cost: float) -> float:
    return rule.amount / 100 * base_cost


def rule_impact(rule: PricingImpactRule, value: float, base_cost: float) -> float:
    """Monthly amount one rule adds to its service."""
    fn = formula_registry.get(ImpactFormula(rule.formula).value)
    if fn is None:
        logger.warning(f"No impact function registered for formula '{rule.formula}'")
        return 0.0
    return fn(rule, value, base_cost)
