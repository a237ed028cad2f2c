"""
Pricing Engine — turns a form snapshot, a pricing configuration and the
user-defined pricing variables into one monthly price.

Everything here is a pure function: no module state is read or written and
no argument is mutated.

Total:
  1. per selected service: plan cost + variable impact on that service
  2. × industry multiplier (only when at least one service is selected)
  3. + premium monthly price when requested and configured
  4. rounded half up to whole kroner
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pricing_estimator.defaults.industries import DEFAULT_INDUSTRIES
from pricing_estimator.engine.impact_rules import rule_impact
from pricing_estimator.models.enums import ImpactType, ServiceId
from pricing_estimator.models.schemas import (
    IndustryConfig,
    PriceBreakdown,
    PricingConfig,
    PricingVariable,
    RevenueTier,
    ServiceLine,
)
from pricing_estimator.models.state import NUMERIC_FIELDS, CalculatorFormData

logger = logging.getLogger(__name__)

# Built-in drivers are priced by the service plans themselves
BUILTIN_DRIVER_TAGS = frozenset(NUMERIC_FIELDS)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def _as_form(form: CalculatorFormData | Mapping[str, Any]) -> CalculatorFormData:
    if isinstance(form, CalculatorFormData):
        return form
    return CalculatorFormData.model_validate(dict(form))


def _driver(form: CalculatorFormData, name: str) -> float:
    value = form.value_of(name)
    return float(value) if _is_number(value) else 0.0


def round_half_up(amount: float) -> int:
    return int(math.floor(amount + 0.5))


# ── Per-service cost ─────────────────────────────────────

def annual_report_tier(
    tiers: Iterable[RevenueTier], revenue: float
) -> Optional[RevenueTier]:
    """First tier whose max_revenue covers *revenue*; the last tier otherwise."""
    tiers = tuple(tiers)
    for tier in tiers:
        if revenue <= tier.max_revenue:
            return tier
    return tiers[-1] if tiers else None


def service_cost(
    service_id: str,
    form: CalculatorFormData | Mapping[str, Any],
    config: PricingConfig,
) -> float:
    """Monthly cost of one service before multipliers.  Unconfigured → 0."""
    form = _as_form(form)
    plan = config.plan_for(service_id)
    if plan is None:
        return 0.0

    if service_id == ServiceId.SALARY:
        return plan.base_rate + _driver(form, "employees") * plan.per_employee_rate

    if service_id == ServiceId.BOOKKEEPING:
        return plan.base_rate + _driver(form, "transactions") * plan.per_transaction_rate

    if service_id == ServiceId.ANNUAL_REPORTS:
        tier = annual_report_tier(plan.tiers, _driver(form, "revenue"))
        return tier.price / 12 if tier else 0.0

    return 0.0


# ── Industry multiplier ──────────────────────────────────

def industry_multiplier(
    form: CalculatorFormData | Mapping[str, Any],
    industries: Mapping[str, IndustryConfig] | None = None,
) -> float:
    """
    Base multiplier × every "yes" multiplier question, capped at max_multiplier.
    Unknown industry → 1.0.
    """
    form = _as_form(form)
    table = DEFAULT_INDUSTRIES if industries is None else industries
    config = table.get(form.industry)
    if config is None:
        return 1.0

    multiplier = config.base_multiplier
    for question_id, answered_yes in form.industry_options.items():
        if not answered_yes:
            continue
        question = config.question(question_id)
        # fixed-amount impacts are not priced
        if question is not None and question.impact.type == ImpactType.MULTIPLIER:
            multiplier *= question.impact.value

    return min(multiplier, config.max_multiplier)


# ── Pricing variables ────────────────────────────────────

def variable_impact(
    service_id: str,
    form: CalculatorFormData | Mapping[str, Any],
    config: PricingConfig,
    variables: Iterable[PricingVariable] = (),
) -> float:
    """Sum of every impact rule targeting *service_id*, at the form's values."""
    form = _as_form(form)
    base_cost = service_cost(service_id, form, config)
    impact = 0.0

    for variable in variables:
        if variable.tag in BUILTIN_DRIVER_TAGS:
            continue
        value = form.value_of(variable.tag)
        if not _is_number(value):
            continue
        for rule in variable.impact_rules:
            if rule.service_id != service_id:
                continue
            impact += rule_impact(rule, float(value), base_cost)

    return impact


# ── Total ────────────────────────────────────────────────

def price_breakdown(
    form: CalculatorFormData | Mapping[str, Any],
    config: PricingConfig,
    variables: Iterable[PricingVariable] = (),
    industries: Mapping[str, IndustryConfig] | None = None,
) -> PriceBreakdown:
    form = _as_form(form)
    variables = tuple(variables)

    lines = tuple(
        ServiceLine(
            service_id=service_id,
            base_cost=service_cost(service_id, form, config),
            variable_impact=variable_impact(service_id, form, config, variables),
        )
        for service_id in sorted(form.selected_services)
    )

    subtotal = sum(line.subtotal for line in lines)
    multiplier = 1.0
    if lines:
        multiplier = industry_multiplier(form, industries)
        subtotal *= multiplier

    premium = 0.0
    if form.is_premium and config.premium is not None and config.premium.monthly_price:
        premium = config.premium.monthly_price

    total = round_half_up(subtotal + premium)
    return PriceBreakdown(
        lines=lines,
        industry_multiplier=multiplier,
        premium=premium,
        total=total,
    )


def compute_total(
    form: CalculatorFormData | Mapping[str, Any],
    config: PricingConfig,
    variables: Iterable[PricingVariable] = (),
    industries: Mapping[str, IndustryConfig] | None = None,
) -> int:
    """Estimated monthly price in whole kroner."""
    return price_breakdown(form, config, variables, industries).total
