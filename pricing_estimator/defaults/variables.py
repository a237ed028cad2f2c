"""
Default pricing variables.

These mirror the built-in drivers so the settings surface can show how each
one prices.  The engine prices built-in drivers through the service plans,
so rules on these tags never add to the total a second time.
"""

from __future__ import annotations

from pricing_estimator.defaults.pricing import DEFAULT_PRICING
from pricing_estimator.models.enums import ImpactFormula, ServiceId, VariableType
from pricing_estimator.models.schemas import PricingConfig, PricingImpactRule, PricingVariable, Threshold


def build_default_variables(pricing: PricingConfig = DEFAULT_PRICING) -> tuple[PricingVariable, ...]:
    variables = []

    if pricing.salary is not None:
        variables.append(PricingVariable(
            id="employees",
            name="Number of Employees",
            type=VariableType.NUMBER,
            tag="employees",
            description="Total number of employees on payroll",
            impact_rules=(
                PricingImpactRule(
                    id="employees-salary",
                    service_id=ServiceId.SALARY.value,
                    formula=ImpactFormula.LINEAR,
                    amount=pricing.salary.per_employee_rate,
                ),
            ),
        ))

    if pricing.annual_reports is not None:
        variables.append(PricingVariable(
            id="revenue",
            name="Annual Revenue",
            type=VariableType.CURRENCY,
            tag="revenue",
            description="Annual revenue in million NOK",
            impact_rules=(
                PricingImpactRule(
                    id="revenue-reports",
                    service_id=ServiceId.ANNUAL_REPORTS.value,
                    formula=ImpactFormula.THRESHOLD,
                    amount=0,
                    # annual tier price as a monthly amount
                    thresholds=tuple(
                        Threshold(value=tier.max_revenue, amount=tier.price / 12)
                        for tier in pricing.annual_reports.tiers
                    ),
                ),
            ),
        ))

    if pricing.bookkeeping is not None:
        variables.append(PricingVariable(
            id="transactions",
            name="Monthly Transactions",
            type=VariableType.NUMBER,
            tag="transactions",
            description="Average number of monthly transactions",
            impact_rules=(
                PricingImpactRule(
                    id="transactions-bookkeeping",
                    service_id=ServiceId.BOOKKEEPING.value,
                    formula=ImpactFormula.LINEAR,
                    amount=pricing.bookkeeping.per_transaction_rate,
                ),
            ),
        ))

    return tuple(variables)


DEFAULT_VARIABLES = build_default_variables()
