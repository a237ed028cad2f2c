"""
Default pricing — the configuration a fresh store starts from.
"""

from __future__ import annotations

import math

from pricing_estimator.models.schemas import (
    AnnualReportsPlan,
    BookkeepingPlan,
    PremiumPlan,
    PricingConfig,
    RevenueTier,
    SalaryPlan,
    ServiceDriver,
)

DEFAULT_PRICING = PricingConfig(
    salary=SalaryPlan(
        label="Salary & Payroll",
        description="Monthly payroll processing and reporting",
        base_rate=650,
        per_employee_rate=250,
        driver=ServiceDriver(
            type="employees",
            label="Employees",
            description="Number of employees on payroll",
        ),
    ),
    bookkeeping=BookkeepingPlan(
        label="Bookkeeping",
        description="Daily transaction processing and reconciliation",
        base_rate=2000,
        per_transaction_rate=12,
        driver=ServiceDriver(
            type="transactions",
            label="Transactions",
            description="Average monthly transactions",
        ),
    ),
    annual_reports=AnnualReportsPlan(
        label="Annual Reports",
        description="Year-end reporting and tax returns",
        tiers=(
            RevenueTier(max_revenue=2, price=5000),
            RevenueTier(max_revenue=5, price=6000),
            RevenueTier(max_revenue=10, price=8000),
            RevenueTier(max_revenue=20, price=10000),
            RevenueTier(max_revenue=50, price=12000),
            RevenueTier(max_revenue=math.inf, price=15000),
        ),
        driver=ServiceDriver(
            type="revenue",
            label="Annual Revenue",
            description="Annual revenue in million NOK",
        ),
    ),
    premium=PremiumPlan(
        label="Silfer Premium",
        description="Priority support and dedicated account manager",
        monthly_price=5000,
        features=(
            "Priority Support 24/7",
            "Dedicated Account Manager",
            "Quarterly Business Review",
            "Custom Report Templates",
            "Advanced Analytics Dashboard",
        ),
    ),
)
