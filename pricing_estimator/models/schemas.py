"""
Configuration schemas shared by the engine, the session and the settings store.

Every model here is frozen: an edit produces a new instance (see ``evolve``),
so a snapshot handed to one component can never change underneath another.
"""

from __future__ import annotations

import math
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import ImpactFormula, ImpactType, ServiceId, VariableType

FROZEN = ConfigDict(frozen=True)

M = TypeVar("M", bound=BaseModel)


def evolve(model: M, **changes: Any) -> M:
    """Return a re-validated copy of *model* with *changes* applied."""
    return type(model).model_validate({**dict(model), **changes})


# ── Service plans ────────────────────────────────────────


class ServiceDriver(BaseModel):
    """The form field that scales a plan's cost (presentational metadata)."""
    model_config = FROZEN

    type: str
    label: str = ""
    description: str = ""


class SalaryPlan(BaseModel):
    model_config = FROZEN

    label: str = "Salary & Payroll"
    description: str = ""
    base_rate: float = 0.0
    per_employee_rate: float = 0.0
    driver: ServiceDriver = Field(
        default_factory=lambda: ServiceDriver(type="employees", label="Employees")
    )


class BookkeepingPlan(BaseModel):
    model_config = FROZEN

    label: str = "Bookkeeping"
    description: str = ""
    base_rate: float = 0.0
    per_transaction_rate: float = 0.0
    driver: ServiceDriver = Field(
        default_factory=lambda: ServiceDriver(type="transactions", label="Transactions")
    )


class RevenueTier(BaseModel):
    """Revenue bracket (million NOK) mapped to a flat annual price."""
    model_config = FROZEN

    max_revenue: float = math.inf
    price: float = 0.0

    @field_validator("max_revenue", mode="before")
    @classmethod
    def _blank_is_unbounded(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return math.inf
        return value

    @property
    def unbounded(self) -> bool:
        return math.isinf(self.max_revenue)


class AnnualReportsPlan(BaseModel):
    model_config = FROZEN

    label: str = "Annual Reports"
    description: str = ""
    tiers: tuple[RevenueTier, ...] = ()
    driver: ServiceDriver = Field(
        default_factory=lambda: ServiceDriver(type="revenue", label="Annual Revenue")
    )

    @model_validator(mode="after")
    def _one_unbounded_tier_last(self) -> "AnnualReportsPlan":
        """Bounds ascend strictly and only the last tier is unbounded."""
        if not self.tiers:
            return self
        if not self.tiers[-1].unbounded:
            raise ValueError("The last revenue tier must be unbounded")
        bounds = [tier.max_revenue for tier in self.tiers]
        for lower, upper in zip(bounds, bounds[1:]):
            if lower >= upper:
                raise ValueError(
                    f"Revenue tiers must ascend with one unbounded tier last: "
                    f"{lower} is followed by {upper}"
                )
        return self


class PremiumPlan(BaseModel):
    model_config = FROZEN

    label: str = "Premium"
    description: str = ""
    monthly_price: float = 0.0
    features: tuple[str, ...] = ()


# service id -> PricingConfig attribute
SERVICE_SECTIONS: dict[str, str] = {
    ServiceId.SALARY.value: "salary",
    ServiceId.BOOKKEEPING.value: "bookkeeping",
    ServiceId.ANNUAL_REPORTS.value: "annual_reports",
}


class PricingConfig(BaseModel):
    """Root pricing configuration.  A missing plan means the service is unavailable."""
    model_config = FROZEN

    salary: Optional[SalaryPlan] = None
    bookkeeping: Optional[BookkeepingPlan] = None
    annual_reports: Optional[AnnualReportsPlan] = None
    premium: Optional[PremiumPlan] = None

    def plan_for(self, service_id: str) -> Optional[BaseModel]:
        section = SERVICE_SECTIONS.get(service_id)
        if section is None:
            return None
        return getattr(self, section)

    def service_options(self) -> list[tuple[str, str]]:
        """(service_id, label) for every configured billable service."""
        options = []
        for service_id, section in SERVICE_SECTIONS.items():
            plan = getattr(self, section)
            if plan is not None:
                options.append((service_id, plan.label))
        return options


# ── Industries ───────────────────────────────────────────


class QuestionImpact(BaseModel):
    model_config = FROZEN

    type: ImpactType = ImpactType.MULTIPLIER
    value: float = 1.0


class IndustryQuestion(BaseModel):
    """A yes/no question whose "yes" answer scales the industry multiplier."""
    model_config = FROZEN

    id: str
    question: str = ""
    description: str = ""
    impact: QuestionImpact = Field(default_factory=QuestionImpact)


class IndustryConfig(BaseModel):
    model_config = FROZEN

    label: str = ""
    description: str = ""
    base_multiplier: float = 1.0
    max_multiplier: float = 1.0
    questions: tuple[IndustryQuestion, ...] = ()

    @model_validator(mode="after")
    def _base_within_cap(self) -> "IndustryConfig":
        if self.base_multiplier > self.max_multiplier:
            raise ValueError(
                f"base_multiplier {self.base_multiplier} exceeds "
                f"max_multiplier {self.max_multiplier}"
            )
        return self

    def question(self, question_id: str) -> Optional[IndustryQuestion]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


# ── Pricing variables ────────────────────────────────────


class Threshold(BaseModel):
    model_config = FROZEN

    value: float
    amount: float = 0.0


class PricingImpactRule(BaseModel):
    """Binds a variable's value to one service's cost."""
    model_config = FROZEN

    id: str
    service_id: str
    formula: ImpactFormula = ImpactFormula.LINEAR
    amount: float = 0.0
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    thresholds: tuple[Threshold, ...] = ()


class PricingVariable(BaseModel):
    """A user-defined form field with rules that add to service costs."""
    model_config = FROZEN

    id: str
    name: str = ""
    type: VariableType = VariableType.NUMBER
    tag: str
    description: str = ""
    impact_rules: tuple[PricingImpactRule, ...] = ()

    def default_value(self) -> Any:
        return "" if self.type == VariableType.TEXT else 0


# ── Published configuration ──────────────────────────────


class ConfigSnapshot(BaseModel):
    """Immutable configuration handed from the store to calculator sessions."""
    model_config = FROZEN

    version: int = 0
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    industries: dict[str, IndustryConfig] = Field(default_factory=dict)
    variables: tuple[PricingVariable, ...] = ()


# ── Engine / validation outputs ──────────────────────────


class ValidationResult(BaseModel):
    model_config = FROZEN

    is_valid: bool
    errors: Optional[str] = None


class ServiceLine(BaseModel):
    model_config = FROZEN

    service_id: str
    base_cost: float = 0.0
    variable_impact: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.base_cost + self.variable_impact


class PriceBreakdown(BaseModel):
    """How a total was assembled; ``total`` always equals compute_total()."""
    model_config = FROZEN

    lines: tuple[ServiceLine, ...] = ()
    industry_multiplier: float = 1.0
    premium: float = 0.0
    total: int = 0
