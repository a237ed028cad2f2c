"""
Calculator session state — the live form snapshot and the derived output.

Design rules:
  1. The CalculatorSession is the only writer; every update builds a new
     CalculatorFormData, the previous snapshot is never touched.
  2. Pricing variables add one extra field each, keyed by the variable tag
     (pydantic ``extra="allow"``).
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ServiceId

NUMERIC_FIELDS = ("employees", "revenue", "transactions")


class CalculatorFormData(BaseModel):
    """What the user has entered so far."""

    model_config = ConfigDict(extra="allow", frozen=True)

    # ── Drivers (None = field left empty) ────────────────
    employees: Optional[Union[int, float]] = 1
    revenue: Optional[Union[int, float]] = 1  # million NOK
    transactions: Optional[Union[int, float]] = 100

    # ── Industry ─────────────────────────────────────────
    industry: str = "consulting"
    industry_options: dict[str, bool] = Field(default_factory=dict)

    # ── Services ─────────────────────────────────────────
    selected_services: frozenset[str] = frozenset({ServiceId.BOOKKEEPING.value})
    is_premium: bool = False

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _blank_is_empty(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def has_field(self, name: str) -> bool:
        return name in type(self).model_fields or name in (self.model_extra or {})

    def value_of(self, name: str, default: Any = None) -> Any:
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)

    def variable_values(self) -> dict[str, Any]:
        """The extra (variable-bound) fields only."""
        return dict(self.model_extra or {})


class CalculatorResult(BaseModel):
    """Output surface consumed by the presentation layer."""

    form_data: CalculatorFormData
    error: Optional[str] = None
    total: int = 0
