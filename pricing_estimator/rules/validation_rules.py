"""
Validation Rules — range checks on the calculator's numeric drivers.
Applied by the CalculatorSession before every recompute.
Bounds come from Settings.

The per-field validators raise InputRangeError; validate_form() stops at the
first one and reports its message.  validate_form() itself never raises.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from pricing_estimator.config import Settings, get_settings
from pricing_estimator.models.schemas import ValidationResult
from pricing_estimator.models.state import NUMERIC_FIELDS

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
INVALID_INPUT_MESSAGE = "Invalid input"


class InputRangeError(ValueError):
    """A driver value outside its accepted range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def _read(form: Any, name: str) -> Any:
    if isinstance(form, Mapping):
        return form.get(name)
    return getattr(form, name, None)


class FormValidationRules:
    """Fail-fast checks for employees, revenue and transactions."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def validate_employees(self, value: Any) -> bool:
        if not _is_number(value):
            raise InputRangeError("employees", INVALID_INPUT_MESSAGE)
        if value < self.settings.min_employees:
            raise InputRangeError(
                "employees",
                f"Number of employees must be at least {self.settings.min_employees}",
            )
        if value > self.settings.max_employees:
            raise InputRangeError(
                "employees", "Please contact us directly for large organizations"
            )
        if not float(value).is_integer():
            raise InputRangeError(
                "employees", "Number of employees must be a whole number"
            )
        return True

    def validate_revenue(self, value: Any) -> bool:
        if not _is_number(value):
            raise InputRangeError("revenue", INVALID_INPUT_MESSAGE)
        if value < 0:
            raise InputRangeError("revenue", "Revenue cannot be negative")
        if value > self.settings.max_revenue:
            raise InputRangeError(
                "revenue", "Please contact us directly for high-revenue organizations"
            )
        return True

    def validate_transactions(self, value: Any) -> bool:
        if not _is_number(value):
            raise InputRangeError("transactions", INVALID_INPUT_MESSAGE)
        if value < 0:
            raise InputRangeError(
                "transactions", "Number of transactions cannot be negative"
            )
        if value > self.settings.max_transactions:
            raise InputRangeError(
                "transactions", "Please contact us directly for high-volume businesses"
            )
        return True

    def validate_form(self, form: Any) -> ValidationResult:
        """
        Check the three required drivers.
        Returns ValidationResult(is_valid, errors) with at most one message.
        """
        values = {name: _read(form, name) for name in NUMERIC_FIELDS}

        # Empty fields short-circuit before any range check
        if any(v is None or v == "" for v in values.values()):
            return ValidationResult(is_valid=False, errors=REQUIRED_FIELDS_MESSAGE)

        try:
            self.validate_employees(values["employees"])
            self.validate_revenue(values["revenue"])
            self.validate_transactions(values["transactions"])
        except InputRangeError as e:
            logger.debug(f"Validation failed on {e.field}: {e.message}")
            return ValidationResult(is_valid=False, errors=e.message)

        return ValidationResult(is_valid=True, errors=None)


def validate_form(form: Any, settings: Settings | None = None) -> ValidationResult:
    """Validate a form snapshot (model or plain mapping)."""
    return FormValidationRules(settings).validate_form(form)
