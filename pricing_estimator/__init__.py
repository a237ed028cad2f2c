"""Interactive monthly pricing estimator for accounting services."""

from pricing_estimator.engine.pricing_engine import compute_total
from pricing_estimator.orchestration.calculator_session import CalculatorSession
from pricing_estimator.rules.validation_rules import validate_form
from pricing_estimator.store.config_store import ConfigurationStore
from pricing_estimator.store.settings_editor import SettingsEditor

__all__ = [
    "CalculatorSession",
    "ConfigurationStore",
    "SettingsEditor",
    "compute_total",
    "validate_form",
]
