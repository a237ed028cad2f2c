from pricing_estimator.rules.validation_rules import (
    FormValidationRules,
    InputRangeError,
    validate_form,
)

__all__ = ["FormValidationRules", "InputRangeError", "validate_form"]
