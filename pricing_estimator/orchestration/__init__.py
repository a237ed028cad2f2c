from pricing_estimator.orchestration.calculator_session import CalculatorSession

__all__ = ["CalculatorSession"]
