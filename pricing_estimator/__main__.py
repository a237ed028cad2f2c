"""Allow running as: python -m pricing_estimator"""

from pricing_estimator.main import run

if __name__ == "__main__":
    run()
