"""
Tests: currency display and the command-line entry point.

Run with:
    pytest pricing_estimator/tests/test_formatting.py -v
"""

from pricing_estimator.main import run
from pricing_estimator.utils.formatting import NBSP, format_currency


class TestFormatCurrency:
    def test_groups_thousands_with_nbsp(self):
        assert format_currency(1900) == f"1{NBSP}900{NBSP}kr"

    def test_large_amount(self):
        assert format_currency(1234567) == f"1{NBSP}234{NBSP}567{NBSP}kr"

    def test_small_amount(self):
        assert format_currency(650) == f"650{NBSP}kr"

    def test_whole_kroner_only(self):
        assert format_currency(416.67) == f"417{NBSP}kr"

    def test_negative(self):
        assert format_currency(-1500) == f"-1{NBSP}500{NBSP}kr"

    def test_missing_or_bad_amount_is_zero(self):
        assert format_currency(None) == f"0{NBSP}kr"
        assert format_currency("n/a") == f"0{NBSP}kr"

    def test_custom_suffix(self):
        assert format_currency(8200, suffix="NOK") == f"8{NBSP}200{NBSP}NOK"


class TestRun:
    def test_default_estimate(self):
        result = run()
        assert result["total"] == 3200
        assert result["error"] is None

    def test_form_fields_applied(self):
        result = run(employees=5, selected_services=["salary"])
        assert result["total"] == 1900
        assert result["form_data"]["employees"] == 5

    def test_invalid_fields_reported(self):
        result = run(employees=0)
        assert result["total"] == 0
        assert result["error"] == "Number of employees must be at least 1"
