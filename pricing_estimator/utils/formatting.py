"""
Display formatting for the single supported locale (nb-NO, whole kroner).
"""

from __future__ import annotations

from typing import Any

from pricing_estimator.config import get_settings

NBSP = "\u00a0"


def format_currency(amount: Any, suffix: str | None = None) -> str:
    """Return *amount* as e.g. ``"12 345 kr"`` with non-breaking spaces."""
    if suffix is None:
        suffix = get_settings().currency_suffix
    try:
        number = float(amount or 0)
    except (TypeError, ValueError):
        number = 0.0

    grouped = f"{abs(number):,.0f}".replace(",", NBSP)
    sign = "-" if round(number) < 0 else ""
    return f"{sign}{grouped}{NBSP}{suffix}"
