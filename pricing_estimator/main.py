"""
Pricing Estimator — Main Entry Point

Print an estimate for the default configuration:
    python -m pricing_estimator

Or import and run programmatically:
    from pricing_estimator.main import run
    result = run(employees=5, selected_services=["salary"])
"""

from __future__ import annotations

import logging
from typing import Any

from pricing_estimator.config import get_settings
from pricing_estimator.orchestration.calculator_session import CalculatorSession
from pricing_estimator.store.config_store import ConfigurationStore
from pricing_estimator.utils.formatting import format_currency
from pricing_estimator.utils.logger import setup_logging


def run(**form_fields: Any) -> dict:
    """Price *form_fields* against the default configuration and return the result."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"  {settings.app_name.upper()}")
    logger.info("=" * 60)

    store = ConfigurationStore()
    session = CalculatorSession.from_store(store, settings=settings)
    if form_fields:
        session.set_form_data(form_fields)

    _print_summary(session)
    result = session.result.model_dump()
    session.dispose()
    return result


def _print_summary(session: CalculatorSession) -> None:
    """Log a human-readable summary of the estimate."""
    logger = logging.getLogger(__name__)
    form = session.form_data
    config = session.config

    industry = config.industries.get(form.industry)
    labels = dict(config.pricing.service_options())

    logger.info("-" * 60)
    logger.info(f"  Industry:       {industry.label if industry else form.industry}")
    logger.info(f"  Employees:      {form.employees}")
    logger.info(f"  Revenue:        {form.revenue} MNOK")
    logger.info(f"  Transactions:   {form.transactions}")
    logger.info(f"  Premium:        {'yes' if form.is_premium else 'no'}")
    for tag, value in form.variable_values().items():
        logger.info(f"  {tag + ':':<15} {value}")

    if session.error:
        logger.info(f"  Error:          {session.error}")
    else:
        breakdown = session.breakdown()
        for line in breakdown.lines:
            label = labels.get(line.service_id, line.service_id)
            logger.info(f"    {label:<20} {format_currency(line.subtotal)}")
        logger.info(f"  Multiplier:     ×{breakdown.industry_multiplier:.4g}")
        if breakdown.premium:
            logger.info(f"  Premium:        {format_currency(breakdown.premium)}")

    logger.info(f"  Monthly total:  {session.formatted_total} ({session.settings.currency_code})")
    logger.info("-" * 60)


if __name__ == "__main__":
    run()
