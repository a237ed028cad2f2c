from __future__ import annotations

import math

import pytest

from pricing_estimator.controllers.timers import ManualScheduler
from pricing_estimator.defaults import DEFAULT_INDUSTRIES, DEFAULT_PRICING
from pricing_estimator.models.schemas import (
    AnnualReportsPlan,
    ConfigSnapshot,
    IndustryConfig,
    IndustryQuestion,
    PricingImpactRule,
    PricingVariable,
    QuestionImpact,
    RevenueTier,
)
from pricing_estimator.orchestration.calculator_session import CalculatorSession
from pricing_estimator.store.config_store import ConfigurationStore
from pricing_estimator.store.settings_editor import SettingsEditor


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def pricing():
    return DEFAULT_PRICING


@pytest.fixture
def four_tier_pricing():
    return DEFAULT_PRICING.model_copy(update={
        "annual_reports": AnnualReportsPlan(tiers=(
            RevenueTier(max_revenue=2, price=5000),
            RevenueTier(max_revenue=5, price=6000),
            RevenueTier(max_revenue=10, price=8000),
            RevenueTier(max_revenue=math.inf, price=15000),
        )),
    })


@pytest.fixture
def clamp_industries():
    """consulting-like industry: two 1.15 questions, cap 1.2."""
    return {
        "consulting": IndustryConfig(
            label="Consulting",
            base_multiplier=1.0,
            max_multiplier=1.2,
            questions=(
                IndustryQuestion(id="q1", impact=QuestionImpact(value=1.15)),
                IndustryQuestion(id="q2", impact=QuestionImpact(value=1.15)),
            ),
        ),
    }


@pytest.fixture
def seats_variable():
    """A custom variable: 100 NOK per seat on bookkeeping."""
    return PricingVariable(
        id="var-seats",
        name="Software seats",
        tag="seats",
        impact_rules=(
            PricingImpactRule(id="rule-seats", service_id="bookkeeping", amount=100),
        ),
    )


@pytest.fixture
def store():
    return ConfigurationStore()


@pytest.fixture
def editor(store, scheduler):
    return SettingsEditor(store, scheduler=scheduler)


@pytest.fixture
def snapshot():
    return ConfigSnapshot(version=1, pricing=DEFAULT_PRICING, industries=dict(DEFAULT_INDUSTRIES))


@pytest.fixture
def session(store):
    s = CalculatorSession.from_store(store)
    yield s
    s.dispose()
