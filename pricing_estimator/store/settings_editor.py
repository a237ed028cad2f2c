"""
Settings Editor — the working copy behind the settings surface.

Three sections, each edited copy-on-write:
  - services   (plans, revenue tiers, premium features)   debounced publish
  - variables  (pricing variables and their impact rules) debounced publish
  - industries (one industry draft at a time)             explicit save

An edit that leaves its section structurally unchanged is dropped: nothing
is scheduled and the editor does not become dirty.  Closing with edits that
have not reached the store asks for confirmation first.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any, Callable, Optional

from pricing_estimator.config import Settings, get_settings
from pricing_estimator.controllers.timers import Debouncer, Scheduler
from pricing_estimator.models.enums import ImpactFormula, ImpactType, VariableType
from pricing_estimator.models.schemas import (
    SERVICE_SECTIONS,
    IndustryConfig,
    IndustryQuestion,
    PricingConfig,
    PricingImpactRule,
    PricingVariable,
    QuestionImpact,
    RevenueTier,
    evolve,
)
from pricing_estimator.store.config_store import ConfigurationStore

logger = logging.getLogger(__name__)

UNSAVED_CHANGES_PROMPT = "You have unsaved changes. Are you sure you want to close?"

PLAN_SECTIONS = tuple(SERVICE_SECTIONS.values()) + ("premium",)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class SettingsEditor:
    """Buffers operator edits and republishes them to a ConfigurationStore."""

    def __init__(
        self,
        store: ConfigurationStore,
        *,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[Settings] = None,
    ):
        self._store = store
        self.settings = settings or get_settings()

        snapshot = store.snapshot
        self._pricing: PricingConfig = snapshot.pricing
        self._variables: tuple[PricingVariable, ...] = snapshot.variables

        self._industry_key: Optional[str] = None
        self._industry_draft: Optional[IndustryConfig] = None

        self._services_debouncer = Debouncer(
            self._publish_pricing,
            self.settings.services_debounce_ms,
            scheduler,
            name="settings:services",
        )
        self._variables_debouncer = Debouncer(
            self._publish_variables,
            self.settings.variables_debounce_ms,
            scheduler,
            name="settings:variables",
        )
        self.is_open = True

    # ── Working copies ───────────────────────────────────

    @property
    def pricing(self) -> PricingConfig:
        return self._pricing

    @property
    def variables(self) -> tuple[PricingVariable, ...]:
        return self._variables

    @property
    def industry_key(self) -> Optional[str]:
        return self._industry_key

    @property
    def industry_draft(self) -> Optional[IndustryConfig]:
        return self._industry_draft

    @property
    def has_changes(self) -> bool:
        """True while some edit has not reached the store."""
        if self._services_debouncer.pending or self._variables_debouncer.pending:
            return True
        if self._industry_draft is not None:
            published = self._store.snapshot.industries.get(self._industry_key)
            return self._industry_draft != published
        return False

    # ── Services ─────────────────────────────────────────

    def _plan(self, section: str) -> Any:
        if section not in PLAN_SECTIONS:
            raise KeyError(f"Unknown pricing section: {section}")
        plan = getattr(self._pricing, section)
        if plan is None:
            raise KeyError(f"Pricing section not configured: {section}")
        return plan

    def _set_pricing(self, pricing: PricingConfig) -> bool:
        if pricing == self._pricing:
            return False
        self._services_debouncer.trigger()
        self._pricing = pricing
        return True

    def _set_plan(self, section: str, plan: Any) -> bool:
        return self._set_pricing(self._pricing.model_copy(update={section: plan}))

    def update_service(self, section: str, field: str, value: Any) -> bool:
        plan = self._plan(section)
        if field not in type(plan).model_fields:
            raise KeyError(f"{section} has no field '{field}'")
        return self._set_plan(section, evolve(plan, **{field: value}))

    def update_driver(self, section: str, **updates: Any) -> bool:
        plan = self._plan(section)
        if "driver" not in type(plan).model_fields:
            raise KeyError(f"{section} has no driver")
        return self._set_plan(section, evolve(plan, driver=evolve(plan.driver, **updates)))

    def update_tier(self, index: int, field: str, value: Any) -> bool:
        plan = self._plan("annual_reports")
        tiers = list(plan.tiers)
        tiers[index] = evolve(tiers[index], **{field: value})
        return self._set_plan("annual_reports", evolve(plan, tiers=tuple(tiers)))

    def add_tier(self, max_revenue: Optional[float] = None, price: float = 0.0) -> RevenueTier:
        """
        Add a bounded tier in ascending position, ahead of the unbounded one.
        Without *max_revenue* the bound doubles the highest existing bound.
        The first tier of an empty plan is the unbounded one.
        """
        plan = self._plan("annual_reports")
        bounded = [t for t in plan.tiers if not t.unbounded]

        if not plan.tiers:
            bound = math.inf if max_revenue is None else max_revenue
        elif max_revenue is None:
            bound = bounded[-1].max_revenue * 2 if bounded else 1.0
        else:
            bound = max_revenue
        tier = RevenueTier(max_revenue=bound, price=price)

        if tier.unbounded and plan.tiers:
            raise ValueError("The plan already has an unbounded revenue tier")
        if any(t.max_revenue == tier.max_revenue for t in bounded):
            raise ValueError(f"A revenue tier already ends at {tier.max_revenue}")

        position = sum(1 for t in bounded if t.max_revenue < tier.max_revenue)
        tiers = plan.tiers[:position] + (tier,) + plan.tiers[position:]
        self._set_plan("annual_reports", evolve(plan, tiers=tiers))
        return tier

    def remove_tier(self, index: int) -> bool:
        plan = self._plan("annual_reports")
        if not -len(plan.tiers) <= index < len(plan.tiers):
            raise IndexError(f"No revenue tier at index {index}")
        index %= len(plan.tiers)
        tiers = tuple(t for i, t in enumerate(plan.tiers) if i != index)
        return self._set_plan("annual_reports", evolve(plan, tiers=tiers))

    def add_premium_feature(self, text: str = "") -> bool:
        plan = self._plan("premium")
        return self._set_plan("premium", evolve(plan, features=plan.features + (text,)))

    def update_premium_feature(self, index: int, text: str) -> bool:
        plan = self._plan("premium")
        features = list(plan.features)
        features[index] = text
        return self._set_plan("premium", evolve(plan, features=tuple(features)))

    def remove_premium_feature(self, index: int) -> bool:
        plan = self._plan("premium")
        if not -len(plan.features) <= index < len(plan.features):
            raise IndexError(f"No premium feature at index {index}")
        index %= len(plan.features)
        features = tuple(f for i, f in enumerate(plan.features) if i != index)
        return self._set_plan("premium", evolve(plan, features=features))

    def _publish_pricing(self) -> None:
        self._store.publish(pricing=self._pricing)

    # ── Variables ────────────────────────────────────────

    def _set_variables(self, variables: tuple[PricingVariable, ...]) -> bool:
        if variables == self._variables:
            return False
        self._variables_debouncer.trigger()
        self._variables = variables
        return True

    def _variable(self, variable_id: str) -> PricingVariable:
        for variable in self._variables:
            if variable.id == variable_id:
                return variable
        raise KeyError(f"Unknown pricing variable: {variable_id}")

    def _replace_variable(self, updated: PricingVariable) -> bool:
        return self._set_variables(tuple(
            updated if v.id == updated.id else v for v in self._variables
        ))

    def add_variable(
        self,
        name: str = "New Variable",
        tag: str = "new_variable",
        type: VariableType = VariableType.NUMBER,
        description: str = "",
    ) -> PricingVariable:
        variable = PricingVariable(
            id=_new_id("var"),
            name=name,
            type=type,
            tag=tag,
            description=description,
        )
        self._set_variables(self._variables + (variable,))
        return variable

    def update_variable(self, variable_id: str, field: str, value: Any) -> bool:
        if field in ("id", "impact_rules"):
            raise KeyError(f"Field '{field}' cannot be edited directly")
        variable = self._variable(variable_id)
        return self._replace_variable(evolve(variable, **{field: value}))

    def remove_variable(self, variable_id: str) -> bool:
        return self._set_variables(tuple(
            v for v in self._variables if v.id != variable_id
        ))

    def add_impact_rule(
        self, variable_id: str, service_id: Optional[str] = None
    ) -> PricingImpactRule:
        variable = self._variable(variable_id)
        if service_id is None:
            options = self._pricing.service_options()
            service_id = options[0][0] if options else ""
        rule = PricingImpactRule(
            id=_new_id("rule"),
            service_id=service_id,
            formula=ImpactFormula.LINEAR,
            amount=0,
        )
        self._replace_variable(evolve(variable, impact_rules=variable.impact_rules + (rule,)))
        return rule

    def update_impact_rule(
        self, variable_id: str, rule_id: str, field: str, value: Any
    ) -> bool:
        variable = self._variable(variable_id)
        if not any(r.id == rule_id for r in variable.impact_rules):
            raise KeyError(f"Unknown impact rule {rule_id} on {variable_id}")
        rules = tuple(
            evolve(r, **{field: value}) if r.id == rule_id else r
            for r in variable.impact_rules
        )
        return self._replace_variable(evolve(variable, impact_rules=rules))

    def remove_impact_rule(self, variable_id: str, rule_id: str) -> bool:
        variable = self._variable(variable_id)
        rules = tuple(r for r in variable.impact_rules if r.id != rule_id)
        return self._replace_variable(evolve(variable, impact_rules=rules))

    def _publish_variables(self) -> None:
        self._store.publish(variables=self._variables)

    # ── Industries ───────────────────────────────────────

    def _draft(self) -> IndustryConfig:
        if self._industry_draft is None:
            raise RuntimeError("No industry is being edited")
        return self._industry_draft

    def begin_industry_edit(self, industry_key: str) -> IndustryConfig:
        industries = self._store.snapshot.industries
        if industry_key not in industries:
            raise KeyError(f"Unknown industry: {industry_key}")
        self._industry_key = industry_key
        self._industry_draft = industries[industry_key]
        return self._industry_draft

    def update_industry(self, field: str, value: Any) -> bool:
        draft = self._draft()
        if field == "questions":
            raise KeyError("Edit questions with add/update/remove_question")
        updated = evolve(draft, **{field: value})
        if updated == draft:
            return False
        self._industry_draft = updated
        return True

    def add_question(self, question: str = "", description: str = "") -> IndustryQuestion:
        draft = self._draft()
        new_question = IndustryQuestion(
            id=_new_id("question"),
            question=question,
            description=description,
            impact=QuestionImpact(type=ImpactType.MULTIPLIER, value=1.1),
        )
        self._industry_draft = evolve(draft, questions=draft.questions + (new_question,))
        return new_question

    def update_question(self, question_id: str, **updates: Any) -> bool:
        draft = self._draft()
        if draft.question(question_id) is None:
            raise KeyError(f"Unknown question: {question_id}")
        if isinstance(updates.get("impact"), dict):
            current = draft.question(question_id).impact
            updates["impact"] = evolve(current, **updates["impact"])
        questions = tuple(
            evolve(q, **updates) if q.id == question_id else q
            for q in draft.questions
        )
        updated = evolve(draft, questions=questions)
        if updated == draft:
            return False
        self._industry_draft = updated
        return True

    def remove_question(self, question_id: str) -> bool:
        draft = self._draft()
        questions = tuple(q for q in draft.questions if q.id != question_id)
        if len(questions) == len(draft.questions):
            return False
        self._industry_draft = evolve(draft, questions=questions)
        return True

    def save_industry(self) -> bool:
        draft = self._draft()
        industries = dict(self._store.snapshot.industries)
        industries[self._industry_key] = draft
        published = self._store.publish(industries=industries)
        self._industry_key = None
        self._industry_draft = None
        return published

    def cancel_industry_edit(self) -> None:
        self._industry_key = None
        self._industry_draft = None

    # ── Lifecycle ────────────────────────────────────────

    def flush(self) -> None:
        """Publish every pending services/variables edit now."""
        self._services_debouncer.flush()
        self._variables_debouncer.flush()

    def close(self, confirm: Optional[Callable[[str], bool]] = None) -> bool:
        """
        Close the settings surface.  With unpropagated edits, *confirm* is
        asked first; a missing callback counts as "no".
        """
        if self.has_changes:
            if confirm is None or not confirm(UNSAVED_CHANGES_PROMPT):
                logger.info("Close cancelled — unsaved settings changes kept")
                return False
            logger.info("Discarding unsaved settings changes")

        self._services_debouncer.cancel()
        self._variables_debouncer.cancel()
        self._industry_key = None
        self._industry_draft = None
        snapshot = self._store.snapshot
        self._pricing = snapshot.pricing
        self._variables = snapshot.variables
        self.is_open = False
        return True
