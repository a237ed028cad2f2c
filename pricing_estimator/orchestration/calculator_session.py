"""
Calculator Session — owns the live form snapshot and its derived state.

Every change goes through set_form_data() (or apply_config() for new
configuration), and each one ends with the same two steps:
  1. validate the drivers   → error message, total forced to 0
  2. otherwise price it     → error cleared, total recomputed

The snapshot is replaced, never mutated, so anything still holding the
previous one keeps seeing the previous values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import ValidationError

from pricing_estimator.config import Settings, get_settings
from pricing_estimator.controllers.debounced_field import DebouncedFieldController
from pricing_estimator.controllers.timers import Scheduler
from pricing_estimator.engine.pricing_engine import compute_total, price_breakdown
from pricing_estimator.models.schemas import ConfigSnapshot, PriceBreakdown
from pricing_estimator.models.state import CalculatorFormData, CalculatorResult
from pricing_estimator.rules.validation_rules import (
    INVALID_INPUT_MESSAGE,
    FormValidationRules,
)
from pricing_estimator.store.config_store import ConfigurationStore
from pricing_estimator.utils.formatting import format_currency
from pricing_estimator.utils.parsing import parse_number

logger = logging.getLogger(__name__)


def blank_industry_options(config: ConfigSnapshot, industry: str) -> dict[str, bool]:
    """All-false answers for *industry*'s questions (empty for unknown keys)."""
    industry_config = config.industries.get(industry)
    if industry_config is None:
        return {}
    return {q.id: False for q in industry_config.questions}


class CalculatorSession:
    """Live estimator state: form_data in, (error, total) out."""

    def __init__(
        self,
        config: ConfigSnapshot,
        *,
        form_data: Optional[CalculatorFormData] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._config = config
        self._validator = FormValidationRules(self.settings)
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._fields: dict[str, DebouncedFieldController] = {}

        if form_data is None:
            industry = self.settings.default_industry
            form_data = CalculatorFormData(
                industry=industry,
                industry_options=blank_industry_options(config, industry),
            )
        self._form_data = self._with_variable_fields(form_data, config)

        self._error: Optional[str] = None
        self._total = 0
        self._recompute()

    @classmethod
    def from_store(cls, store: ConfigurationStore, **kwargs: Any) -> CalculatorSession:
        session = cls(store.snapshot, **kwargs)
        session.attach(store)
        return session

    # ── Output surface ───────────────────────────────────

    @property
    def config(self) -> ConfigSnapshot:
        return self._config

    @property
    def form_data(self) -> CalculatorFormData:
        return self._form_data

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def total(self) -> int:
        return self._total

    @property
    def formatted_total(self) -> str:
        return format_currency(self._total)

    @property
    def result(self) -> CalculatorResult:
        return CalculatorResult(form_data=self._form_data, error=self._error, total=self._total)

    def breakdown(self) -> PriceBreakdown:
        """Diagnostic view of the current total (zero-total when invalid)."""
        if self._error is not None:
            return PriceBreakdown()
        return price_breakdown(
            self._form_data,
            self._config.pricing,
            self._config.variables,
            self._config.industries,
        )

    def clear_error(self) -> None:
        self._error = None

    # ── Updates ──────────────────────────────────────────

    def set_form_data(
        self, updates: Optional[Mapping[str, Any]] = None, **fields: Any
    ) -> CalculatorResult:
        """
        Merge a partial update.  Changing ``industry`` replaces the answers
        with a fresh all-false map for the new industry.
        """
        changes = {**(updates or {}), **fields}
        previous = self._form_data

        if "industry" in changes and changes["industry"] != previous.industry:
            changes["industry_options"] = blank_industry_options(
                self._config, changes["industry"]
            )

        try:
            self._form_data = CalculatorFormData.model_validate({**dict(previous), **changes})
        except ValidationError as e:
            logger.warning(f"Rejected form update {sorted(changes)}: {e.error_count()} error(s)")
            self._error = INVALID_INPUT_MESSAGE
            self._total = 0
            return self.result

        self._recompute()
        self._sync_fields(changes)
        return self.result

    def set_industry_option(self, question_id: str, answer: bool) -> CalculatorResult:
        options = {**self._form_data.industry_options, question_id: bool(answer)}
        return self.set_form_data(industry_options=options)

    def toggle_service(self, service_id: str) -> CalculatorResult:
        selected = set(self._form_data.selected_services)
        selected ^= {service_id}
        return self.set_form_data(selected_services=frozenset(selected))

    def apply_config(self, config: ConfigSnapshot) -> CalculatorResult:
        """
        Adopt a newly published configuration.  Fields for new variables are
        added with defaults; existing values are kept as they are.  The
        industry answers follow the current industry's questions: answers to
        removed questions are dropped, new questions start as "no".
        """
        self._config = config
        form_data = self._with_variable_fields(self._form_data, config)
        self._form_data = self._with_current_questions(form_data, config)
        logger.debug(f"Session adopted configuration v{config.version}")
        self._recompute()
        return self.result

    # ── Store wiring ─────────────────────────────────────

    def attach(self, store: ConfigurationStore) -> None:
        self.detach()
        self._unsubscribe = store.subscribe(self.apply_config)
        if store.snapshot != self._config:
            self.apply_config(store.snapshot)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ── Debounced inputs ─────────────────────────────────

    def bind_field(
        self,
        name: str,
        *,
        parse: Callable[[str], Any] = parse_number,
        validate: Optional[Callable[[Any], bool]] = None,
        scheduler: Optional[Scheduler] = None,
        delay_ms: Optional[float] = None,
    ) -> DebouncedFieldController:
        """A debounced input that commits into this session's ``name`` field."""
        if name in self._fields:
            self._fields[name].dispose()

        controller = DebouncedFieldController(
            self._form_data.value_of(name),
            lambda value: self.set_form_data({name: value}),
            parse=parse,
            validate=validate,
            delay_ms=delay_ms,
            scheduler=scheduler,
            name=name,
        )
        self._fields[name] = controller
        return controller

    def unbind_field(self, name: str) -> None:
        controller = self._fields.pop(name, None)
        if controller is not None:
            controller.dispose()

    def dispose(self) -> None:
        self.detach()
        for controller in self._fields.values():
            controller.dispose()
        self._fields.clear()

    # ── Internals ────────────────────────────────────────

    @staticmethod
    def _with_variable_fields(
        form_data: CalculatorFormData, config: ConfigSnapshot
    ) -> CalculatorFormData:
        missing = {
            v.tag: v.default_value()
            for v in config.variables
            if v.tag and not form_data.has_field(v.tag)
        }
        if not missing:
            return form_data
        logger.debug(f"Adding variable fields: {sorted(missing)}")
        return CalculatorFormData.model_validate({**dict(form_data), **missing})

    @staticmethod
    def _with_current_questions(
        form_data: CalculatorFormData, config: ConfigSnapshot
    ) -> CalculatorFormData:
        answers = form_data.industry_options
        options = {
            question_id: answers.get(question_id, False)
            for question_id in blank_industry_options(config, form_data.industry)
        }
        if options == answers:
            return form_data
        logger.debug(f"Industry questions changed for {form_data.industry}: {sorted(options)}")
        return CalculatorFormData.model_validate(
            {**dict(form_data), "industry_options": options}
        )

    def _recompute(self) -> None:
        validation = self._validator.validate_form(self._form_data)
        if not validation.is_valid:
            self._error = validation.errors
            self._total = 0
            logger.debug(f"Form invalid: {validation.errors}")
            return

        self._error = None
        self._total = compute_total(
            self._form_data,
            self._config.pricing,
            self._config.variables,
            self._config.industries,
        )
        logger.debug(f"Recomputed total={self._total} (config v{self._config.version})")

    def _sync_fields(self, changes: Mapping[str, Any]) -> None:
        for name in changes:
            controller = self._fields.get(name)
            if controller is not None:
                controller.sync(self._form_data.value_of(name))
