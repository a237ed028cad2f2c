"""
Debounced field controller — one per editable input.

The displayed text follows every keystroke immediately; the parsed value
reaches the owning model only after the field has been quiet for the
debounce window:

    IDLE ──handle_input──▶ PENDING_COMMIT ──(quiet period)──▶ IDLE
                 ▲                 │
                 └─handle_input────┘  (timer cancelled and restarted)

On expiry the raw text is parsed, then validated; a failure at either step
drops the edit (logged at DEBUG) and the model keeps its last good value.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from pricing_estimator.config import get_settings
from pricing_estimator.controllers.timers import Debouncer, Scheduler
from pricing_estimator.models.enums import FieldState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _default_format(value: Any) -> str:
    return "" if value is None else str(value)


class DebouncedFieldController(Generic[T]):
    """Buffers keystrokes for one field and commits the last one."""

    def __init__(
        self,
        value: T,
        on_commit: Callable[[T], None],
        *,
        parse: Optional[Callable[[str], T]] = None,
        validate: Optional[Callable[[T], bool]] = None,
        format: Optional[Callable[[T], str]] = None,
        delay_ms: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        name: str = "field",
    ) -> None:
        self.name = name
        self._on_commit = on_commit
        self._parse = parse or (lambda text: text)
        self._validate = validate
        self._format = format or _default_format
        if delay_ms is None:
            delay_ms = get_settings().field_debounce_ms

        self._value = value
        self._text = self._format(value)
        self._state = FieldState.IDLE
        self._debouncer = Debouncer(
            self._commit, delay_ms, scheduler, name=f"field:{name}"
        )

    # ── Read side ────────────────────────────────────────

    @property
    def text(self) -> str:
        """What the input shows right now."""
        return self._text

    @property
    def value(self) -> T:
        """Last value committed to (or synced from) the model."""
        return self._value

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state == FieldState.PENDING_COMMIT

    # ── Events ───────────────────────────────────────────

    def handle_input(self, raw_text: str) -> None:
        """A keystroke: echo locally, restart the quiet period."""
        if self._state == FieldState.DISPOSED:
            logger.debug(f"[{self.name}] input after dispose ignored")
            return
        self._debouncer.trigger(raw_text)
        self._text = raw_text
        self._state = FieldState.PENDING_COMMIT

    def sync(self, value: T) -> None:
        """The model changed from elsewhere.  Never overwrites in-flight typing."""
        self._value = value
        if self._state == FieldState.IDLE:
            self._text = self._format(value)

    def flush(self) -> bool:
        """Commit a pending edit now (e.g. on blur)."""
        if self._state != FieldState.PENDING_COMMIT:
            return False
        return self._debouncer.flush()

    def dispose(self) -> None:
        self._debouncer.cancel()
        self._state = FieldState.DISPOSED

    # ── Commit ───────────────────────────────────────────

    def _commit(self, raw_text: str) -> None:
        self._state = FieldState.IDLE

        try:
            parsed = self._parse(raw_text)
        except Exception as e:
            logger.debug(f"[{self.name}] parse error for {raw_text!r}: {e}")
            return

        try:
            accepted = self._validate is None or self._validate(parsed)
        except Exception as e:
            logger.debug(f"[{self.name}] validator raised for {parsed!r}: {e}")
            return
        if not accepted:
            logger.debug(f"[{self.name}] rejected {parsed!r}")
            return

        self._value = parsed
        self._on_commit(parsed)
