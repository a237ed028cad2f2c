"""
Configuration Store — owns the published pricing configuration.

Company-level setting: configured by an operator through the SettingsEditor
and handed to calculator sessions as immutable, versioned snapshots.
Starts from the seeded defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Callable, Optional

from pricing_estimator.defaults import DEFAULT_INDUSTRIES, DEFAULT_PRICING, DEFAULT_VARIABLES
from pricing_estimator.models.schemas import (
    ConfigSnapshot,
    IndustryConfig,
    PricingConfig,
    PricingVariable,
)

logger = logging.getLogger(__name__)

Listener = Callable[[ConfigSnapshot], None]


class ConfigurationStore:
    """
    Holds the current ConfigSnapshot and notifies subscribers on change.
    A publish that is structurally equal to the current snapshot is a no-op.
    """

    def __init__(
        self,
        pricing: Optional[PricingConfig] = None,
        industries: Optional[Mapping[str, IndustryConfig]] = None,
        variables: Optional[Iterable[PricingVariable]] = None,
    ):
        self._snapshot = ConfigSnapshot(
            version=1,
            pricing=DEFAULT_PRICING if pricing is None else pricing,
            industries=dict(DEFAULT_INDUSTRIES if industries is None else industries),
            variables=tuple(DEFAULT_VARIABLES if variables is None else variables),
        )
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> ConfigSnapshot:
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    # ── Subscribers ──────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Publishing ───────────────────────────────────────

    def publish(
        self,
        pricing: Optional[PricingConfig] = None,
        industries: Optional[Mapping[str, IndustryConfig]] = None,
        variables: Optional[Iterable[PricingVariable]] = None,
    ) -> bool:
        """
        Replace any of the three sections.  Returns False (and notifies
        nobody) when nothing actually changed.
        """
        current = self._snapshot
        candidate = ConfigSnapshot(
            version=current.version,
            pricing=current.pricing if pricing is None else pricing,
            industries=current.industries if industries is None else dict(industries),
            variables=current.variables if variables is None else tuple(variables),
        )
        if candidate == current:
            logger.debug("Publish skipped — configuration unchanged")
            return False

        self._snapshot = candidate.model_copy(update={"version": current.version + 1})
        changed = [
            name
            for name in ("pricing", "industries", "variables")
            if getattr(candidate, name) != getattr(current, name)
        ]
        logger.info(f"Published configuration v{self._snapshot.version} ({', '.join(changed)})")

        for listener in list(self._listeners):
            listener(self._snapshot)
        return True
