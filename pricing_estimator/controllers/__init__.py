from pricing_estimator.controllers.timers import (
    AsyncioScheduler,
    Debouncer,
    ManualScheduler,
    Scheduler,
)
from pricing_estimator.controllers.debounced_field import DebouncedFieldController

__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "DebouncedFieldController",
    "ManualScheduler",
    "Scheduler",
]
