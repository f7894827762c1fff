"""Running outcome counters with a persistence hook."""

from __future__ import annotations

import logging
from collections.abc import Callable

from job_autopilot.models import CounterKind, Counters

logger = logging.getLogger(__name__)


class CounterState:
    """Completed / skipped / errored totals owned by the orchestrator."""

    def __init__(
        self,
        *,
        persist: Callable[[Counters], None] | None = None,
        initial: Counters | None = None,
    ) -> None:
        self._persist = persist
        start = initial or Counters()
        self._values = {
            CounterKind.COMPLETED: start.completed,
            CounterKind.SKIPPED: start.skipped,
            CounterKind.ERRORED: start.errored,
        }

    def increment(self, kind: CounterKind) -> Counters:
        self._values[kind] += 1
        snapshot = self.snapshot()
        self._save(snapshot)
        return snapshot

    def snapshot(self) -> Counters:
        return Counters(
            completed=self._values[CounterKind.COMPLETED],
            skipped=self._values[CounterKind.SKIPPED],
            errored=self._values[CounterKind.ERRORED],
        )

    def reset(self, initial: Counters | None = None) -> None:
        """Reset totals, typically right after settings are loaded."""

        start = initial or Counters()
        self._values[CounterKind.COMPLETED] = start.completed
        self._values[CounterKind.SKIPPED] = start.skipped
        self._values[CounterKind.ERRORED] = start.errored

    def _save(self, snapshot: Counters) -> None:
        if self._persist is None:
            return
        try:
            self._persist(snapshot)
        except Exception:  # noqa: BLE001
            logger.warning("Failed to persist counters %s", snapshot, exc_info=True)
