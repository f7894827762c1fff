"""Observer channel for live progress."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from job_autopilot.models import Counters, Item, RunPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    """One status event.

    ``skipped`` is the combined skipped-plus-errored figure shown to users.
    """

    completed: int
    skipped: int
    message: str | None = None
    error: str | None = None
    done: bool = False

    @classmethod
    def from_counters(
        cls,
        counters: Counters,
        *,
        message: str | None = None,
        error: str | None = None,
        done: bool = False,
    ) -> StatusUpdate:
        return cls(
            completed=counters.completed,
            skipped=counters.skipped_plus_errored,
            message=message,
            error=error,
            done=done,
        )


@dataclass(frozen=True, slots=True)
class RunStatus:
    """Point-in-time view of the orchestrator for polling shells."""

    running: bool
    phase: RunPhase
    current_item: Item | None
    queue_size: int
    counters: Counters


class StatusObserver(Protocol):
    """Receives status events. Delivery is best-effort."""

    def publish(self, update: StatusUpdate) -> None:
        """Deliver one status update."""

    def request_configuration(self) -> None:
        """Ask the user to provide missing credentials or profile."""


class LoggingObserver:
    """Default observer that writes every update to the log."""

    def __init__(self) -> None:
        self.configuration_requested = False

    def publish(self, update: StatusUpdate) -> None:
        if update.error:
            logger.error(
                "%s - %s (completed=%d skipped=%d)",
                update.error,
                update.message or "",
                update.completed,
                update.skipped,
            )
        elif update.message:
            logger.info(
                "%s (completed=%d skipped=%d)",
                update.message,
                update.completed,
                update.skipped,
            )
        if update.done:
            logger.info("Run finished: completed=%d skipped=%d", update.completed, update.skipped)

    def request_configuration(self) -> None:
        self.configuration_requested = True
        logger.warning("API key or profile missing; configure them before starting a run.")
