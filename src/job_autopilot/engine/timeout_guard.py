"""Single-slot step watchdog."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_STEP_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class StepDeadline:
    """The one outstanding deadline."""

    subject_id: str
    step_name: str
    fires_at: float


class TimeoutGuard:
    """Arms at most one timer at a time and reports expiry through a fixed callback.

    The guard knows nothing about the state machine: on expiry it calls
    ``on_fire(subject_id, step_name)`` and forgets the deadline.
    """

    def __init__(
        self,
        on_fire: Callable[[str, str], None],
        *,
        duration_seconds: float = DEFAULT_STEP_TIMEOUT_SECONDS,
    ) -> None:
        self._on_fire = on_fire
        self.duration_seconds = duration_seconds
        self._handle: asyncio.TimerHandle | None = None
        self._deadline: StepDeadline | None = None

    @property
    def deadline(self) -> StepDeadline | None:
        return self._deadline

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self, subject_id: str, step_name: str, duration_seconds: float | None = None) -> None:
        """Replace any outstanding deadline with a new one for ``step_name``."""

        self.disarm()
        loop = asyncio.get_running_loop()
        duration = self.duration_seconds if duration_seconds is None else duration_seconds
        self._deadline = StepDeadline(
            subject_id=subject_id,
            step_name=step_name,
            fires_at=loop.time() + duration,
        )
        self._handle = loop.call_later(duration, self._fire, self._deadline)

    def disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._deadline = None

    def _fire(self, deadline: StepDeadline) -> None:
        if deadline is not self._deadline:
            return
        self._handle = None
        self._deadline = None
        logger.warning(
            "Step deadline elapsed for %s at step %s",
            deadline.subject_id,
            deadline.step_name,
        )
        self._on_fire(deadline.subject_id, deadline.step_name)
