"""Worker-context lifecycle and message relay for the in-flight item."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from job_autopilot.engine.events import (
    CatalogClosed,
    CatalogRuntimeError,
    ContextClosed,
    Event,
    ExtractionReceived,
    ItemRuntimeError,
    SubmissionReceived,
)
from job_autopilot.models import (
    Described,
    ExtractionOutcome,
    Failed,
    Item,
    Skipped,
    SubmissionFailed,
    SubmissionOutcome,
    Submitted,
)
from job_autopilot.workers.base import ContextProvider, TaskMessage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Binding:
    run_no: int
    ticket: int
    item: Item
    handle: str | None = None


class WorkerContextManager:
    """Opens one context per in-flight item and turns provider callbacks into events.

    Every handle is remembered together with the run number and dispatch
    ticket it was opened for, so replies from contexts left open for
    inspection are still tagged with their own (stale) ticket.
    """

    def __init__(self, provider: ContextProvider) -> None:
        self._provider = provider
        self._sink: Callable[[Event], None] | None = None
        self._active: _Binding | None = None
        self._bindings: dict[str, _Binding] = {}
        self._catalog_ref: str | None = None
        self._catalog_run_no = 0
        provider.bind(self)

    def attach(self, sink: Callable[[Event], None]) -> None:
        """Route translated events to ``sink``."""

        self._sink = sink

    @property
    def active_handle(self) -> str | None:
        return self._active.handle if self._active is not None else None

    @property
    def has_active(self) -> bool:
        return self._active is not None

    def watch_catalog(self, context_ref: str, *, run_no: int) -> None:
        self._catalog_ref = context_ref
        self._catalog_run_no = run_no

    def unwatch_catalog(self) -> None:
        self._catalog_ref = None

    async def open(self, item: Item, *, run_no: int, ticket: int) -> str:
        if self._active is not None:
            raise RuntimeError(
                f"Worker context already active for {self._active.item.url}; "
                "release it before opening another.",
            )
        binding = _Binding(run_no=run_no, ticket=ticket, item=item)
        self._active = binding
        try:
            handle = await self._provider.open(item)
        except BaseException:
            if self._active is binding:
                self._active = None
            raise
        binding.handle = handle
        self._bindings[handle] = binding
        if self._active is not binding:
            logger.info("Context %s for %s opened after its item was abandoned", handle, item.url)
        return handle

    async def relay(self, handle: str, message: TaskMessage) -> None:
        await self._provider.send(handle, message)

    async def close(self, handle: str) -> None:
        self._bindings.pop(handle, None)
        if self._active is not None and self._active.handle == handle:
            self._active = None
        await self._provider.close(handle)

    def release(self) -> None:
        """Free the active slot; the context itself is left as it is."""

        if self._active is not None:
            logger.debug(
                "Released active context %s for %s",
                self._active.handle,
                self._active.item.url,
            )
        self._active = None

    def reply_received(self, handle: str, reply: ExtractionOutcome | SubmissionOutcome) -> None:
        binding = self._bindings.get(handle)
        if binding is None:
            logger.debug("Reply from unknown context %s ignored", handle)
            return
        if isinstance(reply, Described | Skipped | Failed):
            self._emit(ExtractionReceived(run_no=binding.run_no, ticket=binding.ticket, outcome=reply))
        elif isinstance(reply, Submitted | SubmissionFailed):
            self._emit(SubmissionReceived(run_no=binding.run_no, ticket=binding.ticket, outcome=reply))
        else:
            logger.warning("Unsupported reply %r from context %s", reply, handle)

    def context_closed(self, handle: str) -> None:
        if handle == self._catalog_ref:
            self._emit(CatalogClosed(run_no=self._catalog_run_no))
            return
        binding = self._bindings.pop(handle, None)
        if binding is None:
            return
        if self._active is binding:
            self._active = None
        self._emit(ContextClosed(run_no=binding.run_no, ticket=binding.ticket))

    def runtime_error(self, handle: str, location: str, message: str) -> None:
        if handle == self._catalog_ref:
            self._emit(
                CatalogRuntimeError(
                    run_no=self._catalog_run_no,
                    location=location,
                    message=message,
                ),
            )
            return
        binding = self._bindings.get(handle)
        if binding is None:
            logger.debug("Runtime error from unknown context %s ignored: %s", handle, message)
            return
        self._emit(
            ItemRuntimeError(
                run_no=binding.run_no,
                ticket=binding.ticket,
                location=location,
                message=message,
            ),
        )

    def _emit(self, event: Event) -> None:
        if self._sink is None:
            logger.debug("No sink attached; dropping %s", type(event).__name__)
            return
        self._sink(event)
