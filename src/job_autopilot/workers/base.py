"""Ports for the catalog producer and the worker-context provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from job_autopilot.models import Discovery, ExtractionOutcome, Item, SubmissionOutcome


class ContextOpenError(RuntimeError):
    """The provider could not open a ready worker context."""

    def __init__(self, message: str, *, item_url: str) -> None:
        super().__init__(message)
        self.item_url = item_url


class RelayError(RuntimeError):
    """The provider rejected a message for a worker context."""

    def __init__(self, message: str, *, handle: str) -> None:
        super().__init__(message)
        self.handle = handle


@dataclass(frozen=True, slots=True)
class ExtractTask:
    """Ask the in-context runner to extract the item description."""

    item: Item


@dataclass(frozen=True, slots=True)
class SubmitTask:
    """Ask the in-context runner to fill and submit the generated text."""

    item: Item
    generated_text: str


TaskMessage = ExtractTask | SubmitTask


class ContextListener(Protocol):
    """Sink for everything a provider reports spontaneously."""

    def reply_received(self, handle: str, reply: ExtractionOutcome | SubmissionOutcome) -> None:
        """In-context runner answered the last task sent to ``handle``."""

    def context_closed(self, handle: str) -> None:
        """A context disappeared out-of-band."""

    def runtime_error(self, handle: str, location: str, message: str) -> None:
        """In-context runner reported an error."""


class ContextProvider(Protocol):
    """Creates, messages and destroys isolated worker contexts."""

    def bind(self, listener: ContextListener) -> None:
        """Register the listener for replies, closures and runtime errors."""

    async def open(self, item: Item) -> str:
        """Open a context for ``item`` and return its handle once the runner is ready."""

    async def send(self, handle: str, message: TaskMessage) -> None:
        """Deliver ``message``; raise :class:`RelayError` if it is rejected."""

    async def close(self, handle: str) -> None:
        """Destroy the context."""


class CatalogProducer(Protocol):
    """Paginated source of items living in its own context."""

    async def scan(self, context_ref: str) -> Discovery:
        """Report the items on the current page."""

    async def advance_page(self, context_ref: str) -> Discovery | None:
        """Move to the next page and scan it, or return ``None`` when there is none."""
