"""Inbound events consumed by the orchestrator pump.

Every event carries the run number it was produced for; item-scoped events
also carry the dispatch ticket of the item they belong to. The orchestrator
drops anything whose run or ticket no longer matches.
"""

from __future__ import annotations

from dataclasses import dataclass

from job_autopilot.models import Discovery, ExtractionOutcome, SubmissionOutcome


@dataclass(frozen=True, slots=True)
class Event:
    run_no: int


@dataclass(frozen=True, slots=True)
class ItemEvent(Event):
    ticket: int


@dataclass(frozen=True, slots=True)
class DiscoveryReceived(Event):
    discovery: Discovery


@dataclass(frozen=True, slots=True)
class PageFinished(Event):
    has_more: bool


@dataclass(frozen=True, slots=True)
class NoMorePages(Event):
    pass


@dataclass(frozen=True, slots=True)
class CatalogFailed(Event):
    step_name: str
    reason: str


@dataclass(frozen=True, slots=True)
class CatalogClosed(Event):
    pass


@dataclass(frozen=True, slots=True)
class CatalogRuntimeError(Event):
    location: str
    message: str


@dataclass(frozen=True, slots=True)
class ContextOpened(ItemEvent):
    handle: str


@dataclass(frozen=True, slots=True)
class ContextOpenFailed(ItemEvent):
    reason: str


@dataclass(frozen=True, slots=True)
class ExtractionReceived(ItemEvent):
    outcome: ExtractionOutcome


@dataclass(frozen=True, slots=True)
class GenerationFinished(ItemEvent):
    text: str | None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RelayAcked(ItemEvent):
    step_name: str


@dataclass(frozen=True, slots=True)
class RelayFailed(ItemEvent):
    step_name: str
    reason: str


@dataclass(frozen=True, slots=True)
class SubmissionReceived(ItemEvent):
    outcome: SubmissionOutcome


@dataclass(frozen=True, slots=True)
class ContextClosed(ItemEvent):
    pass


@dataclass(frozen=True, slots=True)
class ItemRuntimeError(ItemEvent):
    location: str
    message: str


@dataclass(frozen=True, slots=True)
class WatchdogFired(Event):
    subject_id: str
    step_name: str
    deadline_no: int = 0
