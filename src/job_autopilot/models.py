"""Domain models shared by the engine, workers and storage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunPhase(str, Enum):
    """Orchestrator state machine phases."""

    IDLE = "idle"
    SCANNING_CATALOG = "scanning_catalog"
    AWAITING_DISCOVERY = "awaiting_discovery"
    QUEUE_DRAINING = "queue_draining"
    ITEM_OPENING = "item_opening"
    ITEM_EXTRACTING = "item_extracting"
    ITEM_GENERATING = "item_generating"
    ITEM_SUBMITTING = "item_submitting"
    ITEM_AWAITING_RESULT = "item_awaiting_result"
    STOPPED = "stopped"

    @property
    def is_item_step(self) -> bool:
        return self.value.startswith("item_")


class CounterKind(str, Enum):
    """Terminal outcome buckets for an item."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    ERRORED = "errored"


class StopReason(str, Enum):
    """Why a run ended."""

    USER_REQUEST = "user_request"
    EXHAUSTED = "exhausted"
    TIMEOUT = "timeout"
    CLOSED_EXTERNALLY = "closed_externally"
    CATALOG_ERROR = "catalog_error"
    ITEM_CONTEXT_KEPT = "item_context_kept"
    INTERNAL_ERROR = "internal_error"

    @property
    def preserves_context(self) -> bool:
        """Keep the current item visible for inspection after stopping."""

        return self is StopReason.ITEM_CONTEXT_KEPT


@dataclass(frozen=True, slots=True)
class Item:
    """One discovered unit of work; the URL doubles as its identifier."""

    url: str
    title: str = ""
    description: str = ""

    @property
    def item_id(self) -> str:
        return self.url

    @property
    def label(self) -> str:
        return self.title or self.url


@dataclass(frozen=True, slots=True)
class Discovery:
    """One page worth of catalog results."""

    items: tuple[Item, ...]
    has_more: bool


@dataclass(frozen=True, slots=True)
class Counters:
    """Immutable counter snapshot."""

    completed: int = 0
    skipped: int = 0
    errored: int = 0

    @property
    def skipped_plus_errored(self) -> int:
        return self.skipped + self.errored

    @property
    def total(self) -> int:
        return self.completed + self.skipped + self.errored


@dataclass(frozen=True, slots=True)
class Credentials:
    """API credential and profile text used for one run."""

    api_key: str
    profile_text: str

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key.strip()) and bool(self.profile_text.strip())


@dataclass(frozen=True, slots=True)
class Described:
    """Extraction produced a description to generate from."""

    text: str


@dataclass(frozen=True, slots=True)
class Skipped:
    """The item is explicitly handled elsewhere (for example an external form)."""

    reason: str


@dataclass(frozen=True, slots=True)
class Failed:
    """Extraction could not complete."""

    reason: str


ExtractionOutcome = Described | Skipped | Failed


@dataclass(frozen=True, slots=True)
class Submitted:
    """Submission confirmed by the in-context runner."""


@dataclass(frozen=True, slots=True)
class SubmissionFailed:
    """Submission rejected or aborted inside the worker context."""

    reason: str


SubmissionOutcome = Submitted | SubmissionFailed
