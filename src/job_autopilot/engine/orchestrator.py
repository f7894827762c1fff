"""Single-item-at-a-time pipeline state machine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, TypeVar

from job_autopilot.engine.counters import CounterState
from job_autopilot.engine.events import (
    CatalogClosed,
    CatalogFailed,
    CatalogRuntimeError,
    ContextClosed,
    ContextOpened,
    ContextOpenFailed,
    DiscoveryReceived,
    Event,
    ExtractionReceived,
    GenerationFinished,
    ItemEvent,
    ItemRuntimeError,
    NoMorePages,
    PageFinished,
    RelayAcked,
    RelayFailed,
    SubmissionReceived,
    WatchdogFired,
)
from job_autopilot.engine.item_queue import ItemQueue
from job_autopilot.engine.status import LoggingObserver, RunStatus, StatusObserver, StatusUpdate
from job_autopilot.engine.timeout_guard import DEFAULT_STEP_TIMEOUT_SECONDS, TimeoutGuard
from job_autopilot.generation.client import GenerationServiceError, TextGenerator
from job_autopilot.models import (
    CounterKind,
    Counters,
    Credentials,
    Described,
    Discovery,
    Failed,
    Item,
    RunPhase,
    Skipped,
    StopReason,
    Submitted,
)
from job_autopilot.storage.settings_store import SettingsStore
from job_autopilot.workers.base import CatalogProducer, ExtractTask, SubmitTask, TaskMessage
from job_autopilot.workers.manager import WorkerContextManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

STEP_SCAN_CATALOG = "scan_catalog"
STEP_ADVANCE_PAGE = "advance_page"
STEP_OPEN_CONTEXT = "open_context"
STEP_EXTRACT = "extract"
STEP_GENERATE = "generate"
STEP_SUBMIT = "submit"
STEP_AWAIT_RESULT = "await_result"


class ConfigMissingError(RuntimeError):
    """API key or profile text is not configured."""


class AlreadyRunningError(RuntimeError):
    """A run is already in progress."""


@dataclass(slots=True)
class RunState:
    """The one mutable run record, owned by the orchestrator."""

    running: bool = False
    phase: RunPhase = RunPhase.IDLE
    run_no: int = 0
    catalog_ref: str | None = None
    credentials: Credentials | None = None
    current_item: Item | None = None
    current_handle: str | None = None
    ticket: int = 0
    has_more: bool = False
    deadline_no: int = 0
    queue: ItemQueue = field(default_factory=ItemQueue)


class Orchestrator:
    """Drives catalog discovery and the per-item pipeline.

    All transitions run on the event loop through one inbox, one event at a
    time; handlers never await. Calls to collaborators are spawned as tasks
    whose completion is posted back to the inbox tagged with the run number
    and the item's dispatch ticket, so anything that completes after the
    orchestrator has moved on is dropped instead of counted twice.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        store: SettingsStore,
        catalog: CatalogProducer,
        contexts: WorkerContextManager,
        generator: TextGenerator,
        observer: StatusObserver | None = None,
        step_timeout_seconds: float = DEFAULT_STEP_TIMEOUT_SECONDS,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._contexts = contexts
        self._generator = generator
        self._observer: StatusObserver = observer or LoggingObserver()
        self._state = RunState()
        self._counters = CounterState(persist=self._persist_counters)
        self._guard = TimeoutGuard(self._on_deadline, duration_seconds=step_timeout_seconds)
        self._inbox: asyncio.Queue[Event] = asyncio.Queue()
        self._stopped = asyncio.Event()
        self._pump_task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._writes: set[asyncio.Future[None]] = set()
        self._writer: ThreadPoolExecutor | None = None
        self._handlers: dict[type[Event], Callable[[RunState, Any], None]] = {
            DiscoveryReceived: self._on_discovery,
            PageFinished: self._on_page_finished,
            NoMorePages: self._on_no_more_pages,
            CatalogFailed: self._on_catalog_failed,
            CatalogClosed: self._on_catalog_closed,
            CatalogRuntimeError: self._on_catalog_runtime_error,
            ContextOpened: self._on_context_opened,
            ContextOpenFailed: self._on_context_open_failed,
            ExtractionReceived: self._on_extraction,
            GenerationFinished: self._on_generation,
            RelayAcked: self._on_relay_acked,
            RelayFailed: self._on_relay_failed,
            SubmissionReceived: self._on_submission,
            ContextClosed: self._on_context_closed,
            ItemRuntimeError: self._on_item_runtime_error,
            WatchdogFired: self._on_watchdog,
        }
        contexts.attach(self.post)

    # -- public surface -------------------------------------------------

    @property
    def counters(self) -> Counters:
        return self._counters.snapshot()

    @property
    def step_timeout_seconds(self) -> float:
        return self._guard.duration_seconds

    def status(self) -> RunStatus:
        state = self._state
        return RunStatus(
            running=state.running,
            phase=state.phase,
            current_item=state.current_item,
            queue_size=state.queue.size(),
            counters=self._counters.snapshot(),
        )

    async def recover(self) -> bool:
        """Clear a running flag left behind by a process that died mid-run."""

        stored = self._store.load()
        self._counters.reset(stored.counters)
        if not stored.running or self._state.running:
            return False
        logger.warning("Settings say a run was active before restart; marking it stopped.")
        self._save(running=False)
        await self.flush()
        self._publish(
            "Automation was active before restart; it has been stopped. Please restart.",
        )
        return True

    def start(self, context_ref: str) -> None:
        """Begin a run against the catalog living in ``context_ref``."""

        state = self._state
        if state.phase not in {RunPhase.IDLE, RunPhase.STOPPED}:
            self._publish("Automation is already running.")
            raise AlreadyRunningError("Automation is already running.")

        credentials = self._load_credentials()
        if not credentials.is_complete:
            self._publish(
                "API key or user profile not set. Please configure them.",
                error="Configuration Missing",
            )
            self._request_configuration()
            raise ConfigMissingError("API key or user profile not set.")

        self._ensure_pump()
        if state.current_item is not None:
            self._contexts.release()
        state.run_no += 1
        state.running = True
        state.catalog_ref = context_ref
        state.credentials = credentials
        state.current_item = None
        state.current_handle = None
        state.has_more = False
        state.queue.clear()
        self._stopped.clear()
        self._contexts.watch_catalog(context_ref, run_no=state.run_no)
        self._save(running=True)
        logger.info("Run %d started on catalog %s", state.run_no, context_ref)
        self._publish("Automation started. Scanning catalog...")
        self._scan(state)

    def stop(self, reason: StopReason = StopReason.USER_REQUEST) -> RunStatus:
        """End the run. Safe to call repeatedly and from any phase."""

        state = self._state
        if not state.running:
            return self.status()

        logger.info("Stopping run %d: %s", state.run_no, reason.value)
        self._disarm(state)
        state.running = False
        state.phase = RunPhase.STOPPED
        if not reason.preserves_context:
            if state.current_item is not None:
                logger.warning("Run stopped while %s was in flight", state.current_item.url)
                self._counters.increment(CounterKind.ERRORED)
                self._contexts.release()
            state.current_item = None
            state.current_handle = None
        state.queue.clear()
        self._contexts.unwatch_catalog()
        message = (
            "Automation stopped by user."
            if reason is StopReason.USER_REQUEST
            else f"Automation stopped: {reason.value}"
        )
        self._publish(message, done=True)
        self._save(running=False)
        self._stopped.set()
        return self.status()

    def page_finished(self, *, has_more: bool) -> None:
        """Catalog reports every item on its page has been handed out."""

        self.post(PageFinished(run_no=self._state.run_no, has_more=has_more))

    def post(self, event: Event) -> None:
        self._inbox.put_nowait(event)

    async def wait_stopped(self) -> RunStatus:
        """Wait for the terminal state and for its settings writes to land."""

        await self._stopped.wait()
        await self.flush()
        return self.status()

    async def flush(self) -> None:
        """Wait until every queued settings write has been applied."""

        while self._writes:
            await asyncio.gather(*list(self._writes), return_exceptions=True)

    async def run(self, context_ref: str) -> RunStatus:
        """Start a run and wait until it reaches its terminal state."""

        self.start(context_ref)
        return await self.wait_stopped()

    async def aclose(self) -> None:
        """Cancel collaborator calls and the event pump, then drain settings writes."""

        self.stop()
        pending = list(self._tasks)
        if self._pump_task is not None:
            pending.append(self._pump_task)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._pump_task = None
        await self.flush()
        if self._writer is not None:
            self._writer.shutdown(wait=True)
            self._writer = None

    # -- event pump -----------------------------------------------------

    def _ensure_pump(self) -> None:
        if self._pump_task is None or self._pump_task.done():
            self._pump_task = asyncio.get_running_loop().create_task(
                self._pump(),
                name="orchestrator-pump",
            )

    async def _pump(self) -> None:
        while True:
            event = await self._inbox.get()
            try:
                self._dispatch(event)
            except Exception:
                logger.exception("Unhandled error while processing %s", type(event).__name__)
                self.stop(StopReason.INTERNAL_ERROR)

    def _dispatch(self, event: Event) -> None:
        state = self._state
        if not state.running or event.run_no != state.run_no:
            logger.debug("Ignoring %s for inactive run %d", type(event).__name__, event.run_no)
            return
        if isinstance(event, ItemEvent) and (
            state.current_item is None or event.ticket != state.ticket
        ):
            logger.debug("Ignoring stale %s for ticket %d", type(event).__name__, event.ticket)
            return
        self._handlers[type(event)](state, event)

    def _spawn(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # -- catalog --------------------------------------------------------

    def _scan(self, state: RunState) -> None:
        catalog_ref = _require(state.catalog_ref)
        state.phase = RunPhase.SCANNING_CATALOG
        self._arm(state, catalog_ref, STEP_SCAN_CATALOG)
        self._spawn(
            self._call_catalog(state.run_no, STEP_SCAN_CATALOG, self._catalog.scan(catalog_ref)),
            name=f"catalog-{STEP_SCAN_CATALOG}",
        )

    def _advance(self, state: RunState) -> None:
        catalog_ref = _require(state.catalog_ref)
        state.phase = RunPhase.AWAITING_DISCOVERY
        self._arm(state, catalog_ref, STEP_ADVANCE_PAGE)
        self._spawn(
            self._call_catalog(
                state.run_no,
                STEP_ADVANCE_PAGE,
                self._catalog.advance_page(catalog_ref),
            ),
            name=f"catalog-{STEP_ADVANCE_PAGE}",
        )

    async def _call_catalog(
        self,
        run_no: int,
        step_name: str,
        call: Awaitable[Discovery | None],
    ) -> None:
        try:
            discovery = await call
        except Exception as error:  # noqa: BLE001
            self.post(CatalogFailed(run_no=run_no, step_name=step_name, reason=_describe(error)))
            return
        if discovery is None:
            self.post(NoMorePages(run_no=run_no))
        else:
            self.post(DiscoveryReceived(run_no=run_no, discovery=discovery))

    def _on_discovery(self, state: RunState, event: DiscoveryReceived) -> None:
        discovery = event.discovery
        state.has_more = discovery.has_more
        total = state.queue.enqueue_all(discovery.items)
        if state.current_item is not None:
            return
        self._disarm(state)
        self._publish(f"Found {len(discovery.items)} items on page. Total in queue: {total}")
        self._drain(state)

    def _on_page_finished(self, state: RunState, event: PageFinished) -> None:
        state.has_more = event.has_more
        if state.current_item is not None or state.phase in {
            RunPhase.SCANNING_CATALOG,
            RunPhase.AWAITING_DISCOVERY,
        }:
            return
        self._disarm(state)
        self._drain(state)

    def _on_no_more_pages(self, state: RunState, event: NoMorePages) -> None:
        self._publish("Reached the last catalog page. Automation complete.")
        self.stop(StopReason.EXHAUSTED)

    def _on_catalog_failed(self, state: RunState, event: CatalogFailed) -> None:
        self._publish(
            f"Catalog step {event.step_name} failed: {event.reason}. Stopping.",
            error="Catalog Error",
        )
        self.stop(StopReason.CATALOG_ERROR)

    def _on_catalog_closed(self, state: RunState, event: CatalogClosed) -> None:
        self._publish("Catalog context closed. Stopping automation.", error="Catalog Closed")
        self.stop(StopReason.CLOSED_EXTERNALLY)

    def _on_catalog_runtime_error(self, state: RunState, event: CatalogRuntimeError) -> None:
        self._publish(
            f"Runtime error on {event.location}: {event.message}",
            error="Catalog Runtime Error",
        )
        self.stop(StopReason.CATALOG_ERROR)

    # -- item pipeline --------------------------------------------------

    def _drain(self, state: RunState) -> None:
        if not state.running:
            if not state.queue.is_empty():
                self._publish("Automation stopped, items remaining in queue.")
            return

        state.phase = RunPhase.QUEUE_DRAINING
        item = state.queue.dequeue_front()
        if item is None:
            state.phase = RunPhase.AWAITING_DISCOVERY
            if state.has_more:
                self._publish("Queue is empty. Moving to the next catalog page...")
                self._advance(state)
            else:
                self._publish("No items left and no more pages. Automation complete.")
                self.stop(StopReason.EXHAUSTED)
            return

        state.ticket += 1
        state.current_item = item
        state.current_handle = None
        state.phase = RunPhase.ITEM_OPENING
        logger.info("Processing %s (%d left in queue)", item.url, state.queue.size())
        self._publish(f"Opening item: {item.label}")
        self._arm(state, item.url, STEP_OPEN_CONTEXT)
        self._spawn(
            self._open_context(item, run_no=state.run_no, ticket=state.ticket),
            name=f"open-{state.ticket}",
        )

    async def _open_context(self, item: Item, *, run_no: int, ticket: int) -> None:
        try:
            handle = await self._contexts.open(item, run_no=run_no, ticket=ticket)
        except Exception as error:  # noqa: BLE001
            self.post(ContextOpenFailed(run_no=run_no, ticket=ticket, reason=_describe(error)))
            return
        self.post(ContextOpened(run_no=run_no, ticket=ticket, handle=handle))

    async def _relay(
        self,
        handle: str,
        message: TaskMessage,
        *,
        run_no: int,
        ticket: int,
        step_name: str,
    ) -> None:
        try:
            await self._contexts.relay(handle, message)
        except Exception as error:  # noqa: BLE001
            self.post(
                RelayFailed(
                    run_no=run_no,
                    ticket=ticket,
                    step_name=step_name,
                    reason=_describe(error),
                ),
            )
            return
        self.post(RelayAcked(run_no=run_no, ticket=ticket, step_name=step_name))

    async def _generate(self, description: str, credentials: Credentials, *, run_no: int, ticket: int) -> None:
        try:
            text = await self._generator.generate(
                credentials.profile_text,
                description,
                api_key=credentials.api_key,
            )
        except GenerationServiceError as error:
            reason = f"{_describe(error)} ({error.failure_class.value})"
            self.post(GenerationFinished(run_no=run_no, ticket=ticket, text=None, error=reason))
            return
        except Exception as error:  # noqa: BLE001
            self.post(GenerationFinished(run_no=run_no, ticket=ticket, text=None, error=_describe(error)))
            return
        self.post(GenerationFinished(run_no=run_no, ticket=ticket, text=text))

    def _on_context_opened(self, state: RunState, event: ContextOpened) -> None:
        if state.phase is not RunPhase.ITEM_OPENING:
            return
        item = _require(state.current_item)
        state.current_handle = event.handle
        state.phase = RunPhase.ITEM_EXTRACTING
        self._publish(f"Analyzing item: {item.label}")
        self._arm(state, item.url, STEP_EXTRACT)
        self._spawn(
            self._relay(
                event.handle,
                ExtractTask(item=item),
                run_no=state.run_no,
                ticket=state.ticket,
                step_name=STEP_EXTRACT,
            ),
            name=f"extract-{state.ticket}",
        )

    def _on_context_open_failed(self, state: RunState, event: ContextOpenFailed) -> None:
        item = _require(state.current_item)
        self._fail_item(
            state,
            f"Error opening context for {item.url}: {event.reason}. Skipping.",
            error="Context Open Error",
        )

    def _on_extraction(self, state: RunState, event: ExtractionReceived) -> None:
        if state.phase is not RunPhase.ITEM_EXTRACTING:
            logger.debug("Extraction result outside extraction step ignored")
            return
        item = _require(state.current_item)
        outcome = event.outcome
        if isinstance(outcome, Skipped):
            self._disarm(state)
            self._counters.increment(CounterKind.SKIPPED)
            self._publish(f"Skipping item: {item.url}. Reason: {outcome.reason}")
            self._finish_item(state)
        elif isinstance(outcome, Failed):
            self._fail_item(
                state,
                f"Skipping item: {item.url}. Reason: {outcome.reason}",
                error="Extraction Failed",
            )
        elif isinstance(outcome, Described) and outcome.text.strip():
            credentials = _require(state.credentials)
            state.phase = RunPhase.ITEM_GENERATING
            self._publish(f"Extracted description for {item.url}. Generating text...")
            self._arm(state, item.url, STEP_GENERATE)
            self._spawn(
                self._generate(outcome.text, credentials, run_no=state.run_no, ticket=state.ticket),
                name=f"generate-{state.ticket}",
            )
        else:
            self._fail_item(
                state,
                f"Skipping item: {item.url}. Reason: empty description",
                error="Extraction Failed",
            )

    def _on_generation(self, state: RunState, event: GenerationFinished) -> None:
        if state.phase is not RunPhase.ITEM_GENERATING:
            return
        item = _require(state.current_item)
        if event.text is None:
            self._fail_item(
                state,
                f"Failed to generate text for {item.url}: {event.error}. Skipping.",
                error="Generation Error",
            )
            return
        handle = _require(state.current_handle)
        state.phase = RunPhase.ITEM_SUBMITTING
        self._publish(f"Text generated. Submitting for {item.url}...")
        self._arm(state, item.url, STEP_SUBMIT)
        self._spawn(
            self._relay(
                handle,
                SubmitTask(item=item, generated_text=event.text),
                run_no=state.run_no,
                ticket=state.ticket,
                step_name=STEP_SUBMIT,
            ),
            name=f"submit-{state.ticket}",
        )

    def _on_relay_acked(self, state: RunState, event: RelayAcked) -> None:
        if event.step_name != STEP_SUBMIT or state.phase is not RunPhase.ITEM_SUBMITTING:
            return
        state.phase = RunPhase.ITEM_AWAITING_RESULT
        self._arm(state, _require(state.current_item).url, STEP_AWAIT_RESULT)

    def _on_relay_failed(self, state: RunState, event: RelayFailed) -> None:
        item = _require(state.current_item)
        self._fail_item(
            state,
            f"Error communicating with context for {item.url} ({event.step_name}): "
            f"{event.reason}. Skipping.",
            error="Relay Error",
        )

    def _on_submission(self, state: RunState, event: SubmissionReceived) -> None:
        if state.phase not in {RunPhase.ITEM_SUBMITTING, RunPhase.ITEM_AWAITING_RESULT}:
            return
        item = _require(state.current_item)
        if isinstance(event.outcome, Submitted):
            self._disarm(state)
            self._counters.increment(CounterKind.COMPLETED)
            self._publish(f"Successfully submitted: {item.url}")
            handle = state.current_handle
            if handle is not None:
                self._spawn(self._close_context(handle), name=f"close-{state.ticket}")
            self._finish_item(state)
            return
        self._fail_item(
            state,
            f"Error submitting {item.url}: {event.outcome.reason}. Context left open.",
            error="Submission Error",
        )

    def _on_context_closed(self, state: RunState, event: ContextClosed) -> None:
        item = _require(state.current_item)
        state.current_handle = None
        self._fail_item(
            state,
            f"Context for {item.url} closed externally. Skipping.",
            error="Context Closed",
        )

    def _on_item_runtime_error(self, state: RunState, event: ItemRuntimeError) -> None:
        item = _require(state.current_item)
        self._fail_item(
            state,
            f"Runtime error on {event.location} ({item.url}): {event.message}",
            error="Runtime Error",
        )

    def _on_watchdog(self, state: RunState, event: WatchdogFired) -> None:
        if event.deadline_no != state.deadline_no:
            return
        item = state.current_item
        if item is not None and state.phase.is_item_step and event.subject_id == item.url:
            self._fail_item(
                state,
                f"Timeout processing {item.url} (step: {event.step_name}). Skipping.",
                error="Step Timeout",
            )
            return
        if event.subject_id == state.catalog_ref:
            self._publish(
                f"Timeout on catalog (step: {event.step_name}). Stopping.",
                error="Step Timeout",
            )
            self.stop(StopReason.TIMEOUT)

    async def _close_context(self, handle: str) -> None:
        try:
            await self._contexts.close(handle)
        except Exception:  # noqa: BLE001
            logger.warning("Error closing context %s", handle, exc_info=True)

    def _fail_item(self, state: RunState, message: str, *, error: str) -> None:
        self._disarm(state)
        self._counters.increment(CounterKind.ERRORED)
        logger.warning("%s: %s", error, message)
        self._publish(message, error=error)
        self._finish_item(state)

    def _finish_item(self, state: RunState) -> None:
        self._contexts.release()
        state.current_item = None
        state.current_handle = None
        self._drain(state)

    # -- watchdog -------------------------------------------------------

    def _arm(self, state: RunState, subject_id: str, step_name: str) -> None:
        state.deadline_no += 1
        self._guard.arm(subject_id, step_name)

    def _disarm(self, state: RunState) -> None:
        state.deadline_no += 1
        self._guard.disarm()

    def _on_deadline(self, subject_id: str, step_name: str) -> None:
        state = self._state
        self.post(
            WatchdogFired(
                run_no=state.run_no,
                subject_id=subject_id,
                step_name=step_name,
                deadline_no=state.deadline_no,
            ),
        )

    # -- collaborators --------------------------------------------------

    def _load_credentials(self) -> Credentials:
        try:
            stored = self._store.load()
        except Exception as error:
            logger.exception("Error loading settings")
            self._publish("Error loading settings.", error="Settings Load Error")
            raise ConfigMissingError("Settings could not be loaded.") from error
        restored = stored.counters
        if self._writes:
            # Queued counter writes are newer than what the store returned.
            current = self._counters.snapshot()
            restored = Counters(completed=current.completed, skipped=current.skipped)
        self._counters.reset(restored)
        logger.info(
            "Settings loaded: %s, %s",
            "API key present" if stored.api_key else "API key MISSING",
            "profile present" if stored.profile_text else "profile MISSING",
        )
        return Credentials(api_key=stored.api_key, profile_text=stored.profile_text)

    def _persist_counters(self, counters: Counters) -> None:
        self._save(
            completed_count=counters.completed,
            skipped_count=counters.skipped,
            errored_count=counters.errored,
        )

    def _save(self, **values: Any) -> None:
        """Queue a settings write on the writer thread; writes apply in order."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._write_settings(values)
            return
        if self._writer is None:
            self._writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="settings-writer")
        future = loop.run_in_executor(self._writer, self._write_settings, values)
        self._writes.add(future)
        future.add_done_callback(self._writes.discard)

    def _write_settings(self, values: dict[str, Any]) -> None:
        try:
            self._store.save(**values)
        except Exception:  # noqa: BLE001
            logger.warning("Failed to persist %s", ", ".join(values), exc_info=True)

    def _publish(
        self,
        message: str | None = None,
        *,
        error: str | None = None,
        done: bool = False,
    ) -> None:
        update = StatusUpdate.from_counters(
            self._counters.snapshot(),
            message=message,
            error=error,
            done=done,
        )
        try:
            self._observer.publish(update)
        except Exception:  # noqa: BLE001
            logger.debug("Status delivery failed", exc_info=True)

    def _request_configuration(self) -> None:
        try:
            self._observer.request_configuration()
        except Exception:  # noqa: BLE001
            logger.debug("Configuration request delivery failed", exc_info=True)


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


def _require(value: T | None) -> T:
    if value is None:
        raise RuntimeError("Run state is missing a value required by the current phase.")
    return value
