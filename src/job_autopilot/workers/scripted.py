"""Deterministic in-memory catalog and context provider for tests and dry runs."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field

from job_autopilot.models import (
    Described,
    Discovery,
    ExtractionOutcome,
    Item,
    SubmissionOutcome,
    Submitted,
)
from job_autopilot.workers.base import (
    ContextListener,
    ContextOpenError,
    ExtractTask,
    RelayError,
    SubmitTask,
    TaskMessage,
)


class ScriptedCatalog:
    """Serves fixed pages; ``has_more`` is true while later pages remain."""

    def __init__(
        self,
        pages: Sequence[Sequence[Item]],
        *,
        scan_error: str | None = None,
        hang: bool = False,
    ) -> None:
        self._pages = [tuple(page) for page in pages]
        self._page_index = 0
        self.scan_error = scan_error
        self.hang = hang
        self.scans = 0
        self.advances = 0

    async def scan(self, context_ref: str) -> Discovery:
        self.scans += 1
        if self.hang:
            await asyncio.Event().wait()
        if self.scan_error is not None:
            raise RuntimeError(self.scan_error)
        return self._current()

    async def advance_page(self, context_ref: str) -> Discovery | None:
        self.advances += 1
        if self._page_index + 1 >= len(self._pages):
            return None
        self._page_index += 1
        return self._current()

    def _current(self) -> Discovery:
        if not self._pages:
            return Discovery(items=(), has_more=False)
        return Discovery(
            items=self._pages[self._page_index],
            has_more=self._page_index + 1 < len(self._pages),
        )


@dataclass(slots=True)
class ItemScript:
    """How the fake in-context runner behaves for one item URL.

    ``None`` for ``extraction`` or ``submission`` means the runner never
    answers that task.
    """

    extraction: ExtractionOutcome | None = field(
        default_factory=lambda: Described("Job description text."),
    )
    submission: SubmissionOutcome | None = field(default_factory=Submitted)
    open_error: str | None = None
    hang_open: bool = False
    reject_submit: bool = False
    close_during_extraction: bool = False
    runtime_error_during_extraction: str | None = None


class ScriptedContextProvider:
    """Opens fake contexts and answers tasks according to per-URL scripts."""

    def __init__(self, scripts: dict[str, ItemScript] | None = None) -> None:
        self.scripts = scripts or {}
        self._listener: ContextListener | None = None
        self._ids = itertools.count(1)
        self._items: dict[str, Item] = {}
        self.opened: list[str] = []
        self.closed: list[str] = []
        self.sent: list[tuple[str, TaskMessage]] = []

    @property
    def open_handles(self) -> list[str]:
        return [handle for handle in self.opened if handle not in self.closed]

    def handle_for(self, url: str) -> str | None:
        for handle, item in self._items.items():
            if item.url == url:
                return handle
        return None

    def bind(self, listener: ContextListener) -> None:
        self._listener = listener

    async def open(self, item: Item) -> str:
        script = self._script(item.url)
        if script.hang_open:
            await asyncio.Event().wait()
        if script.open_error is not None:
            raise ContextOpenError(script.open_error, item_url=item.url)
        handle = f"ctx-{next(self._ids)}"
        self._items[handle] = item
        self.opened.append(handle)
        return handle

    async def send(self, handle: str, message: TaskMessage) -> None:
        if handle in self.closed or handle not in self._items:
            raise RelayError(f"Context {handle} is not available", handle=handle)
        self.sent.append((handle, message))
        script = self._script(self._items[handle].url)
        loop = asyncio.get_running_loop()
        if isinstance(message, ExtractTask):
            if script.close_during_extraction:
                loop.call_soon(self.close_externally, handle)
            elif script.runtime_error_during_extraction is not None:
                loop.call_soon(
                    self._listener_or_fail().runtime_error,
                    handle,
                    "item_extract",
                    script.runtime_error_during_extraction,
                )
            elif script.extraction is not None:
                loop.call_soon(self._listener_or_fail().reply_received, handle, script.extraction)
        elif isinstance(message, SubmitTask):
            if script.reject_submit:
                raise RelayError(f"Context {handle} rejected submission", handle=handle)
            if script.submission is not None:
                loop.call_soon(self._listener_or_fail().reply_received, handle, script.submission)

    async def close(self, handle: str) -> None:
        if handle not in self.closed:
            self.closed.append(handle)

    def close_externally(self, handle: str) -> None:
        """Simulate the context disappearing out-of-band."""

        if handle not in self.closed:
            self.closed.append(handle)
        self._listener_or_fail().context_closed(handle)

    def _script(self, url: str) -> ItemScript:
        return self.scripts.get(url) or ItemScript()

    def _listener_or_fail(self) -> ContextListener:
        if self._listener is None:
            raise RuntimeError("ScriptedContextProvider is not bound to a listener.")
        return self._listener
