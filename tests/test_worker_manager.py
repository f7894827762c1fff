from __future__ import annotations

import asyncio

import allure
import pytest

from job_autopilot.engine.events import (
    CatalogClosed,
    CatalogRuntimeError,
    ContextClosed,
    Event,
    ExtractionReceived,
    ItemRuntimeError,
    SubmissionReceived,
)
from job_autopilot.models import Described, Item, Submitted
from job_autopilot.workers.base import ContextOpenError, ExtractTask
from job_autopilot.workers.manager import WorkerContextManager
from job_autopilot.workers.scripted import ItemScript, ScriptedContextProvider

pytestmark = [
    allure.epic("Orchestration"),
    allure.feature("Worker Contexts"),
]

ITEM = Item(url="https://jobs.example/1", title="Backend")


def _manager(scripts: dict[str, ItemScript] | None = None):
    provider = ScriptedContextProvider(scripts)
    manager = WorkerContextManager(provider)
    events: list[Event] = []
    manager.attach(events.append)
    return provider, manager, events


def test_open_tracks_active_context_and_tags_replies() -> None:
    provider, manager, events = _manager()

    async def scenario() -> None:
        handle = await manager.open(ITEM, run_no=2, ticket=7)
        assert manager.active_handle == handle
        await manager.relay(handle, ExtractTask(item=ITEM))
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert events == [
        ExtractionReceived(run_no=2, ticket=7, outcome=Described("Job description text.")),
    ]


def test_second_open_while_active_is_refused() -> None:
    _, manager, _ = _manager()

    async def scenario() -> None:
        await manager.open(ITEM, run_no=1, ticket=1)
        with pytest.raises(RuntimeError, match="already active"):
            await manager.open(Item(url="https://jobs.example/2"), run_no=1, ticket=2)
        manager.release()
        await manager.open(Item(url="https://jobs.example/2"), run_no=1, ticket=2)

    asyncio.run(scenario())


def test_failed_open_frees_slot() -> None:
    _, manager, _ = _manager({ITEM.url: ItemScript(open_error="no runner")})

    async def scenario() -> None:
        with pytest.raises(ContextOpenError, match="no runner"):
            await manager.open(ITEM, run_no=1, ticket=1)
        assert not manager.has_active

    asyncio.run(scenario())


def test_released_context_still_reports_with_its_own_ticket() -> None:
    provider, manager, events = _manager()

    async def scenario() -> None:
        handle = await manager.open(ITEM, run_no=1, ticket=3)
        manager.release()
        provider._listener_or_fail().reply_received(handle, Submitted())

    asyncio.run(scenario())

    assert events == [SubmissionReceived(run_no=1, ticket=3, outcome=Submitted())]


def test_external_close_emits_context_closed_and_frees_slot() -> None:
    provider, manager, events = _manager()

    async def scenario() -> None:
        handle = await manager.open(ITEM, run_no=1, ticket=1)
        provider.close_externally(handle)
        assert not manager.has_active
        provider.close_externally(handle)

    asyncio.run(scenario())

    assert events == [ContextClosed(run_no=1, ticket=1)]


def test_catalog_context_events_are_routed_separately() -> None:
    provider, manager, events = _manager()
    manager.watch_catalog("catalog-tab", run_no=4)

    manager.runtime_error("catalog-tab", "catalog_scan", "boom")
    manager.context_closed("catalog-tab")
    manager.runtime_error("unknown", "item_extract", "ignored")

    assert events == [
        CatalogRuntimeError(run_no=4, location="catalog_scan", message="boom"),
        CatalogClosed(run_no=4),
    ]


def test_item_runtime_error_is_tagged() -> None:
    provider, manager, events = _manager()

    async def scenario() -> None:
        handle = await manager.open(ITEM, run_no=1, ticket=9)
        manager.runtime_error(handle, "item_submit", "button missing")

    asyncio.run(scenario())

    assert events == [
        ItemRuntimeError(run_no=1, ticket=9, location="item_submit", message="button missing"),
    ]


def test_close_removes_binding() -> None:
    provider, manager, events = _manager()

    async def scenario() -> None:
        handle = await manager.open(ITEM, run_no=1, ticket=1)
        await manager.close(handle)
        assert provider.closed == [handle]
        assert not manager.has_active
        manager.reply_received(handle, Submitted())

    asyncio.run(scenario())

    assert events == []
