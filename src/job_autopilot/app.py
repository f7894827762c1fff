"""Wiring of settings, storage, generation and the orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from job_autopilot.config import Settings
from job_autopilot.engine.orchestrator import Orchestrator
from job_autopilot.engine.status import StatusObserver
from job_autopilot.generation.client import GenerationClient
from job_autopilot.storage.settings_store import SqliteSettingsStore
from job_autopilot.workers.base import CatalogProducer, ContextProvider
from job_autopilot.workers.manager import WorkerContextManager

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AutopilotApp:
    """Assembled engine plus the resources it owns."""

    settings: Settings
    store: SqliteSettingsStore
    generator: GenerationClient
    contexts: WorkerContextManager
    orchestrator: Orchestrator

    async def aclose(self) -> None:
        await self.orchestrator.aclose()
        await self.generator.aclose()
        self.store.close()


def build_app(
    settings: Settings,
    *,
    catalog: CatalogProducer,
    provider: ContextProvider,
    observer: StatusObserver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AutopilotApp:
    """Validate ``settings`` and build a ready-to-start orchestrator.

    The step timeout bounds every pipeline step, including the generation
    request, so the client and the watchdog share one deadline.
    """

    settings.validate()
    timeout_seconds = settings.engine.step_timeout_seconds

    store = SqliteSettingsStore(settings.storage.db_path)
    store.init_schema()
    generator = GenerationClient(
        settings.generation,
        timeout_seconds=timeout_seconds,
        transport=transport,
    )
    contexts = WorkerContextManager(provider)
    orchestrator = Orchestrator(
        store=store,
        catalog=catalog,
        contexts=contexts,
        generator=generator,
        observer=observer,
        step_timeout_seconds=timeout_seconds,
    )
    logger.info(
        "Engine assembled: db=%s model=%s step_timeout=%gs",
        settings.storage.db_path,
        settings.generation.model,
        timeout_seconds,
    )
    return AutopilotApp(
        settings=settings,
        store=store,
        generator=generator,
        contexts=contexts,
        orchestrator=orchestrator,
    )
