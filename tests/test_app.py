from __future__ import annotations

import asyncio
import json
from pathlib import Path

import allure
import httpx
import pytest

from job_autopilot.app import build_app
from job_autopilot.config import EngineSettings, GenerationSettings, Settings, StorageSettings
from job_autopilot.models import Counters, Item
from job_autopilot.workers.base import SubmitTask
from job_autopilot.workers.scripted import ScriptedCatalog, ScriptedContextProvider

pytestmark = [
    allure.epic("Configuration"),
    allure.feature("Engine Assembly"),
]


def test_build_app_wires_settings_into_every_component(tmp_path: Path, observer) -> None:
    settings = Settings(
        engine=EngineSettings(step_timeout_seconds=2.5),
        generation=GenerationSettings(
            base_url="http://generation.test/v1",
            model="test-model",
            language="English",
        ),
        storage=StorageSettings(db_path=tmp_path / "autopilot.db"),
    )
    requests: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return httpx.Response(200, json={"choices": [{"message": {"content": "Hello team"}}]})

    provider = ScriptedContextProvider()
    item = Item(url="https://jobs.example/1", title="Backend")

    async def scenario():
        app = build_app(
            settings,
            catalog=ScriptedCatalog([[item]]),
            provider=provider,
            observer=observer,
            transport=httpx.MockTransport(handler),
        )
        app.store.save_credentials(api_key="sk-test", profile_text="Python developer")
        try:
            status = await asyncio.wait_for(app.orchestrator.run("catalog-tab"), timeout=5.0)
            stored = app.store.load()
            timeouts = (app.orchestrator.step_timeout_seconds, app.generator.timeout_seconds)
        finally:
            await app.aclose()
        return status, stored, timeouts

    status, stored, timeouts = asyncio.run(scenario())

    assert timeouts == (2.5, 2.5)
    assert status.counters == Counters(completed=1)
    assert stored.counters.completed == 1
    assert stored.running is False
    assert requests[0]["model"] == "test-model"
    assert "in English" in requests[0]["messages"][0]["content"]
    submits = [message for _, message in provider.sent if isinstance(message, SubmitTask)]
    assert submits == [SubmitTask(item=item, generated_text="Hello team")]


def test_build_app_rejects_invalid_settings(tmp_path: Path) -> None:
    settings = Settings(
        engine=EngineSettings(step_timeout_seconds=0),
        storage=StorageSettings(db_path=tmp_path / "autopilot.db"),
    )

    with pytest.raises(ValueError, match="STEP_TIMEOUT_SECONDS"):
        build_app(settings, catalog=ScriptedCatalog([]), provider=ScriptedContextProvider())

    assert not (tmp_path / "autopilot.db").exists()
