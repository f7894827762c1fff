"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from job_autopilot.engine.status import StatusUpdate
from job_autopilot.models import Counters
from job_autopilot.storage.settings_store import (
    API_KEY,
    COMPLETED_COUNT,
    PROFILE_TEXT,
    RUNNING,
    SETTING_KEYS,
    SKIPPED_COUNT,
    SqliteSettingsStore,
    StoredSettings,
)


class MemorySettingsStore:
    """In-memory settings store recording every save."""

    def __init__(self, **values: Any) -> None:
        self.values: dict[str, Any] = {COMPLETED_COUNT: 0, SKIPPED_COUNT: 0, RUNNING: False}
        self.values.update(values)
        self.saves: list[dict[str, Any]] = []

    def load(self) -> StoredSettings:
        return StoredSettings(
            api_key=str(self.values.get(API_KEY) or ""),
            profile_text=str(self.values.get(PROFILE_TEXT) or ""),
            counters=Counters(
                completed=int(self.values.get(COMPLETED_COUNT) or 0),
                skipped=int(self.values.get(SKIPPED_COUNT) or 0),
            ),
            running=bool(self.values.get(RUNNING)),
        )

    def save(self, **values: Any) -> None:
        assert set(values) <= SETTING_KEYS
        self.saves.append(values)
        self.values.update(values)


@dataclass(slots=True)
class RecordingObserver:
    updates: list[StatusUpdate] = field(default_factory=list)
    configuration_requests: int = 0

    def publish(self, update: StatusUpdate) -> None:
        self.updates.append(update)

    def request_configuration(self) -> None:
        self.configuration_requests += 1

    @property
    def messages(self) -> list[str]:
        return [update.message for update in self.updates if update.message]

    @property
    def errors(self) -> list[str]:
        return [update.error for update in self.updates if update.error]

    @property
    def terminal(self) -> list[StatusUpdate]:
        return [update for update in self.updates if update.done]


@pytest.fixture()
def memory_store() -> MemorySettingsStore:
    return MemorySettingsStore(api_key="sk-test", profile_text="Senior Python engineer.")


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def sqlite_store(tmp_path: Path):
    store = SqliteSettingsStore(tmp_path / "settings.db")
    store.init_schema()
    yield store
    store.close()


@pytest.fixture()
def make_store():
    return MemorySettingsStore
