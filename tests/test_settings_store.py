from __future__ import annotations

from pathlib import Path

import allure
import pytest
from sqlalchemy import text

from job_autopilot.models import Counters
from job_autopilot.storage.settings_store import SqliteSettingsStore

pytestmark = [
    allure.epic("Storage"),
    allure.feature("Settings Store"),
]


def test_init_schema_migrates_to_head_and_seeds_defaults(tmp_path: Path) -> None:
    store = SqliteSettingsStore(tmp_path / "settings.db")
    store.init_schema()

    with store.engine.connect() as connection:
        version = connection.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
    assert version == "20261018_0001"

    loaded = store.load()
    assert loaded.api_key == ""
    assert loaded.profile_text == ""
    assert loaded.counters == Counters()
    assert loaded.running is False
    store.close()


def test_init_schema_keeps_existing_values(tmp_path: Path) -> None:
    store = SqliteSettingsStore(tmp_path / "settings.db")
    store.init_schema()
    store.save(completed_count=4, running=True)

    store.init_schema()

    loaded = store.load()
    assert loaded.counters.completed == 4
    assert loaded.running is True
    store.close()


def test_save_upserts_only_given_keys(sqlite_store: SqliteSettingsStore) -> None:
    sqlite_store.save(completed_count=3, skipped_count=2, errored_count=5)
    sqlite_store.save(completed_count=4)

    loaded = sqlite_store.load()

    assert loaded.counters == Counters(completed=4, skipped=2, errored=0)


def test_save_rejects_unknown_keys(sqlite_store: SqliteSettingsStore) -> None:
    with pytest.raises(ValueError, match="Unknown setting keys: colour"):
        sqlite_store.save(colour="blue")


def test_save_credentials_strips_and_validates(sqlite_store: SqliteSettingsStore) -> None:
    sqlite_store.save_credentials(api_key="  sk-live  ", profile_text="\nPython developer\n")

    loaded = sqlite_store.load()
    assert loaded.api_key == "sk-live"
    assert loaded.profile_text == "Python developer"

    with pytest.raises(ValueError, match="API key cannot be empty"):
        sqlite_store.save_credentials(api_key="   ", profile_text="x")
    with pytest.raises(ValueError, match="User profile cannot be empty"):
        sqlite_store.save_credentials(api_key="sk", profile_text="")
