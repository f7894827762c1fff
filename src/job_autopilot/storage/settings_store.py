"""Persistent key/value settings store backed by SQLModel + SQLite."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from sqlmodel import Session, col, select

from job_autopilot.models import Counters
from job_autopilot.storage.alembic_runner import upgrade_head
from job_autopilot.storage.common import build_sqlite_engine, utc_now
from job_autopilot.storage.sqlmodel_models import SettingEntry

logger = logging.getLogger(__name__)

API_KEY = "api_key"
PROFILE_TEXT = "profile_text"
COMPLETED_COUNT = "completed_count"
SKIPPED_COUNT = "skipped_count"
ERRORED_COUNT = "errored_count"
RUNNING = "running"

SETTING_KEYS: frozenset[str] = frozenset(
    {API_KEY, PROFILE_TEXT, COMPLETED_COUNT, SKIPPED_COUNT, ERRORED_COUNT, RUNNING},
)
_FIRST_INSTALL_DEFAULTS: dict[str, Any] = {
    COMPLETED_COUNT: 0,
    SKIPPED_COUNT: 0,
    RUNNING: False,
}


@dataclass(frozen=True, slots=True)
class StoredSettings:
    """Everything the engine reads at run start.

    ``counters.errored`` is always zero: errors are a per-session figure and
    are reset whenever settings are loaded.
    """

    api_key: str
    profile_text: str
    counters: Counters
    running: bool


class SettingsStore(Protocol):
    """Key/value persistence used by the orchestrator."""

    def load(self) -> StoredSettings:
        """Read credentials, counters and the running flag."""

    def save(self, **values: Any) -> None:
        """Upsert only the given keys."""


class SqliteSettingsStore:
    """Settings persistence facade backed by SQLModel + SQLite."""

    def __init__(self, db_path: Path, *, busy_timeout_ms: int = 5_000) -> None:
        self.db_path = db_path
        self.engine = build_sqlite_engine(db_path=db_path, busy_timeout_ms=busy_timeout_ms)

    def close(self) -> None:
        """Close underlying DB resources."""

        self.engine.dispose()

    def init_schema(self) -> None:
        """Run schema migrations and seed first-install defaults."""

        upgrade_head(self.db_path)
        with Session(self.engine) as session:
            existing = set(session.exec(select(SettingEntry.key)).all())
            now = utc_now()
            for key, value in _FIRST_INSTALL_DEFAULTS.items():
                if key in existing:
                    continue
                session.add(SettingEntry(key=key, value_json=json.dumps(value), updated_at=now))
            session.commit()

    def load(self) -> StoredSettings:
        values = self._read_all()
        return StoredSettings(
            api_key=str(values.get(API_KEY) or ""),
            profile_text=str(values.get(PROFILE_TEXT) or ""),
            counters=Counters(
                completed=int(values.get(COMPLETED_COUNT) or 0),
                skipped=int(values.get(SKIPPED_COUNT) or 0),
                errored=0,
            ),
            running=bool(values.get(RUNNING, False)),
        )

    def save(self, **values: Any) -> None:
        unknown = set(values) - SETTING_KEYS
        if unknown:
            raise ValueError(f"Unknown setting keys: {', '.join(sorted(unknown))}")
        if not values:
            return
        now = utc_now()
        with Session(self.engine) as session:
            rows = {
                row.key: row
                for row in session.exec(
                    select(SettingEntry).where(col(SettingEntry.key).in_(list(values))),
                ).all()
            }
            for key, value in values.items():
                encoded = json.dumps(value)
                row = rows.get(key)
                if row is None:
                    session.add(SettingEntry(key=key, value_json=encoded, updated_at=now))
                else:
                    row.value_json = encoded
                    row.updated_at = now
                    session.add(row)
            session.commit()

    def save_credentials(self, *, api_key: str, profile_text: str) -> None:
        """Validate and persist the API key and profile text."""

        api_key = api_key.strip()
        profile_text = profile_text.strip()
        if not api_key:
            raise ValueError("API key cannot be empty.")
        if not profile_text:
            raise ValueError("User profile cannot be empty.")
        self.save(api_key=api_key, profile_text=profile_text)
        logger.info("Credentials saved")

    def _read_all(self) -> dict[str, Any]:
        with Session(self.engine) as session:
            rows = session.exec(select(SettingEntry)).all()
        decoded: dict[str, Any] = {}
        for row in rows:
            try:
                decoded[row.key] = json.loads(row.value_json)
            except json.JSONDecodeError:
                logger.warning("Ignoring undecodable setting %s", row.key)
        return decoded
