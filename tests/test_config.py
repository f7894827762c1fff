from __future__ import annotations

from pathlib import Path

import allure
import pytest

from job_autopilot.config import EngineSettings, GenerationSettings, Settings

pytestmark = [
    allure.epic("Configuration"),
    allure.feature("Environment Settings"),
]


def test_from_env_uses_defaults(monkeypatch) -> None:
    for name in (
        "JOB_AUTOPILOT_STEP_TIMEOUT_SECONDS",
        "JOB_AUTOPILOT_GENERATION_BASE_URL",
        "JOB_AUTOPILOT_GENERATION_MODEL",
        "JOB_AUTOPILOT_GENERATION_LANGUAGE",
        "JOB_AUTOPILOT_DB_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.engine.step_timeout_seconds == 30.0
    assert settings.generation.base_url == "https://api.openai.com/v1"
    assert settings.generation.model == "gpt-4-turbo"
    assert settings.generation.language == "French"
    assert settings.storage.db_path == Path(".job_autopilot.db")
    settings.validate()


def test_from_env_reads_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("JOB_AUTOPILOT_STEP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("JOB_AUTOPILOT_GENERATION_BASE_URL", "http://localhost:8080/v1/")
    monkeypatch.setenv("JOB_AUTOPILOT_GENERATION_MAX_TOKENS", "300")
    monkeypatch.setenv("JOB_AUTOPILOT_GENERATION_LANGUAGE", "English")

    settings = Settings.from_env(db_path=tmp_path / "x.db")

    assert settings.engine.step_timeout_seconds == 5.0
    assert settings.generation.base_url == "http://localhost:8080/v1"
    assert settings.generation.max_tokens == 300
    assert settings.generation.language == "English"
    assert settings.storage.db_path == tmp_path / "x.db"


def test_validate_rejects_non_positive_step_timeout() -> None:
    settings = Settings(engine=EngineSettings(step_timeout_seconds=0))

    with pytest.raises(ValueError, match="STEP_TIMEOUT_SECONDS"):
        settings.validate()


def test_validate_rejects_relative_base_url() -> None:
    settings = Settings(generation=GenerationSettings(base_url="api.openai.com/v1"))

    with pytest.raises(ValueError, match="Invalid JOB_AUTOPILOT_GENERATION_BASE_URL"):
        settings.validate()


@pytest.mark.parametrize(
    ("generation", "match"),
    [
        (GenerationSettings(max_tokens=0), "MAX_TOKENS"),
        (GenerationSettings(temperature=2.5), "TEMPERATURE"),
        (GenerationSettings(language="  "), "LANGUAGE"),
        (GenerationSettings(max_chars=-1), "MAX_CHARS"),
        (GenerationSettings(model=""), "MODEL"),
    ],
)
def test_validate_rejects_out_of_range_generation_values(
    generation: GenerationSettings,
    match: str,
) -> None:
    with pytest.raises(ValueError, match=match):
        Settings(generation=generation).validate()
