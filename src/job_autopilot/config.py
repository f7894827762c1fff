"""Runtime configuration for the automation engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse


@dataclass(slots=True)
class EngineSettings:
    """Orchestrator settings."""

    step_timeout_seconds: float = 30.0


@dataclass(slots=True)
class GenerationSettings:
    """Generation service settings."""

    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4-turbo"
    max_tokens: int = 700
    temperature: float = 0.7
    language: str = "French"
    max_chars: int = 2_000


@dataclass(slots=True)
class StorageSettings:
    """Settings store location."""

    db_path: Path = Path(".job_autopilot.db")


@dataclass(slots=True)
class Settings:
    """Application settings grouped by domain concerns."""

    engine: EngineSettings = field(default_factory=EngineSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @classmethod
    def from_env(cls, db_path: Path | None = None) -> Settings:
        """Load settings from environment with sane defaults for local development."""

        return cls(
            engine=EngineSettings(
                step_timeout_seconds=float(
                    os.getenv("JOB_AUTOPILOT_STEP_TIMEOUT_SECONDS", "30.0"),
                ),
            ),
            generation=GenerationSettings(
                base_url=os.getenv(
                    "JOB_AUTOPILOT_GENERATION_BASE_URL",
                    "https://api.openai.com/v1",
                ).rstrip("/"),
                model=os.getenv("JOB_AUTOPILOT_GENERATION_MODEL", "gpt-4-turbo"),
                max_tokens=int(os.getenv("JOB_AUTOPILOT_GENERATION_MAX_TOKENS", "700")),
                temperature=float(os.getenv("JOB_AUTOPILOT_GENERATION_TEMPERATURE", "0.7")),
                language=os.getenv("JOB_AUTOPILOT_GENERATION_LANGUAGE", "French"),
                max_chars=int(os.getenv("JOB_AUTOPILOT_GENERATION_MAX_CHARS", "2000")),
            ),
            storage=StorageSettings(
                db_path=db_path or Path(os.getenv("JOB_AUTOPILOT_DB_PATH", ".job_autopilot.db")),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if any value is out of range."""

        if self.engine.step_timeout_seconds <= 0:
            raise ValueError("JOB_AUTOPILOT_STEP_TIMEOUT_SECONDS must be > 0.")
        _validate_base_url(self.generation.base_url)
        if not self.generation.model.strip():
            raise ValueError("JOB_AUTOPILOT_GENERATION_MODEL must not be empty.")
        if self.generation.max_tokens <= 0:
            raise ValueError("JOB_AUTOPILOT_GENERATION_MAX_TOKENS must be a positive integer.")
        if not 0.0 <= self.generation.temperature <= 2.0:
            raise ValueError("JOB_AUTOPILOT_GENERATION_TEMPERATURE must be within [0, 2].")
        if not self.generation.language.strip():
            raise ValueError("JOB_AUTOPILOT_GENERATION_LANGUAGE must not be empty.")
        if self.generation.max_chars <= 0:
            raise ValueError("JOB_AUTOPILOT_GENERATION_MAX_CHARS must be a positive integer.")


def _validate_base_url(value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(
            "Invalid JOB_AUTOPILOT_GENERATION_BASE_URL: "
            f"{value!r}. Expected an absolute URL with http:// or https:// scheme.",
        )
