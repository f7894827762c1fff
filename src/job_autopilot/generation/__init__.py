"""Generation service client."""

from job_autopilot.generation.client import (
    GenerationClient,
    GenerationError,
    GenerationServiceError,
    GenerationTimeoutError,
    MalformedResponseError,
    TextGenerator,
)

__all__ = [
    "GenerationClient",
    "GenerationError",
    "GenerationServiceError",
    "GenerationTimeoutError",
    "MalformedResponseError",
    "TextGenerator",
]
