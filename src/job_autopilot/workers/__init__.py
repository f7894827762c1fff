"""Worker-context ports and manager."""

from job_autopilot.workers.base import (
    CatalogProducer,
    ContextListener,
    ContextOpenError,
    ContextProvider,
    ExtractTask,
    RelayError,
    SubmitTask,
)
from job_autopilot.workers.manager import WorkerContextManager

__all__ = [
    "CatalogProducer",
    "ContextListener",
    "ContextOpenError",
    "ContextProvider",
    "ExtractTask",
    "RelayError",
    "SubmitTask",
    "WorkerContextManager",
]
