"""Async client for the chat-completions generation service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import httpx

from job_autopilot.config import GenerationSettings
from job_autopilot.engine.timeout_guard import DEFAULT_STEP_TIMEOUT_SECONDS
from job_autopilot.generation.failure_classifier import (
    GenerationFailureClass,
    classify_generation_failure,
)
from job_autopilot.generation.prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Generation call did not produce text."""


class GenerationServiceError(GenerationError):
    """Service answered with a non-success response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None,
        failure_class: GenerationFailureClass,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.failure_class = failure_class


class MalformedResponseError(GenerationError):
    """Success response without the expected content field."""


class GenerationTimeoutError(GenerationError):
    """The step deadline elapsed before the service answered."""


class TextGenerator(Protocol):
    """Anything that turns a profile and a description into generated text."""

    async def generate(self, profile_text: str, description: str, *, api_key: str) -> str:
        """Return generated text or raise :class:`GenerationError`."""


class GenerationClient:
    """One chat-completions request per item, bounded by the step deadline."""

    def __init__(
        self,
        settings: GenerationSettings | None = None,
        *,
        timeout_seconds: float = DEFAULT_STEP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or GenerationSettings()
        self.timeout_seconds = timeout_seconds
        self._system_prompt = build_system_prompt(
            language=self.settings.language,
            max_chars=self.settings.max_chars,
        )
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(timeout_seconds, connect=10.0),
            transport=transport,
        )

    async def generate(self, profile_text: str, description: str, *, api_key: str) -> str:
        logger.info("Generating text for description of %d chars", len(description))
        try:
            return await asyncio.wait_for(
                self._request(profile_text=profile_text, description=description, api_key=api_key),
                timeout=self.timeout_seconds,
            )
        except (TimeoutError, httpx.TimeoutException) as error:
            raise GenerationTimeoutError(
                f"Generation service did not answer within {self.timeout_seconds:g}s",
            ) from error

    async def _request(self, *, profile_text: str, description: str, api_key: str) -> str:
        payload = {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": self._system_prompt},
                {
                    "role": "user",
                    "content": build_user_prompt(
                        profile_text=profile_text,
                        description=description,
                    ),
                },
            ],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }
        try:
            response = await self._client.post(
                "/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
        except httpx.TimeoutException:
            raise
        except httpx.HTTPError as error:
            message = f"Generation service request failed: {error}"
            raise GenerationServiceError(
                message,
                status_code=None,
                failure_class=classify_generation_failure(
                    status_code=None,
                    message=str(error),
                ).failure_class,
            ) from error

        if not response.is_success:
            service_message = _error_message(response)
            classification = classify_generation_failure(
                status_code=response.status_code,
                message=service_message,
            )
            logger.warning(
                "Generation service error %s (%s): %s",
                response.status_code,
                classification.failure_class.value,
                service_message,
            )
            raise GenerationServiceError(
                f"Generation service error: {response.status_code} "
                f"{response.reason_phrase} - {service_message}",
                status_code=response.status_code,
                failure_class=classification.failure_class,
            )

        try:
            data = response.json()
        except ValueError as error:
            raise MalformedResponseError("Generation service returned invalid JSON.") from error
        content = _extract_content(data)
        if content is None:
            logger.warning("No usable choices in generation response: %s", data)
            raise MalformedResponseError("No response choices or content from generation service.")
        return content

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GenerationClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Failed to parse error response"
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Unknown error structure from generation service"


def _extract_content(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content:
        return None
    return content
