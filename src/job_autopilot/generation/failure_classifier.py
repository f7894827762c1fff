"""Deterministic classification of generation service failures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GENERATION_FAILURE_CLASSIFIER_VERSION = 1


class GenerationFailureClass(str, Enum):
    """Normalized failure classes reported alongside generation errors."""

    ACCESS_OR_AUTH = "access_or_auth"
    BILLING_OR_QUOTA = "billing_or_quota"
    MODEL_NOT_AVAILABLE = "model_not_available"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NON_RETRYABLE = "non_retryable"


_BILLING_OR_QUOTA_PATTERNS: tuple[str, ...] = (
    "insufficient_quota",
    "quota",
    "billing",
    "credits",
    "exceeded your current",
)
_ACCESS_OR_AUTH_PATTERNS: tuple[str, ...] = (
    "invalid api key",
    "incorrect api key",
    "unauthorized",
    "forbidden",
    "permission denied",
    "authentication",
)
_MODEL_NOT_AVAILABLE_PATTERNS: tuple[str, ...] = (
    "model_not_found",
    "model not found",
    "does not exist",
    "unknown model",
    "do not have access to the model",
)
_RATE_LIMIT_PATTERNS: tuple[str, ...] = (
    "rate limit",
    "too many requests",
    "try again later",
)
_SERVICE_UNAVAILABLE_PATTERNS: tuple[str, ...] = (
    "overloaded",
    "temporarily unavailable",
    "bad gateway",
    "connection reset",
    "network error",
)


@dataclass(slots=True)
class GenerationFailureClassification:
    """Normalized failure classification result."""

    failure_class: GenerationFailureClass
    matched_rule: str
    matched_pattern: str | None


def classify_generation_failure(
    *,
    status_code: int | None,
    message: str,
) -> GenerationFailureClassification:
    """Classify a failed generation call; message patterns win over status codes."""

    haystack = message.lower()

    pattern = _first_match(haystack, _BILLING_OR_QUOTA_PATTERNS)
    if pattern is not None:
        return GenerationFailureClassification(
            failure_class=GenerationFailureClass.BILLING_OR_QUOTA,
            matched_rule="billing_or_quota",
            matched_pattern=pattern,
        )

    pattern = _first_match(haystack, _ACCESS_OR_AUTH_PATTERNS)
    if pattern is not None or status_code in {401, 403}:
        return GenerationFailureClassification(
            failure_class=GenerationFailureClass.ACCESS_OR_AUTH,
            matched_rule="access_or_auth" if pattern is not None else "auth_status_code",
            matched_pattern=pattern,
        )

    pattern = _first_match(haystack, _MODEL_NOT_AVAILABLE_PATTERNS)
    if pattern is not None:
        return GenerationFailureClassification(
            failure_class=GenerationFailureClass.MODEL_NOT_AVAILABLE,
            matched_rule="model_not_available",
            matched_pattern=pattern,
        )

    pattern = _first_match(haystack, _RATE_LIMIT_PATTERNS)
    if pattern is not None or status_code == 429:
        return GenerationFailureClassification(
            failure_class=GenerationFailureClass.RATE_LIMITED,
            matched_rule="rate_limit" if pattern is not None else "rate_limit_status_code",
            matched_pattern=pattern,
        )

    pattern = _first_match(haystack, _SERVICE_UNAVAILABLE_PATTERNS)
    if pattern is not None or (status_code is not None and status_code >= 500):
        return GenerationFailureClassification(
            failure_class=GenerationFailureClass.SERVICE_UNAVAILABLE,
            matched_rule=(
                "service_unavailable" if pattern is not None else "server_error_status_code"
            ),
            matched_pattern=pattern,
        )

    return GenerationFailureClassification(
        failure_class=GenerationFailureClass.NON_RETRYABLE,
        matched_rule="fallback_non_retryable",
        matched_pattern=None,
    )


def _first_match(haystack: str, patterns: tuple[str, ...]) -> str | None:
    for pattern in patterns:
        if pattern in haystack:
            return pattern
    return None
