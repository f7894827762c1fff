from __future__ import annotations

import allure

from job_autopilot.generation.failure_classifier import (
    GENERATION_FAILURE_CLASSIFIER_VERSION,
    GenerationFailureClass,
    classify_generation_failure,
)

pytestmark = [
    allure.epic("Generation"),
    allure.feature("Failure Classification"),
]


def test_classifier_version_is_stable() -> None:
    assert GENERATION_FAILURE_CLASSIFIER_VERSION == 1


def test_classifier_prefers_billing_over_rate_limit_status() -> None:
    classified = classify_generation_failure(
        status_code=429,
        message="You exceeded your current quota, please check your plan.",
    )
    assert classified.failure_class == GenerationFailureClass.BILLING_OR_QUOTA
    assert classified.matched_rule == "billing_or_quota"
    assert classified.matched_pattern == "quota"


def test_classifier_maps_auth_status_without_pattern() -> None:
    classified = classify_generation_failure(status_code=401, message="Nope")
    assert classified.failure_class == GenerationFailureClass.ACCESS_OR_AUTH
    assert classified.matched_rule == "auth_status_code"
    assert classified.matched_pattern is None


def test_classifier_maps_invalid_api_key_message() -> None:
    classified = classify_generation_failure(
        status_code=400,
        message="Incorrect API key provided: sk-****",
    )
    assert classified.failure_class == GenerationFailureClass.ACCESS_OR_AUTH
    assert classified.matched_pattern == "incorrect api key"


def test_classifier_maps_model_not_available() -> None:
    classified = classify_generation_failure(
        status_code=404,
        message="The model `gpt-9` does not exist",
    )
    assert classified.failure_class == GenerationFailureClass.MODEL_NOT_AVAILABLE


def test_classifier_maps_rate_limit_status() -> None:
    classified = classify_generation_failure(status_code=429, message="slow down")
    assert classified.failure_class == GenerationFailureClass.RATE_LIMITED
    assert classified.matched_rule == "rate_limit_status_code"


def test_classifier_maps_server_errors_to_service_unavailable() -> None:
    classified = classify_generation_failure(status_code=503, message="")
    assert classified.failure_class == GenerationFailureClass.SERVICE_UNAVAILABLE
    assert classified.matched_rule == "server_error_status_code"


def test_classifier_falls_back_to_non_retryable() -> None:
    classified = classify_generation_failure(status_code=400, message="bad request body")
    assert classified.failure_class == GenerationFailureClass.NON_RETRYABLE
    assert classified.matched_rule == "fallback_non_retryable"
    assert classified.matched_pattern is None
