"""Cloudback service configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var, optional_env_var
from .errors import MissingConfigurationError
from .http_resilience import ResilienceConfig

DEFAULT_CLOUDBACK_ENDPOINT = "https://app.cloudback.it"
DEFAULT_CLOUDBACK_TIMEOUT_SECONDS = 30.0

API_KEY_ENV = "CLOUDBACK_API_KEY"
ENDPOINT_ENV = "CLOUDBACK_ENDPOINT"
TIMEOUT_ENV = "CLOUDBACK_TIMEOUT_SECONDS"


@dataclass(frozen=True, slots=True)
class CloudbackConfig:
    """Holds Cloudback API configuration values."""

    api_key: str
    endpoint: str
    resilience: ResilienceConfig


def get_cloudback_config(
    *,
    api_key: str | None = None,
    endpoint: str | None = None,
) -> CloudbackConfig:
    """Build the Cloudback configuration.

    Explicit arguments take precedence over ``CLOUDBACK_API_KEY`` and
    ``CLOUDBACK_ENDPOINT``; the endpoint falls back to the public service.
    """

    resolved_key = api_key or optional_env_var(API_KEY_ENV)
    if not resolved_key:
        raise MissingConfigurationError(
            f"Missing configuration for: {API_KEY_ENV} (or pass an API key explicitly)"
        )
    resolved_endpoint = endpoint or optional_env_var(ENDPOINT_ENV) or DEFAULT_CLOUDBACK_ENDPOINT

    resilience = ResilienceConfig(
        name="cloudback",
        base_url=resolved_endpoint,
        timeout_seconds=float_env_var(TIMEOUT_ENV, DEFAULT_CLOUDBACK_TIMEOUT_SECONDS),
        default_headers={
            "Content-Type": "application/json",
            "X-API-KEY": resolved_key,
        },
    )
    return CloudbackConfig(api_key=resolved_key, endpoint=resolved_endpoint, resilience=resilience)
