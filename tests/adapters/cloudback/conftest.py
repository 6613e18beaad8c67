"""Shared fixtures for Cloudback adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cloudback_sync.adapters.cloudback import CloudbackClient
from cloudback_sync.config.cloudback import CloudbackConfig
from cloudback_sync.config.http_resilience import ResilienceConfig
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.http import Handler


@pytest.fixture
def cloudback_config() -> CloudbackConfig:
    return CloudbackConfig(
        api_key="secret-key",
        endpoint="https://cloudback.test",
        resilience=ResilienceConfig(
            name="cloudback",
            base_url="https://cloudback.test",
            default_headers={"Content-Type": "application/json", "X-API-KEY": "secret-key"},
        ),
    )


@pytest.fixture
def make_cloudback_client(
    cloudback_config: CloudbackConfig,
) -> Callable[[Handler], CloudbackClient]:
    def build(handler: Handler) -> CloudbackClient:
        return CloudbackClient(config=cloudback_config, client_factory=make_client_factory(handler))

    return build
