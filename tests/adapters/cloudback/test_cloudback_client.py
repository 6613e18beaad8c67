"""Cloudback HTTP client behaviour against a mocked transport."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx
import pytest

from cloudback_sync.adapters.cloudback import CloudbackAPIError
from cloudback_sync.domain.errors import RemoteError
from cloudback_sync.domain.model import DefinitionKey, Settings

if TYPE_CHECKING:
    from collections.abc import Callable

    from cloudback_sync.adapters.cloudback import CloudbackClient

    from tests.helpers.http import Handler

    type ClientBuilder = Callable[[Handler], CloudbackClient]

KEY = DefinitionKey("GitHub", "testland", "Repository", "docs")


def test_fetch_posts_key_and_parses_settings(make_cloudback_client: ClientBuilder) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "platform": "GitHub",
                "account": "testland",
                "subjectType": "Repository",
                "subjectName": "docs",
                "settings": {
                    "enabled": True,
                    "schedule": "Daily at 9 pm",
                    "storage": "Cloudback EU",
                    "retention": "Last 30 days",
                },
            },
        )

    settings = make_cloudback_client(handler).fetch_definition(KEY)

    assert settings == Settings(
        enabled=True,
        schedule="Daily at 9 pm",
        storage="Cloudback EU",
        retention="Last 30 days",
    )
    request = seen[0]
    assert request.method == "POST"
    assert request.url == "https://cloudback.test/ops/definition/get"
    assert request.headers["X-API-KEY"] == "secret-key"
    assert json.loads(request.content) == {
        "platform": "GitHub",
        "account": "testland",
        "subjectType": "Repository",
        "subjectName": "docs",
    }


def test_upsert_posts_full_definition(make_cloudback_client: ClientBuilder) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    make_cloudback_client(handler).upsert_definition(KEY, Settings.disabled())

    request = seen[0]
    assert request.url.path == "/ops/definition/update"
    assert json.loads(request.content) == {
        "platform": "GitHub",
        "account": "testland",
        "subjectType": "Repository",
        "subjectName": "docs",
        "settings": {"enabled": False, "schedule": "", "storage": "", "retention": ""},
    }


@pytest.mark.parametrize(
    ("status_code", "status"),
    [(404, "404 Not Found"), (401, "401 Unauthorized")],
)
def test_error_status_raises_api_error(
    make_cloudback_client: ClientBuilder,
    status_code: int,
    status: str,
) -> None:
    calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(status_code)

    with pytest.raises(CloudbackAPIError) as exc:
        make_cloudback_client(handler).fetch_definition(KEY)

    assert exc.value.status_code == status_code
    assert exc.value.status == status
    assert str(exc.value) == status
    assert calls == 1


def test_server_error_on_upsert_is_not_retried(make_cloudback_client: ClientBuilder) -> None:
    calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    with pytest.raises(RemoteError) as exc:
        make_cloudback_client(handler).upsert_definition(KEY, Settings(enabled=True))

    assert exc.value.status_code == 503
    assert calls == 1


def test_transport_failure_is_wrapped(make_cloudback_client: ClientBuilder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteError, match="connection refused") as exc:
        make_cloudback_client(handler).fetch_definition(KEY)

    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_malformed_payload_raises_remote_error(make_cloudback_client: ClientBuilder) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>maintenance</html>")

    with pytest.raises(RemoteError, match="Unexpected Cloudback response payload"):
        make_cloudback_client(handler).fetch_definition(KEY)


def test_missing_settings_fields_default_to_empty(make_cloudback_client: ClientBuilder) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "platform": "GitHub",
                "account": "testland",
                "subjectType": "Repository",
                "subjectName": "docs",
                "settings": {"enabled": False},
            },
        )

    assert make_cloudback_client(handler).fetch_definition(KEY) == Settings.disabled()


def test_settings_only_body_is_accepted(make_cloudback_client: ClientBuilder) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "settings": {
                    "enabled": True,
                    "schedule": "Daily",
                    "storage": "Cloudback EU",
                    "retention": "Last 7 days",
                }
            },
        )

    assert make_cloudback_client(handler).fetch_definition(KEY) == Settings(
        enabled=True,
        schedule="Daily",
        storage="Cloudback EU",
        retention="Last 7 days",
    )


def test_null_settings_fields_read_as_empty(make_cloudback_client: ClientBuilder) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "platform": "GitHub",
                "account": "testland",
                "subjectType": "Repository",
                "subjectName": "docs",
                "settings": {
                    "enabled": True,
                    "schedule": None,
                    "storage": "Cloudback EU",
                    "retention": None,
                },
            },
        )

    assert make_cloudback_client(handler).fetch_definition(KEY) == Settings(
        enabled=True,
        schedule="",
        storage="Cloudback EU",
        retention="",
    )


def test_null_settings_object_reads_as_disabled(make_cloudback_client: ClientBuilder) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"settings": None})

    assert make_cloudback_client(handler).fetch_definition(KEY) == Settings.disabled()


def test_error_status_is_logged_with_client_name(
    make_cloudback_client: ClientBuilder,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with (
        caplog.at_level(logging.WARNING, logger="cloudback_sync.adapters.cloudback.client"),
        pytest.raises(CloudbackAPIError),
    ):
        make_cloudback_client(handler).upsert_definition(KEY, Settings.disabled())

    assert caplog.messages == [
        "cloudback request to /ops/definition/update returned 500 Internal Server Error"
    ]
