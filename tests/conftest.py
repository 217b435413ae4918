"""Shared test fixtures for hookwatch."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from hookwatch.config import SettingsYaml, TargetConfig, WebhookConfig
from hookwatch.service import WebhookService
from hookwatch.webhooks.models import WebhookResponse

PRIMARY_URL = "http://hooks.test/primary"
SECONDARY_URL = "http://hooks.test/secondary"

_ENV_VARS = (
    "PORT",
    "WEBHOOK_URL",
    "WEBHOOK_METHOD",
    "WEBHOOK_SECONDARY_URL",
    "WEBHOOK_SCHEDULER_ENABLED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of config loading."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handle)


def json_transport(payload: Any, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))


def text_transport(body: str, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, text=body))


# --- Factory functions for test data ---


def make_settings(
    url: str = PRIMARY_URL,
    secondary_url: str = "",
    **kwargs: Any,
) -> SettingsYaml:
    """Factory for SettingsYaml; extra kwargs go to the primary webhook config."""
    webhook: dict[str, Any] = {
        "url": url,
        "secondary": TargetConfig(url=secondary_url),
    }
    webhook.update(kwargs)
    return SettingsYaml(webhook=WebhookConfig(**webhook))


def make_service(
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> WebhookService:
    return WebhookService(make_settings(**kwargs), transport=transport)


def make_response(**kwargs: Any) -> WebhookResponse:
    """Factory for WebhookResponse with sensible defaults."""
    defaults: dict[str, Any] = {
        "status_code": 200,
        "status_message": "Success",
        "data": {"content": "hello"},
        "target": "primary",
    }
    defaults.update(kwargs)
    return WebhookResponse(**defaults)
