"""Webhook service - the operations the scheduler, dashboard and CLI call into."""
import logging
from pathlib import Path

import httpx

from hookwatch.config import SettingsYaml, load_config
from hookwatch.webhooks.history import ResponseHistory
from hookwatch.webhooks.invoker import WebhookInvoker
from hookwatch.webhooks.models import WebhookResponse, WebhookTarget

logger = logging.getLogger(__name__)

PRIMARY = "primary"
SECONDARY = "secondary"


class WebhookService:
    """Owns the configured targets, the invoker and the process-wide response history."""

    def __init__(
        self,
        settings: SettingsYaml,
        history: ResponseHistory | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.history = history or ResponseHistory(settings.history.max_entries)
        self.invoker = WebhookInvoker(self.history, transport=transport)
        self.primary = WebhookTarget.from_config(PRIMARY, settings.webhook)
        self.secondary = WebhookTarget.from_config(SECONDARY, settings.webhook.secondary)
        logger.info("WebhookService initialized with URL: %s", self.primary.url or "(not set)")

    @classmethod
    def from_project(cls, project_root: Path | None = None) -> "WebhookService":
        return cls(load_config(project_root))

    @property
    def scheduler_enabled(self) -> bool:
        return self.settings.webhook.scheduler_enabled

    async def trigger_primary(self) -> WebhookResponse:
        return await self.invoker.invoke(self.primary)

    async def trigger_secondary(self) -> WebhookResponse:
        return await self.invoker.invoke(self.secondary)

    async def trigger(self, name: str) -> WebhookResponse:
        if name == PRIMARY:
            return await self.trigger_primary()
        if name == SECONDARY:
            return await self.trigger_secondary()
        raise ValueError(f"Unknown webhook target: {name}")

    def get_history(self) -> list[WebhookResponse]:
        return self.history.snapshot()

    def get_latest(self) -> WebhookResponse | None:
        return self.history.latest()

    def clear_history(self) -> None:
        logger.info("Clearing webhook history")
        self.history.clear()
