"""Data models for webhook invocations."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hookwatch.config import TargetConfig

STATUS_SUCCESS = "Success"
STATUS_ERROR = "Error"


class WebhookTarget(BaseModel):
    """A named webhook endpoint the invoker can call."""

    model_config = ConfigDict(frozen=True)
    name: str
    url: str = ""
    method: str = "GET"
    timeout_seconds: int = 30

    @classmethod
    def from_config(cls, name: str, config: TargetConfig) -> "WebhookTarget":
        return cls(
            name=name,
            url=config.url,
            method=config.method,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.url and self.url.strip())


class WebhookResponse(BaseModel):
    """Normalized record of one webhook invocation. Serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    status_code: int
    status_message: str
    data: dict[str, Any] | None = None
    error: str | None = None
    target: str | None = None
    duration_ms: int | None = None
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.status_message == STATUS_SUCCESS
