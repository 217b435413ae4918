"""Configuration loader - reads config/settings.yaml, then applies environment overrides."""
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

ROOT = Path(__file__).parent.parent

_TRUE = ("1", "true", "yes", "on")


class TargetConfig(BaseModel):
    """One webhook endpoint: url, method, timeout."""

    model_config = ConfigDict(extra="ignore")
    url: str = ""
    method: str = "GET"
    timeout_seconds: int = 30

    @field_validator("method")
    @classmethod
    def _normalize_method(cls, v: str) -> str:
        v = (v or "GET").upper()
        if v not in ("GET", "POST"):
            raise ValueError(f"Unsupported webhook method: {v}")
        return v


class WebhookConfig(TargetConfig):
    scheduler_enabled: bool = True
    secondary: TargetConfig = TargetConfig()


class DashboardConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class HistoryConfig(BaseModel):
    max_entries: int = 100


class LoggingConfig(BaseModel):
    level: str = "INFO"


class SettingsYaml(BaseModel):
    model_config = ConfigDict(extra="ignore")
    webhook: WebhookConfig = WebhookConfig()
    dashboard: DashboardConfig = DashboardConfig()
    history: HistoryConfig = HistoryConfig()
    logging: LoggingConfig = LoggingConfig()


def _env_overrides(data: dict) -> dict:
    """Apply PORT and WEBHOOK_* environment variables on top of the YAML data."""
    webhook = dict(data.get("webhook") or {})
    secondary = dict(webhook.get("secondary") or {})
    dashboard = dict(data.get("dashboard") or {})

    if os.getenv("PORT"):
        dashboard["port"] = int(os.environ["PORT"])
    if os.getenv("WEBHOOK_URL"):
        webhook["url"] = os.environ["WEBHOOK_URL"]
    if os.getenv("WEBHOOK_METHOD"):
        webhook["method"] = os.environ["WEBHOOK_METHOD"]
    if os.getenv("WEBHOOK_SECONDARY_URL"):
        secondary["url"] = os.environ["WEBHOOK_SECONDARY_URL"]
    if os.getenv("WEBHOOK_SCHEDULER_ENABLED"):
        webhook["scheduler_enabled"] = os.environ["WEBHOOK_SCHEDULER_ENABLED"].lower() in _TRUE

    webhook["secondary"] = secondary
    return {**data, "webhook": webhook, "dashboard": dashboard}


def settings_path(project_root: Path | None = None) -> Path:
    root = project_root or ROOT
    return root / "config" / "settings.yaml"


def load_config(project_root: Path | None = None) -> SettingsYaml:
    """Load settings from YAML (missing file means defaults) and the environment."""
    path = settings_path(project_root)
    data: dict = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    return SettingsYaml(**_env_overrides(data))
