"""Dashboard API - process-wide service and scheduler shared by the dashboard and CLI."""
from pathlib import Path

from hookwatch.scheduler.daily import WebhookScheduler
from hookwatch.service import WebhookService

_service: WebhookService | None = None
_scheduler: WebhookScheduler | None = None


def get_service(project_root: Path | None = None) -> WebhookService:
    """Get the shared webhook service. History lives here, so there is only one per process."""
    global _service
    if _service is None:
        _service = WebhookService.from_project(project_root)
    return _service


def get_scheduler(project_root: Path | None = None) -> WebhookScheduler:
    """Get the scheduler bound to the shared service."""
    global _scheduler
    if _scheduler is None:
        _scheduler = WebhookScheduler(get_service(project_root))
    return _scheduler


def reset() -> None:
    """Drop the shared instances (tests, config reload)."""
    global _service, _scheduler
    if _scheduler is not None:
        _scheduler.stop()
    _service = None
    _scheduler = None
