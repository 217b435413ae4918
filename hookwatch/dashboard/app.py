"""FastAPI dashboard - webhook history page, manual triggers, JSON API."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from hookwatch.integrations.dashboard_api import get_scheduler, get_service
from hookwatch.scheduler.daily import WebhookScheduler
from hookwatch.service import WebhookService
from hookwatch.webhooks.models import STATUS_ERROR, WebhookResponse

logger = logging.getLogger(__name__)

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


def _trigger_error(e: Exception) -> WebhookResponse:
    return WebhookResponse(
        status_code=500,
        status_message=STATUS_ERROR,
        error=f"Trigger error: {e}",
    )


def create_app(
    service: WebhookService | None = None,
    scheduler: WebhookScheduler | None = None,
) -> FastAPI:
    """Build the dashboard app. Without arguments, uses the process-wide service and scheduler."""
    if service is None:
        service = get_service()
        scheduler = scheduler or get_scheduler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            scheduler.start()
        yield
        if scheduler is not None:
            scheduler.stop()

    app = FastAPI(title="Webhook Dashboard", lifespan=lifespan)
    app.state.service = service
    app.state.scheduler = scheduler

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        logger.info("Dashboard index page accessed")
        context = {"primary": service.primary, "secondary": service.secondary}
        try:
            history = service.get_history()
            logger.debug("Displaying %d webhook responses", len(history))
            context["responses"] = list(reversed(history))
        except Exception as e:
            logger.exception("Error loading dashboard")
            context["responses"] = []
            context["error"] = f"Error loading dashboard: {e}"
        return templates.TemplateResponse(request, "index.html", context)

    @app.post("/api/trigger", response_model=WebhookResponse)
    async def trigger_primary():
        logger.info("Manual primary webhook trigger requested")
        try:
            response = await service.trigger_primary()
        except Exception as e:
            logger.exception("Error in manual primary trigger")
            return _trigger_error(e)
        logger.info("Manual trigger completed with status: %d", response.status_code)
        return response

    @app.post("/api/trigger/secondary", response_model=WebhookResponse)
    async def trigger_secondary():
        logger.info("Manual secondary webhook trigger requested")
        try:
            response = await service.trigger_secondary()
        except Exception as e:
            logger.exception("Error in manual secondary trigger")
            return _trigger_error(e)
        logger.info("Manual secondary trigger completed with status: %d", response.status_code)
        return response

    @app.get("/api/data", response_model=list[WebhookResponse])
    async def api_data():
        try:
            return service.get_history()
        except Exception:
            logger.exception("Error getting data")
            return []

    @app.get("/api/latest", response_model=WebhookResponse | None)
    async def api_latest():
        try:
            return service.get_latest()
        except Exception:
            logger.exception("Error getting latest response")
            return None

    @app.delete("/api/clear")
    async def api_clear():
        logger.info("Clear history requested")
        try:
            service.clear_history()
        except Exception as e:
            logger.exception("Error clearing history")
            return {"status": "error", "message": f"Error: {e}"}
        return {"status": "success", "message": "History cleared"}

    @app.get("/api/health")
    async def api_health():
        if not service.scheduler_enabled:
            sched = "disabled"
        elif scheduler is not None and scheduler.running:
            sched = "running"
        else:
            sched = "stopped"
        return {"status": "ok", "history_size": len(service.history), "scheduler": sched}

    @app.get("/api/scheduler")
    async def api_scheduler():
        jobs = scheduler.describe() if scheduler is not None else []
        return {"enabled": service.scheduler_enabled, "jobs": jobs}

    return app

