"""Daily scheduler - fires the webhook targets at fixed wall-clock times."""
import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from hookwatch.service import WebhookService

logger = logging.getLogger(__name__)

PRIMARY_JOB = "primary_webhook"
SECONDARY_JOB = "secondary_webhook"

# Local time, every day.
PRIMARY_HOURS = "9,13,18"
SECONDARY_HOURS = "9"


class WebhookScheduler:
    """Primary target at 09:00, 13:00 and 18:00; secondary at 09:00 when configured."""

    def __init__(self, service: WebhookService, scheduler: AsyncIOScheduler | None = None):
        self.service = service
        self._scheduler = scheduler or AsyncIOScheduler()
        self._last_run: dict[str, datetime] = {}

    def start(self, paused: bool = False) -> None:
        self.register_jobs()
        self._scheduler.start(paused=paused)
        logger.info("Scheduler started (enabled=%s)", self.service.scheduler_enabled)

    def register_jobs(self) -> None:
        self._scheduler.add_job(
            self.run_primary,
            CronTrigger(hour=PRIMARY_HOURS, minute=0),
            id=PRIMARY_JOB,
            replace_existing=True,
        )
        self._scheduler.add_job(
            self.run_secondary,
            CronTrigger(hour=SECONDARY_HOURS, minute=0),
            id=SECONDARY_JOB,
            replace_existing=True,
        )

    def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    @property
    def running(self) -> bool:
        return self._scheduler.running

    async def run_primary(self) -> None:
        if not self.service.scheduler_enabled:
            logger.info("Scheduler is disabled. Skipping scheduled primary webhook call.")
            return
        logger.info("Scheduled primary webhook call started")
        self._last_run[PRIMARY_JOB] = datetime.now()
        response = await self.service.trigger_primary()
        logger.info("Primary webhook call completed with status: %d", response.status_code)

    async def run_secondary(self) -> None:
        if not self.service.scheduler_enabled:
            logger.info("Scheduler is disabled. Skipping scheduled secondary webhook call.")
            return
        if not self.service.secondary.configured:
            logger.warning("Secondary webhook URL is not configured. Skipping scheduled call.")
            return
        logger.info("Scheduled secondary webhook call started")
        self._last_run[SECONDARY_JOB] = datetime.now()
        response = await self.service.trigger_secondary()
        logger.info("Secondary webhook call completed with status: %d", response.status_code)

    def get_last_run(self, job_id: str) -> datetime | None:
        return self._last_run.get(job_id)

    def describe(self) -> list[dict]:
        """Registered jobs with their next and last fire times."""
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            last_run = self.get_last_run(job.id)
            jobs.append({
                "id": job.id,
                "trigger": str(job.trigger),
                "next_run_time": next_run.isoformat() if next_run else None,
                "last_run_time": last_run.isoformat() if last_run else None,
            })
        return jobs
