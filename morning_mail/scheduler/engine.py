"""
Scheduler engine: APScheduler in-memory cron for the daily send.

Nothing is persisted; the job is registered again on every startup.
"""

from datetime import datetime

import structlog
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from morning_mail.mailer.smtp import Mailer
from morning_mail.scheduler.job import run_scheduled_send

logger = structlog.get_logger()

JOB_ID = "morning-mail"
CRON_EXPRESSION = "0 8 * * *"  # minute hour day month day_of_week
TIMEZONE = "Africa/Lagos"  # WAT, UTC+1, no DST
SCHEDULE_DESCRIPTION = "Daily at 8:00 AM WAT"


def build_trigger() -> CronTrigger:
    return CronTrigger.from_crontab(CRON_EXPRESSION, timezone=TIMEZONE)


class SchedulerEngine:
    def __init__(self, mailer: Mailer):
        self._mailer = mailer
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self):
        """Create the scheduler, register the daily job and start firing."""
        self._scheduler = AsyncIOScheduler(
            job_defaults={
                "coalesce": True,
                # caps overlapping runs at three; a send still pending from
                # yesterday does not block today's run
                "max_instances": 3,
                "misfire_grace_time": 3600,  # a late wakeup still sends
            },
        )
        self._scheduler.add_listener(self._on_job_event, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)
        self._scheduler.add_job(
            run_scheduled_send,
            trigger=build_trigger(),
            args=[self._mailer],
            id=JOB_ID,
            name="daily-morning-mail",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            "scheduler.registered",
            cron=CRON_EXPRESSION,
            timezone=TIMEZONE,
            schedule=SCHEDULE_DESCRIPTION,
            next_run=str(self.next_run_time()),
        )

    def shutdown(self):
        if self._scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("scheduler.shutdown")
        self._scheduler = None

    def get_job(self) -> Job | None:
        if not self._scheduler:
            return None
        return self._scheduler.get_job(JOB_ID)

    def next_run_time(self) -> datetime | None:
        job = self.get_job()
        return job.next_run_time if job else None

    def _on_job_event(self, event):
        if event.exception:
            logger.error("scheduler.job_failed", job_id=event.job_id, error=str(event.exception))
        else:
            logger.info("scheduler.job_executed", job_id=event.job_id)
