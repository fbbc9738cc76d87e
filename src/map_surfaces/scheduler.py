"""Deferred tasks on top of APScheduler."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler

logger = logging.getLogger(__name__)


class APSchedulerTask:
    """Handle for one scheduled callback."""

    def __init__(self, job: Job) -> None:
        self._job = job

    @property
    def job_id(self) -> str:
        return self._job.id

    def cancel(self) -> None:
        """Remove the job; a job that already ran is left alone."""
        try:
            self._job.remove()
        except JobLookupError:
            logger.debug("Job %s already ran or was removed", self._job.id)


class APSchedulerTaskScheduler:
    """TaskScheduler that runs each callback once via a ``date`` job."""

    def __init__(self, scheduler: BaseScheduler) -> None:
        self._scheduler = scheduler

    @property
    def scheduler(self) -> BaseScheduler:
        return self._scheduler

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> APSchedulerTask:
        run_date = datetime.now(timezone.utc) + timedelta(seconds=max(delay_s, 0.0))
        job = self._scheduler.add_job(
            callback,
            "date",
            run_date=run_date,
            misfire_grace_time=None,
        )
        logger.debug("Scheduled %s in %.2fs as job %s", callback, delay_s, job.id)
        return APSchedulerTask(job)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)


def create_background_scheduler() -> APSchedulerTaskScheduler:
    """Start a daemon BackgroundScheduler and wrap it."""
    scheduler = BackgroundScheduler(daemon=True)
    scheduler.start()
    logger.info("Background scheduler started")
    return APSchedulerTaskScheduler(scheduler)
