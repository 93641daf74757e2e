"""APScheduler-backed deferred callbacks."""

from datetime import datetime, timedelta
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger


class SchedulerHandle:
    """Cancellable handle for a one-shot scheduler job."""

    def __init__(self, scheduler: BaseScheduler, job_id: str):
        self._scheduler = scheduler
        self.job_id = job_id

    def cancel(self) -> None:
        try:
            self._scheduler.remove_job(self.job_id)
        except JobLookupError:
            # Already ran or already cancelled
            pass


class SchedulerTimer:
    """
    Timer on top of an APScheduler scheduler.

    Implements Timer protocol. Each call_later adds a one-shot DateTrigger job.
    """

    def __init__(self, scheduler: BaseScheduler):
        self.scheduler = scheduler

    def call_later(self, delay: float, callback: Callable[[], None]) -> SchedulerHandle:
        run_at = datetime.now(self.scheduler.timezone) + timedelta(seconds=delay)
        job = self.scheduler.add_job(callback, DateTrigger(run_date=run_at))
        return SchedulerHandle(self.scheduler, job.id)
