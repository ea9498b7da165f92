import inspect
import logging
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler


class RepeatingTask:
    '''
    Contains all the logical concepts for scheduling and executing an arbitrary repeating task
    '''

    def __init__(self, scheduler: AsyncIOScheduler, type: str, identifier: str, task_executor: Callable, interval: float):
        self.type = type
        self.identifier = identifier
        self.scheduler = scheduler
        self.ident_name = f"{self.__class__.__name__}:{self.type}:{self.identifier}"
        self.logger = logging.getLogger(__name__)
        self.logger.debug(f"Scheduling {self.ident_name} every {interval}s")

        self.interval = interval
        self.task_executor = task_executor

        self.job = self.scheduler.add_job(self.run_once,
                                          'interval',
                                          name=self.ident_name,
                                          seconds=self.interval,
                                          # A slow poll must never overlap the next one
                                          max_instances=1,
                                          coalesce=True,
                                          misfire_grace_time=max(1, int(self.interval / 2)),
                                          )

    def end_task(self):
        try:
            self.job.remove()
        except JobLookupError:
            self.logger.warning(f"Error looking up job while ending task {self.identifier}. It was probably already removed.")
        self.logger.debug(f"Task ended: {self.identifier}")

    async def run_once(self):
        try:
            res = self.task_executor()
            if inspect.isawaitable(res):
                res = await res
            self.logger.debug(f"Task complete: {res}")
        except Exception:
            # Don't allow any exceptions beyond here, as they would break the scheduler
            self.logger.exception(f"Error in task execution for {self.ident_name}")
