import inspect
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

# Useful bits at https://coderslegacy.com/python-apscheduler-asyncioscheduler/


class OneShotTask:
    """
    Runs task_executor once, delay seconds from now, on the scheduler's event loop.
    Cancelling before it fires removes the job without calling on_complete.
    """

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        type: str,
        identifier: str,
        task_executor: Callable,
        delay: float = 0,
        on_complete: Optional[Callable] = None,
    ):
        self.type = type
        self.identifier = identifier
        self.scheduler = scheduler
        self.ident_name = f"{self.__class__.__name__}:{self.type}:{self.identifier}"
        self.logger = logging.getLogger(__name__)
        self.logger.debug(f"Scheduling {self.ident_name} in {delay}s")

        self.start_date = datetime.now() + timedelta(seconds=delay)
        self.task_executor = task_executor
        self.on_complete = on_complete
        self.done = False

        self.job = self.scheduler.add_job(
            self.run_once,
            "date",
            name=self.ident_name,
            run_date=self.start_date,
            # Run late rather than never, e.g. after the host wakes from sleep
            misfire_grace_time=None,
        )

    def cancel(self):
        if self.done:
            return
        self.done = True
        try:
            self.job.remove()
        except JobLookupError:
            self.logger.debug(f"Job for {self.ident_name} was already removed.")

    async def run_once(self):
        if self.done:
            return
        self.done = True
        try:
            res = self.task_executor()
            if inspect.isawaitable(res):
                res = await res
            self.logger.debug(f"Task complete: {res}")
        except Exception:
            # Don't allow any exceptions beyond here, as they would break the scheduler
            self.logger.exception(f"Error in task execution for {self.ident_name}")
        finally:
            if self.on_complete is not None:
                self.on_complete()
