import asyncio
import logging
from typing import Callable


# Inspired by https://www.joeltok.com/posts/2021-03-building-an-event-bus-in-python/

class EventBus():
    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.logger.debug(f"Initializing {__name__}")
        self.listeners: dict[object, set[Callable]] = {}
        self._pending: set[asyncio.Task] = set()

    def add_listener(self, event_name, listener: Callable):
        self.logger.debug(f"New listener on event {event_name}: {listener.__name__}")
        self.listeners.setdefault(event_name, set()).add(listener)

    def remove_listener(self, event_name, listener: Callable):
        self.logger.debug(f"Removing listener from event {event_name}: {listener.__name__}")
        self.listeners[event_name].discard(listener)
        if len(self.listeners[event_name]) == 0:
            del self.listeners[event_name]

    def emit(self, event_name, event=None) -> list[asyncio.Task]:
        """Schedule every listener of event_name on the running loop."""
        self.logger.debug(f"Emitting on event {event_name}: {event}")
        tasks = []
        for listener in self.listeners.get(event_name, set()):
            task = asyncio.create_task(self._dispatch(event_name, listener, event))
            # The loop only keeps weak references to tasks
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            tasks.append(task)
        return tasks

    async def _dispatch(self, event_name, listener: Callable, event):
        try:
            await listener(event)
        except Exception as e:
            self.logger.error(f"Listener {listener.__name__} failed on {event_name}: {e}")
