import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from usb_vlan_agent import constants
from usb_vlan_agent.lib.event_bus import EventBus
from usb_vlan_agent.lib.tasker.repeating_task import RepeatingTask

from .domain import DeviceEvents, DeviceHandle, DeviceRegistryError, Messages, TargetDevice
from .ioreg import IORegistry


class DeviceWatcher:
    """Polls the device registry for the target adapter and emits arrival/removal
    events on the event bus.

    Subscribing replays every already-attached device as an arrival, so a restarted
    agent picks up hardware that was plugged in while it was down.
    """

    def __init__(
        self,
        registry: IORegistry,
        target: TargetDevice,
        scheduler: AsyncIOScheduler,
        event_bus: EventBus,
        poll_interval: float = constants.POLL_INTERVAL,
    ):
        self.logger = logging.getLogger(__name__)
        self.registry = registry
        self.target = target
        self.scheduler = scheduler
        self.event_bus = event_bus
        self.poll_interval = poll_interval

        self.known_devices: list[DeviceHandle] = []
        self.poll_task: Optional[RepeatingTask] = None

    @property
    def subscribed(self) -> bool:
        return self.poll_task is not None

    def enumerate_existing(self) -> list[DeviceHandle]:
        return self.registry.enumerate_handles(self.target)

    def subscribe(self) -> bool:
        """Arm the notification channel. Returns False if it could not be armed."""
        if self.subscribed:
            return True
        try:
            existing = self.enumerate_existing()
        except DeviceRegistryError as e:
            self.logger.error(f"Unable to watch for {self.target}, device notifications disabled: {e}")
            return False

        self.logger.info(f"Watching for USB device {self.target}")
        self.known_devices = []
        self._apply(existing)

        self.poll_task = RepeatingTask(
            scheduler=self.scheduler,
            type="DeviceWatcher",
            identifier=f"{self.target.vendor_id}:{self.target.product_id}",
            task_executor=self.poll,
            interval=self.poll_interval,
        )
        return True

    def unsubscribe(self):
        if self.poll_task is not None:
            self.poll_task.end_task()
            self.poll_task = None

    def poll(self):
        try:
            current = self.enumerate_existing()
        except DeviceRegistryError as e:
            # Keep the last snapshot so a bad read doesn't look like a removal
            self.logger.warning(f"Device registry poll failed: {e}")
            return
        self._apply(current)

    def _apply(self, current: list[DeviceHandle]):
        removed = [device for device in self.known_devices if device not in current]
        arrived = [device for device in current if device not in self.known_devices]
        self.known_devices = current

        for device in removed:
            self.logger.info(f"USB device removed: {device.name or self.target}")
            self.event_bus.emit(DeviceEvents.REMOVED, Messages.DeviceRemoved(device=device))
        for device in arrived:
            self.logger.info(f"USB device arrived: {device.name or self.target}")
            self.event_bus.emit(DeviceEvents.ARRIVED, Messages.DeviceArrived(device=device))
