"""
Device Watcher

Watches the IOKit USB device registry for one adapter model (vendor/product ID)
and emits DeviceEvents.ARRIVED / DeviceEvents.REMOVED on an EventBus.
"""

from .domain import DeviceEvents, DeviceHandle, DeviceRegistryError, Messages, TargetDevice
from .ioreg import IORegistry, find_interface_name
from .watcher import DeviceWatcher

__all__ = [
    "DeviceWatcher",
    "IORegistry",
    "find_interface_name",
    "DeviceEvents",
    "DeviceHandle",
    "DeviceRegistryError",
    "Messages",
    "TargetDevice",
]
