import typing as t
from enum import Enum


class DeviceEvents(Enum):
    ARRIVED = "ARRIVED"
    REMOVED = "REMOVED"


class TargetDevice(t.NamedTuple):
    """The one USB adapter model the agent cares about"""

    vendor_id: int
    product_id: int

    def __str__(self) -> str:
        return f"VID:{self.vendor_id} PID:{self.product_id}"


class DeviceHandle(t.NamedTuple):
    """Identity of one attached matching device, as seen in a registry snapshot"""

    vendor_id: int
    product_id: int
    location_id: t.Optional[int] = None
    session_id: t.Optional[int] = None
    name: str = ""

    def matches(self, target: TargetDevice) -> bool:
        return (self.vendor_id, self.product_id) == (target.vendor_id, target.product_id)


class Messages:
    class DeviceArrived(t.NamedTuple):
        device: DeviceHandle

    class DeviceRemoved(t.NamedTuple):
        device: DeviceHandle


class DeviceRegistryError(Exception):
    """The device registry could not be read or parsed"""
