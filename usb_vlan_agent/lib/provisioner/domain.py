import typing as t
from enum import Enum

from usb_vlan_agent import constants


class SlotState(Enum):
    """Lifecycle of the single adapter slot"""

    ABSENT = "absent"
    DEVICE_WAITING_FOR_INTERFACE = "device_waiting_for_interface"
    CONFIGURED = "configured"


class VlanDescriptor(t.NamedTuple):
    tag: int = constants.VLAN_ID
    mtu: int = constants.VLAN_MTU
    interface: str = constants.VLAN_INTERFACE


ALREADY_EXISTS = "already exists"
DOES_NOT_EXIST = "does not exist"
