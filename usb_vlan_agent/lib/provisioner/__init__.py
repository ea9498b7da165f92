"""
Interface Provisioner

Creates, configures and destroys the VLAN sub-interface in response to
device watcher events.

Usage:
    provisioner = InterfaceProvisioner(target, VlanDescriptor(), registry, scheduler)
    provisioner.register(event_bus)
"""

from .commands import VlanCommands
from .domain import SlotState, VlanDescriptor
from .provisioner import InterfaceProvisioner

__all__ = [
    "InterfaceProvisioner",
    "VlanCommands",
    "VlanDescriptor",
    "SlotState",
]
