"""
Reads the IOKit device registry through ``ioreg``.

``ioreg -a -l -r -c <class>`` prints an XML plist: an array with one dict per
matching registry entry. Each dict carries the entry's properties
(``idVendor``, ``idProduct``, ``locationID``, ``BSD Name``...) plus
``IORegistryEntryName`` and, when it has any, ``IORegistryEntryChildren``.

A USB Ethernet adapter is laid out as::

    IOUSBHostDevice            idVendor / idProduct
      IOUSBHostInterface
        <vendor ethernet driver>
          IOEthernetInterface  BSD Name = en5
"""
import logging
import plistlib
from xml.parsers.expat import ExpatError
from typing import Callable, Iterator, Optional, Sequence

from usb_vlan_agent import constants
from usb_vlan_agent.models.command_result import CommandResult
from usb_vlan_agent.models.runcommand_error import RunCommandError
from usb_vlan_agent.utils import run_command

from .domain import DeviceHandle, DeviceRegistryError, TargetDevice

CHILDREN_KEY = "IORegistryEntryChildren"
NAME_KEY = "IORegistryEntryName"
BSD_NAME_KEY = "BSD Name"


def iter_entries(entries: Sequence[dict]) -> Iterator[dict]:
    """Depth-first, pre-order walk over entries and all of their descendants."""
    stack = list(reversed(entries))
    while stack:
        entry = stack.pop()
        yield entry
        stack.extend(reversed(entry.get(CHILDREN_KEY, [])))


def find_interface_name(device_entry: dict) -> Optional[str]:
    """First BSD Name found below device_entry, or None once the subtree is exhausted."""
    for entry in iter_entries(device_entry.get(CHILDREN_KEY, [])):
        bsd_name = entry.get(BSD_NAME_KEY)
        if isinstance(bsd_name, str) and bsd_name:
            return bsd_name
    return None


def entry_matches(entry: dict, target: TargetDevice) -> bool:
    return (
        entry.get("idVendor") == target.vendor_id
        and entry.get("idProduct") == target.product_id
    )


def find_device_entries(entries: Sequence[dict], target: TargetDevice) -> Iterator[dict]:
    """Pre-order walk that yields each matching device entry once.

    The interface and driver nodes below a USB device repeat its idVendor and
    idProduct, so a matched entry's subtree is not searched. Non-matching entries
    such as hubs are descended into.
    """
    stack = list(reversed(entries))
    while stack:
        entry = stack.pop()
        if entry_matches(entry, target):
            yield entry
            continue
        stack.extend(reversed(entry.get(CHILDREN_KEY, [])))


def handle_for(entry: dict) -> DeviceHandle:
    return DeviceHandle(
        vendor_id=entry.get("idVendor"),
        product_id=entry.get("idProduct"),
        location_id=entry.get("locationID"),
        session_id=entry.get("sessionID"),
        name=entry.get("USB Product Name") or entry.get(NAME_KEY, ""),
    )


class IORegistry:
    """Snapshots of the USB device class registry"""

    def __init__(
        self,
        registry_class: str = constants.USB_DEVICE_CLASS,
        ioreg: str = constants.IOREG,
        runner: Callable[..., CommandResult] = run_command,
    ):
        self.logger = logging.getLogger(__name__)
        self.registry_class = registry_class
        self.ioreg = ioreg
        self.runner = runner

    def snapshot(self) -> list[dict]:
        """All registry entries of registry_class, with their subtrees."""
        try:
            result = self.runner(
                [self.ioreg, "-a", "-l", "-r", "-c", self.registry_class],
                raise_on_fail=True,
            )
        except RunCommandError as e:
            raise DeviceRegistryError(f"ioreg failed: {e}") from e

        if not result.stdout.strip():
            # Nothing of that class attached
            return []
        try:
            entries = plistlib.loads(result.stdout.encode("utf-8"))
        except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
            raise DeviceRegistryError(f"Unable to parse ioreg output: {e}") from e

        if isinstance(entries, dict):
            entries = [entries]
        if not isinstance(entries, list):
            raise DeviceRegistryError(
                f"Unexpected ioreg output type: {type(entries).__name__}"
            )
        return entries

    def find_devices(self, target: TargetDevice) -> list[dict]:
        """Registry entries for every attached target device, in registry order."""
        return list(find_device_entries(self.snapshot(), target))

    def enumerate_handles(self, target: TargetDevice) -> list[DeviceHandle]:
        handles: list[DeviceHandle] = []
        for entry in self.find_devices(target):
            handle = handle_for(entry)
            if handle not in handles:
                handles.append(handle)
        return handles

    def resolve_interface_name(self, target: TargetDevice) -> Optional[str]:
        devices = self.find_devices(target)
        if not devices:
            self.logger.debug(f"No registry entry for {target}")
            return None
        bsd_name = find_interface_name(devices[0])
        if bsd_name is None:
            self.logger.debug(
                f"Registry entry {devices[0].get(NAME_KEY, '?')} for {target} exposes no {BSD_NAME_KEY}"
            )
        return bsd_name
