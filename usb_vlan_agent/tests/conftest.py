"""
Pytest configuration and shared fixtures for usb-vlan-agent tests
"""
import logging
import plistlib

import pytest

from usb_vlan_agent.lib.device_watcher import DeviceHandle, Messages, TargetDevice
from usb_vlan_agent.lib.logging_utils import setup_logging
from usb_vlan_agent.lib.provisioner import InterfaceProvisioner, VlanDescriptor
from usb_vlan_agent.models.command_result import CommandResult
from usb_vlan_agent.models.runcommand_error import RunCommandError

VENDOR_ID = 3034
PRODUCT_ID = 33111


class FakeRunner:
    """Stands in for run_command. Every command succeeds unless told otherwise."""

    def __init__(self):
        self.calls: list[str] = []
        self.failures: dict[str, list[str]] = {}
        self.outputs: dict[str, str] = {}

    def fail(self, command_line: str, stderr: str, times: int = 1):
        self.failures.setdefault(command_line, []).extend([stderr] * times)

    def output(self, command_line: str, stdout: str):
        self.outputs[command_line] = stdout

    def __call__(self, cmd, raise_on_fail=False):
        command_line = " ".join(cmd)
        self.calls.append(command_line)
        pending = self.failures.get(command_line)
        if pending:
            result = CommandResult("", pending.pop(0), 1, cmd)
        else:
            result = CommandResult(self.outputs.get(command_line, ""), "", 0, cmd)
        if raise_on_fail and not result.success:
            raise RunCommandError(result.stderr, result.return_code)
        return result


class FakeRegistry:
    def __init__(self, interface_name=None):
        self.interface_name = interface_name
        self.lookups = 0

    def resolve_interface_name(self, target):
        self.lookups += 1
        return self.interface_name


def usb_device(vendor_id=VENDOR_ID, product_id=PRODUCT_ID, bsd_name="en5", location_id=0x01100000, session_id=1000):
    """A registry entry shaped like ioreg's output for a USB Ethernet adapter.

    As on a real Mac, the interface and driver nodes repeat the device's IDs.
    """
    ethernet = {"IORegistryEntryName": "en", "IOObjectClass": "IOEthernetInterface"}
    if bsd_name is not None:
        ethernet["BSD Name"] = bsd_name
    return {
        "IORegistryEntryName": "USB 5G Ethernet",
        "IOObjectClass": "IOUSBHostDevice",
        "USB Product Name": "USB 5G Ethernet",
        "idVendor": vendor_id,
        "idProduct": product_id,
        "locationID": location_id,
        "sessionID": session_id,
        "IORegistryEntryChildren": [
            {
                "IORegistryEntryName": "IOUSBHostInterface@0",
                "IOObjectClass": "IOUSBHostInterface",
                "idVendor": vendor_id,
                "idProduct": product_id,
                "bInterfaceNumber": 0,
                "IORegistryEntryChildren": [
                    {
                        "IORegistryEntryName": "AppleUserUSBEthernet",
                        "idVendor": vendor_id,
                        "idProduct": product_id,
                        "IORegistryEntryChildren": [ethernet],
                    }
                ],
            }
        ],
    }


def ioreg_output(*entries) -> str:
    return plistlib.dumps(list(entries)).decode("utf-8")


def arrived(vendor_id=VENDOR_ID, product_id=PRODUCT_ID):
    return Messages.DeviceArrived(device=DeviceHandle(vendor_id, product_id, 0x01100000, 1000))


def removed(vendor_id=VENDOR_ID, product_id=PRODUCT_ID):
    return Messages.DeviceRemoved(device=DeviceHandle(vendor_id, product_id, 0x01100000, 1000))


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Setup logging for tests with appropriate levels"""
    setup_logging(level=logging.DEBUG)


@pytest.fixture
def target() -> TargetDevice:
    return TargetDevice(VENDOR_ID, PRODUCT_ID)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry("en5")


@pytest.fixture
def provisioner(target, fake_runner, fake_registry, mocker) -> InterfaceProvisioner:
    return InterfaceProvisioner(
        target=target,
        vlan=VlanDescriptor(),
        registry=fake_registry,
        scheduler=mocker.Mock(),
        runner=fake_runner,
        stabilization_delay=2.0,
        ifconfig="ifconfig",
        ipconfig="ipconfig",
    )
