import logging
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from usb_vlan_agent import constants
from usb_vlan_agent.lib.device_watcher import (
    DeviceEvents,
    DeviceRegistryError,
    IORegistry,
    Messages,
    TargetDevice,
)
from usb_vlan_agent.lib.event_bus import EventBus
from usb_vlan_agent.lib.tasker.one_shot_task import OneShotTask
from usb_vlan_agent.models.command_result import CommandResult
from usb_vlan_agent.utils import run_command

from .commands import VlanCommands
from .domain import ALREADY_EXISTS, DOES_NOT_EXIST, SlotState, VlanDescriptor


class InterfaceProvisioner:
    """Keeps one VLAN interface in step with the presence of the target adapter.

    Arrival moves the slot to DEVICE_WAITING_FOR_INTERFACE and schedules
    configuration after the stabilization delay. Configuration resolves the
    adapter's interface name and runs the five-step provisioning sequence unless
    that name is already configured. Removal destroys the VLAN interface and
    forgets every configured name.
    """

    def __init__(
        self,
        target: TargetDevice,
        vlan: VlanDescriptor,
        registry: IORegistry,
        scheduler: AsyncIOScheduler,
        runner: Callable[..., CommandResult] = run_command,
        stabilization_delay: float = constants.STABILIZATION_DELAY,
        ifconfig: str = constants.IFCONFIG,
        ipconfig: str = constants.IPCONFIG,
    ):
        self.logger = logging.getLogger(__name__)
        self.target = target
        self.vlan = vlan
        self.registry = registry
        self.scheduler = scheduler
        self.runner = runner
        self.stabilization_delay = stabilization_delay
        self.commands = VlanCommands(vlan, ifconfig=ifconfig, ipconfig=ipconfig)

        self.state = SlotState.ABSENT
        self.configured_interfaces: set[str] = set()
        self.pending_task: Optional[OneShotTask] = None

    def register(self, event_bus: EventBus):
        event_bus.add_listener(DeviceEvents.ARRIVED, self.handle_arrival)
        event_bus.add_listener(DeviceEvents.REMOVED, self.handle_removal)

    async def handle_arrival(self, event: Messages.DeviceArrived):
        if not event.device.matches(self.target):
            self.logger.debug(f"Ignoring arrival of unrelated device {event.device}")
            return
        if self.pending_task is not None:
            self.logger.debug("Configuration already scheduled, ignoring duplicate arrival")
            return

        self.logger.info(
            f"Target USB Ethernet adapter arrived ({self.target}), "
            f"configuring in {self.stabilization_delay}s"
        )
        self.state = SlotState.DEVICE_WAITING_FOR_INTERFACE
        self.pending_task = OneShotTask(
            scheduler=self.scheduler,
            type="ConfigureVlan",
            identifier=self.vlan.interface,
            task_executor=self.configure_after_stabilization,
            delay=self.stabilization_delay,
            on_complete=self._clear_pending,
        )

    async def handle_removal(self, event: Messages.DeviceRemoved):
        if not event.device.matches(self.target):
            self.logger.debug(f"Ignoring removal of unrelated device {event.device}")
            return
        self.logger.info(f"Target USB Ethernet adapter removed ({self.target})")
        if self.pending_task is not None:
            self.pending_task.cancel()
            self.pending_task = None
        self.teardown()

    def _clear_pending(self):
        self.pending_task = None

    def resolve_interface_name(self) -> Optional[str]:
        try:
            return self.registry.resolve_interface_name(self.target)
        except DeviceRegistryError as e:
            self.logger.error(f"Unable to read device registry: {e}")
            return None

    def configure_after_stabilization(self) -> Optional[str]:
        """Resolve the adapter's interface and provision the VLAN on it if needed.

        Returns the resolved interface name, or None if none could be found.
        There is no retry; the next arrival event tries again.
        """
        interface = self.resolve_interface_name()
        if interface is None:
            self.logger.warning(
                f"No network interface found for USB device {self.target}, giving up until it is reattached"
            )
            self.state = SlotState.ABSENT
            return None

        if interface in self.configured_interfaces:
            self.logger.info(f"{self.vlan.interface} already configured on {interface}")
            self.state = SlotState.CONFIGURED
            return interface

        self.logger.info(
            f"Interface {interface} identified as target USB Ethernet adapter ({self.target})"
        )
        self.provision(interface)
        self.configured_interfaces.add(interface)
        self.state = SlotState.CONFIGURED
        return interface

    def provision(self, interface: str):
        """Run create, bind, up, dhcp and mtu for the VLAN on top of interface.

        Every step is attempted even when an earlier one fails. If a step reports
        that the VLAN interface already exists, it is destroyed and the whole
        sequence is run exactly once more.
        """
        self.logger.info(f"Configuring {self.vlan.interface} for interface: {interface}")
        sequence = self.commands.provisioning_sequence(interface)

        for cmd in sequence:
            result = self.runner(cmd)
            if result.success:
                self.logger.info(f"Success: {' '.join(cmd)}")
                continue

            self.logger.error(f"Error executing: {' '.join(cmd)}")
            self.logger.error(f"Error output: {result.stderr.strip()}")
            if result.error_contains(ALREADY_EXISTS):
                self.logger.warning(
                    f"{self.vlan.interface} already exists, destroying and recreating..."
                )
                self.runner(self.commands.destroy())
                self._retry(sequence)
                break

        self.logger.info(f"VLAN configuration complete for {interface}")

    def _retry(self, sequence: list[list[str]]):
        for cmd in sequence:
            result = self.runner(cmd)
            if result.success:
                self.logger.info(f"Success: {' '.join(cmd)}")
            else:
                self.logger.error(f"Retry failed: {' '.join(cmd)}")
                self.logger.error(f"Error: {result.stderr.strip()}")

    def teardown(self):
        """Destroy the VLAN interface and forget every configured interface."""
        cmd = self.commands.destroy()
        result = self.runner(cmd)
        error = result.stderr.strip()
        if result.success:
            self.logger.info(f"Destroyed {self.vlan.interface}")
        elif not error or DOES_NOT_EXIST in error:
            self.logger.info(f"{self.vlan.interface} was not present, nothing to destroy")
        else:
            self.logger.error(f"Error executing: {' '.join(cmd)}")
            self.logger.error(f"Error output: {error}")

        self.configured_interfaces.clear()
        self.state = SlotState.ABSENT
