import asyncio
import logging
import signal
import sys
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from usb_vlan_agent.__version__ import __version__
from usb_vlan_agent.lib.configuration.agent_config_file import AgentConfigFile
from usb_vlan_agent.lib.configuration.schemas import AgentConfig
from usb_vlan_agent.lib.device_watcher import DeviceWatcher, IORegistry, TargetDevice
from usb_vlan_agent.lib.event_bus import EventBus
from usb_vlan_agent.lib.logging_utils import setup_logging
from usb_vlan_agent.lib.provisioner import InterfaceProvisioner, VlanDescriptor
from usb_vlan_agent.models.command_result import CommandResult
from usb_vlan_agent.utils import run_command

logger = logging.getLogger(__name__)


class VlanAgent:
    """Owns the watcher, the provisioner and the bus that connects them."""

    def __init__(
        self,
        config: AgentConfig,
        scheduler: AsyncIOScheduler,
        event_bus: Optional[EventBus] = None,
        runner: Callable[..., CommandResult] = run_command,
    ):
        self.logger = logging.getLogger(__name__)
        self.config = config
        self.scheduler = scheduler
        self.event_bus = event_bus or EventBus()

        self.target = TargetDevice(config.Device.vendor_id, config.Device.product_id)
        self.vlan = VlanDescriptor(
            tag=config.Vlan.tag, mtu=config.Vlan.mtu, interface=config.Vlan.interface
        )
        self.registry = IORegistry(
            registry_class=config.Device.registry_class,
            ioreg=config.Commands.ioreg,
            runner=runner,
        )
        self.provisioner = InterfaceProvisioner(
            target=self.target,
            vlan=self.vlan,
            registry=self.registry,
            scheduler=scheduler,
            runner=runner,
            stabilization_delay=config.Timing.stabilization_delay,
            ifconfig=config.Commands.ifconfig,
            ipconfig=config.Commands.ipconfig,
        )
        self.watcher = DeviceWatcher(
            registry=self.registry,
            target=self.target,
            scheduler=scheduler,
            event_bus=self.event_bus,
            poll_interval=config.Timing.poll_interval,
        )

    async def start(self) -> bool:
        self.logger.info(f"USB VLAN agent {__version__} started")
        self.logger.info(
            f"Monitoring for USB Ethernet adapter {self.target}, "
            f"VLAN {self.vlan.tag} on {self.vlan.interface} (MTU {self.vlan.mtu})"
        )
        self.provisioner.register(self.event_bus)
        # Stays up without notifications rather than exiting
        return self.watcher.subscribe()


def exit_on_signal(signum, frame):
    logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
    sys.exit(0)


def install_signal_handlers():
    signal.signal(signal.SIGTERM, exit_on_signal)
    signal.signal(signal.SIGINT, exit_on_signal)


async def run_agent(config: AgentConfig):
    scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
    scheduler.start()
    agent = VlanAgent(config, scheduler)
    await agent.start()
    # Everything else happens in scheduler jobs and bus listeners
    await asyncio.Event().wait()


def main():
    setup_logging(level=logging.INFO)
    install_signal_handlers()

    config_file = AgentConfigFile()
    config_file.load_or_create_defaults()

    asyncio.run(run_agent(config_file.config))


if __name__ == "__main__":
    main()
