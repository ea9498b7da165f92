from usb_vlan_agent import constants

from .domain import VlanDescriptor


class VlanCommands:
    """Builds the ifconfig/ipconfig argument lists for one VLAN interface"""

    def __init__(
        self,
        vlan: VlanDescriptor,
        ifconfig: str = constants.IFCONFIG,
        ipconfig: str = constants.IPCONFIG,
    ):
        self.vlan = vlan
        self.ifconfig = ifconfig
        self.ipconfig = ipconfig

    def create(self) -> list[str]:
        return [self.ifconfig, self.vlan.interface, "create"]

    def bind(self, physical_interface: str) -> list[str]:
        return [
            self.ifconfig,
            self.vlan.interface,
            "vlan",
            str(self.vlan.tag),
            "vlandev",
            physical_interface,
        ]

    def up(self) -> list[str]:
        return [self.ifconfig, self.vlan.interface, "up"]

    def dhcp(self) -> list[str]:
        return [self.ipconfig, "set", self.vlan.interface, "DHCP"]

    def mtu(self) -> list[str]:
        return [self.ifconfig, self.vlan.interface, "mtu", str(self.vlan.mtu)]

    def destroy(self) -> list[str]:
        return [self.ifconfig, self.vlan.interface, "destroy"]

    def provisioning_sequence(self, physical_interface: str) -> list[list[str]]:
        return [
            self.create(),
            self.bind(physical_interface),
            self.up(),
            self.dhcp(),
            self.mtu(),
        ]
