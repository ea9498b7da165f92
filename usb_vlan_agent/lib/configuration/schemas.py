from __future__ import annotations

from pydantic import BaseModel, Field

from usb_vlan_agent import constants


class VlanSection(BaseModel):
    interface: str = Field(default=constants.VLAN_INTERFACE, min_length=1)
    tag: int = Field(default=constants.VLAN_ID, ge=1, le=4094)
    mtu: int = Field(default=constants.VLAN_MTU, ge=576, le=9000)


class DeviceSection(BaseModel):
    vendor_id: int = Field(default=constants.TARGET_VENDOR_ID, ge=0, le=0xFFFF)
    product_id: int = Field(default=constants.TARGET_PRODUCT_ID, ge=0, le=0xFFFF)
    registry_class: str = Field(default=constants.USB_DEVICE_CLASS, min_length=1)


class TimingSection(BaseModel):
    stabilization_delay: float = Field(default=constants.STABILIZATION_DELAY, ge=0)
    poll_interval: float = Field(default=constants.POLL_INTERVAL, gt=0)


class CommandsSection(BaseModel):
    ifconfig: str = Field(default=constants.IFCONFIG)
    ipconfig: str = Field(default=constants.IPCONFIG)
    ioreg: str = Field(default=constants.IOREG)


class AgentConfig(BaseModel):
    Vlan: VlanSection = Field(default_factory=VlanSection)
    Device: DeviceSection = Field(default_factory=DeviceSection)
    Timing: TimingSection = Field(default_factory=TimingSection)
    Commands: CommandsSection = Field(default_factory=CommandsSection)
