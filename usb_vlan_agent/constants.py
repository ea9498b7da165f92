import os

RUNTIME_ENV = os.environ.get("RUNTIME_ENV", "production")
IS_DEV = RUNTIME_ENV == "development"

CONFIG_DIR = "/etc/usb-vlan-agent"
CONFIG_FILE = os.environ.get(
    "USB_VLAN_AGENT_CONFIG", os.path.join(CONFIG_DIR, "config.toml")
)

# VLAN definition
VLAN_INTERFACE = "vlan10"
VLAN_ID = 10
# 1496 used to work, 1450 is what the upstream firewall currently tolerates
VLAN_MTU = 1450

# WisdPi USB 5G Ethernet (idVendor=0x0BDA, idProduct=0x8157)
# To find another adapter's IDs: ioreg -p IOUSB -l -w 0 | grep -A 30 "Ethernet"
TARGET_VENDOR_ID = 3034
TARGET_PRODUCT_ID = 33111
USB_DEVICE_CLASS = "IOUSBHostDevice"

# Seconds between device registry polls
POLL_INTERVAL = 1.0
# Seconds to wait after an arrival so the driver can expose the interface
STABILIZATION_DELAY = 2.0

IFCONFIG = "/sbin/ifconfig"
IPCONFIG = "/usr/sbin/ipconfig"
IOREG = "/usr/sbin/ioreg"
