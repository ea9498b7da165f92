#  _   _ ___ ___  __   ___      _   _  _     _                  _
# | | | / __| _ ) \ \ / / |    /_\ | \| |   /_\  __ _ ___ _ _  | |_
# | |_| \__ \ _ \  \ V /| |__ / _ \| .` |  / _ \/ _` / -_) ' \ |  _|
#  \___/|___/___/   \_/ |____/_/ \_\_|\_| /_/ \_\__, \___|_||_| \__|
#                                               |___/

__title__ = "usb_vlan_agent"
__description__ = (
    "Watches for a specific USB Ethernet adapter and provisions a tagged VLAN "
    "sub-interface with DHCP on top of it while it is attached."
)
__version__ = "1.0.0"
__status__ = "beta"
__license__ = "BSD-3-Clause"
__license_url__ = "https://opensource.org/licenses/BSD-3-Clause"
