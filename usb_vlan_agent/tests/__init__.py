"""
Test package for usb-vlan-agent

Everything here runs against a fake command runner and fake registry output;
no test touches real hardware, ifconfig or ioreg.
"""
