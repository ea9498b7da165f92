from usb_vlan_agent.vlan_agent import main

main()
