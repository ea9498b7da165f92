from usb_vlan_agent import constants
from usb_vlan_agent.lib.configuration.agent_config_file import AgentConfigFile
from usb_vlan_agent.lib.configuration.config_file import ConfigFile


def test_missing_file_uses_build_defaults(tmp_path):
    acf = AgentConfigFile(str(tmp_path / "config.toml"))
    acf.load_or_create_defaults()

    config = acf.config
    assert config.Vlan.interface == constants.VLAN_INTERFACE
    assert config.Vlan.tag == 10
    assert config.Vlan.mtu == 1450
    assert config.Device.vendor_id == 3034
    assert config.Device.product_id == 33111
    assert config.Timing.stabilization_delay == 2.0
    assert config.Timing.poll_interval == 1.0
    assert config.Commands.ifconfig == "/sbin/ifconfig"
    # Defaults are never written to disk
    assert not (tmp_path / "config.toml").exists()


def test_partial_file_is_merged_with_defaults(tmp_path):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(
        """
[Vlan]
tag = 20
interface = "vlan20"

[Device]
vendor_id = 2965
"""
    )

    acf = AgentConfigFile(str(cfg_file))
    acf.load_or_create_defaults()

    config = acf.config
    assert config.Vlan.tag == 20
    assert config.Vlan.interface == "vlan20"
    assert config.Vlan.mtu == 1450
    assert config.Device.vendor_id == 2965
    assert config.Device.product_id == 33111


def test_invalid_values_fall_back_to_defaults(tmp_path):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(
        """
[Vlan]
tag = 5000
mtu = "big"
"""
    )

    acf = AgentConfigFile(str(cfg_file))
    acf.load_or_create_defaults()

    assert acf.data["Vlan"]["tag"] == 10
    assert acf.data["Vlan"]["mtu"] == 1450


def test_undecodable_file_falls_back_to_defaults(tmp_path):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text("[Vlan\ntag = ")

    acf = AgentConfigFile(str(cfg_file))
    acf.load_or_create_defaults()

    assert acf.config.Vlan.tag == 10


def test_empty_file_uses_defaults(tmp_path):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text("")

    cf = ConfigFile(str(cfg_file), defaults={"Vlan": {"tag": 10}})
    cf.load_or_create_defaults()

    assert cf.data == {"Vlan": {"tag": 10}}
    assert cfg_file.read_text() == ""
