from pydantic import ValidationError

from usb_vlan_agent import constants
from usb_vlan_agent.lib.configuration.config_file import ConfigFile
from usb_vlan_agent.lib.configuration.schemas import AgentConfig


class AgentConfigFile(ConfigFile):
    def __init__(self, config_file: str = constants.CONFIG_FILE):
        super().__init__(config_file, defaults=AgentConfig().model_dump())

    def load_or_create_defaults(self, allow_empty: bool = False):  # type: ignore[override]
        super().load_or_create_defaults(allow_empty=allow_empty)
        # Validate and normalize with schema; fall back to defaults on error
        try:
            self.data = AgentConfig(**self.data).model_dump()
        except (ValidationError, TypeError) as e:
            self.logger.warning(f"Invalid config in {self.config_file}, using defaults. Error: {e}")
            self.create_defaults()

    @property
    def config(self) -> AgentConfig:
        return AgentConfig(**self.data)


if __name__ == "__main__":
    cfg = AgentConfigFile()
    cfg.load_or_create_defaults()
    print(cfg.data)
