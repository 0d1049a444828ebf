from .manager import CONFIG_ENV_VAR, ConfigManager
from .settings import LoggingSettings, Settings

__all__ = ["CONFIG_ENV_VAR", "ConfigManager", "LoggingSettings", "Settings"]
