from bootgather.config.loader import INSTALL_CONFIG_FILE_NAME, load_install_config
from bootgather.config.models import GatherOptions, InstallConfig, Platform

__all__ = [
    "INSTALL_CONFIG_FILE_NAME",
    "GatherOptions",
    "InstallConfig",
    "Platform",
    "load_install_config",
]
