"""healthwatch configuration system."""

from healthwatch.config.loader import find_config_file, load_config
from healthwatch.config.models import ComponentSpec, MonitorConfig, parse_listen_address

__all__ = [
    "ComponentSpec",
    "MonitorConfig",
    "find_config_file",
    "load_config",
    "parse_listen_address",
]
