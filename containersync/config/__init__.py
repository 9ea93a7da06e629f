"""Configuration module for containersync."""

from .loader import ConfigLoader, load_config
from .models import ContainerConfig, SyncConfig, SyncSettings
from .properties import parse_properties, read_properties
from .resolver import ConfigResolver, RemoteTarget

__all__ = [
    "ConfigLoader",
    "ConfigResolver",
    "ContainerConfig",
    "RemoteTarget",
    "SyncConfig",
    "SyncSettings",
    "load_config",
    "parse_properties",
    "read_properties",
]
