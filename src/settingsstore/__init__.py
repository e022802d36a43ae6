"""Settings Store - process-wide typed access to properties configuration."""

from .errors import (
    ConfigIOError,
    FormatError,
    KeyNotFoundError,
    PropertiesSyntaxError,
    ResourceLoadError,
    ResourceNotFoundError,
    SettingsError,
)
from .interfaces import IResourceLoader
from .properties import dumps_properties, load_properties, loads_properties
from .resources import DirectoryResourceLoader, PackageResourceLoader
from .store import CONFIG_PROPERTIES, Settings, get_settings, reset_settings

__version__ = "0.1.0"

__all__ = [
    "CONFIG_PROPERTIES",
    "Settings",
    "get_settings",
    "reset_settings",
    "IResourceLoader",
    "PackageResourceLoader",
    "DirectoryResourceLoader",
    "load_properties",
    "loads_properties",
    "dumps_properties",
    "SettingsError",
    "ResourceLoadError",
    "ResourceNotFoundError",
    "ConfigIOError",
    "FormatError",
    "KeyNotFoundError",
    "PropertiesSyntaxError",
]
