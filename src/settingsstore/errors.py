"""Error taxonomy for the settings store.

Every error raised by this package derives from ``SettingsError`` and also
from the closest built-in exception, so callers can catch either the
package-specific kind or the familiar built-in one.
"""

from typing import Optional


class SettingsError(Exception):
    """Base class for all settings store errors."""


class ResourceLoadError(SettingsError, RuntimeError):
    """The bundled default resource could not be loaded.

    Raised when the store is first initialized. The store never presents
    itself as initialized-but-empty, so this error is fatal to the caller.
    """

    def __init__(self, resource: str, message: Optional[str] = None):
        self.resource = resource
        super().__init__(message or f"Unable to load {resource}")


class ResourceNotFoundError(SettingsError, FileNotFoundError):
    """A resource loader could not resolve a logical resource name."""

    def __init__(self, name: str, location: Optional[str] = None):
        self.name = name
        self.location = location
        where = f" in {location}" if location else ""
        super().__init__(f"Resource not found: {name}{where}")


class ConfigIOError(SettingsError, OSError):
    """Reading or parsing an alternate configuration source failed.

    The active mapping is left unchanged when this is raised.
    """


class FormatError(SettingsError, ValueError):
    """A value (or default) does not parse as the requested numeric type."""

    def __init__(self, key: str, value: Optional[str], type_name: str):
        self.key = key
        self.value = value
        self.type_name = type_name
        if value is None:
            message = f"Cannot parse missing value of {key!r} as {type_name}"
        else:
            message = f"Value {value!r} of {key!r} is not a valid {type_name}"
        super().__init__(message)


class KeyNotFoundError(SettingsError, KeyError):
    """A lookup that requires the key to be present found nothing."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key not found: {self.key}"


class PropertiesSyntaxError(SettingsError, ValueError):
    """Malformed properties input (bad ``\\uXXXX`` escape)."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
