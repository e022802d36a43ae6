"""Process-wide configuration store.

A ``Settings`` instance holds one ``str -> str`` mapping loaded from the
bundled ``config.properties`` resource, and offers typed, defaulted lookups
over it. Alternate sources can be merged in at runtime; a merge only adds
or overwrites the keys it contains.

Usage:
    settings = get_settings()
    port = settings.get_int("server.port", "8080")
    if settings.has_value("proxy.host"):
        ...

    settings.load_from("/etc/myapp/override.properties")

Thread safety:
    Lookups never lock. Merges are serialized by a writer lock and applied
    in place, so a reader sees each key either with its old value or its
    new one, and never loses a key that existed before the merge.
"""

import logging
import os
import re
import threading
from pathlib import Path
from typing import IO, BinaryIO, Optional, Union

from .errors import (
    ConfigIOError,
    FormatError,
    KeyNotFoundError,
    ResourceLoadError,
    ResourceNotFoundError,
)
from .interfaces import IResourceLoader
from .properties import DEFAULT_ENCODING, load_properties
from .resources import PackageResourceLoader
from .utils import copy_stream, is_not_empty

logger = logging.getLogger(__name__)

CONFIG_PROPERTIES = "config.properties"

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_integer(
    key: str,
    value: Optional[str],
    low: int,
    high: int,
    type_name: str,
) -> int:
    """Strict base-10 parse: optional sign, ASCII digits, no padding.

    Anything that is not a str (None, or a non-str default) is a FormatError.
    """
    if not isinstance(value, str) or not _INTEGER.fullmatch(value):
        raise FormatError(key, value, type_name)
    number = int(value)
    if not low <= number <= high:
        raise FormatError(key, value, type_name)
    return number


class Settings:
    """In-memory configuration store with typed accessors.

    The default resource is loaded when the instance is built. Most code
    should use ``get_settings()`` rather than constructing this directly;
    direct construction is for injecting a loader at the application
    boundary or in tests.

    Args:
        loader: Resolves ``config.properties``. Defaults to the resource
            bundled with this package.
        encoding: Encoding for byte input (default ISO-8859-1).

    Raises:
        ResourceLoadError: If the default resource is missing, unreadable,
            or malformed.
    """

    def __init__(
        self,
        loader: Optional[IResourceLoader] = None,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.loader = loader or PackageResourceLoader()
        self.encoding = encoding
        self._values: dict[str, str] = {}
        self._write_lock = threading.Lock()

        entries = self._load_default()
        self._merge(entries)
        logger.info(
            f"Loaded {len(entries)} settings from {CONFIG_PROPERTIES} "
            f"({self.loader.describe()})"
        )

    def _load_default(self) -> dict[str, str]:
        try:
            with self.loader.open(CONFIG_PROPERTIES) as stream:
                return load_properties(stream, self.encoding)
        except ResourceNotFoundError as e:
            raise ResourceLoadError(
                CONFIG_PROPERTIES,
                f"{CONFIG_PROPERTIES} not found in {self.loader.describe()}",
            ) from e
        except Exception as e:
            # any loader or parse failure is fatal, including custom loaders
            raise ResourceLoadError(
                CONFIG_PROPERTIES, f"Unable to load {CONFIG_PROPERTIES}: {e}"
            ) from e

    def _merge(self, entries: dict[str, str]) -> None:
        with self._write_lock:
            self._values.update(entries)

    # ------------------------------------------------------------------
    # Loading alternate sources
    # ------------------------------------------------------------------

    def load_from(self, path: Union[str, os.PathLike]) -> None:
        """Merge a properties file into the active mapping.

        Keys not present in the file keep their current values. The file is
        fully parsed before anything is merged.

        Args:
            path: Filesystem path of the properties file.

        Raises:
            ConfigIOError: If the file cannot be opened, read or parsed.
                The active mapping is unchanged.
        """
        path = Path(path).expanduser()
        try:
            with open(path, "rb") as stream:
                entries = load_properties(stream, self.encoding)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load settings from {path}: {e}")
            raise ConfigIOError(f"Unable to load {path}: {e}") from e

        self._merge(entries)
        logger.info(f"Merged {len(entries)} settings from {path}")

    def load_from_stream(self, stream: IO, close: bool = False) -> None:
        """Merge properties read from an open stream.

        Args:
            stream: Binary or text stream, read to the end.
            close: Close the stream afterwards. By default the caller keeps
                ownership and the stream is left open.

        Raises:
            ConfigIOError: If reading or parsing fails. The active mapping
                is unchanged.
        """
        try:
            entries = load_properties(stream, self.encoding)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load settings from stream: {e}")
            raise ConfigIOError(f"Unable to load settings from stream: {e}") from e
        finally:
            if close:
                stream.close()

        self._merge(entries)
        logger.info(f"Merged {len(entries)} settings from stream")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the stored value, or ``default`` (None if not given)."""
        return self._values.get(key, default)

    def has_value(self, key: str) -> bool:
        """True if the key is present with a non-blank value."""
        return is_not_empty(self.get_string(key))

    def get_int(self, key: str, default: Optional[str] = None) -> int:
        """Return the value as a 32-bit integer.

        Args:
            key: Key to look up.
            default: Parsed in place of the stored value when the key is
                absent. Like stored values, it must be a string; a non-str
                default such as ``5`` raises ``FormatError``.

        Raises:
            FormatError: If the key is absent and there is no default, or
                the text is not a base-10 integer in 32-bit range.
        """
        value = self.get_string(key, default)
        return _parse_integer(key, value, INT_MIN, INT_MAX, "int")

    def get_long(self, key: str, default: Optional[str] = None) -> int:
        """Return the value as a 64-bit integer. See ``get_int``."""
        value = self.get_string(key, default)
        return _parse_integer(key, value, LONG_MIN, LONG_MAX, "long")

    def get_boolean(self, key: str) -> bool:
        """Return True only for a case-insensitive ``"true"``.

        Every other stored string, including ``"1"`` and ``"yes"``, is
        False.

        Raises:
            KeyNotFoundError: If the key is absent.
        """
        value = self.get_string(key)
        if value is None:
            raise KeyNotFoundError(key)
        return value.lower() == "true"

    def snapshot(self) -> dict[str, str]:
        """Shallow copy of the active mapping."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings(keys={len(self._values)}, loader={self.loader.describe()!r})"

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def dump_default_resource(self, sink: BinaryIO) -> bool:
        """Copy the raw bytes of the bundled default resource to ``sink``.

        This shows the resource as shipped, not the in-memory mapping.
        Failures are logged and reported through the return value.

        Returns:
            True on success, False if the resource could not be opened or
            copied.
        """
        try:
            stream = self.loader.open(CONFIG_PROPERTIES)
        except Exception:
            logger.exception(f"Unable to open {CONFIG_PROPERTIES} for display")
            return False
        with stream:
            return copy_stream(stream, sink)


_settings: Optional[Settings] = None
_init_error: Optional[ResourceLoadError] = None
_settings_lock = threading.Lock()


def get_settings(loader: Optional[IResourceLoader] = None) -> Settings:
    """Return the process-wide settings, loading them on first call.

    Concurrent first callers trigger exactly one load. A failed load is not
    retried; every later call raises ``ResourceLoadError`` again until
    ``reset_settings()`` is called.

    Args:
        loader: Loader used for the first initialization only. Ignored once
            the store exists.
    """
    global _settings, _init_error

    settings = _settings
    if settings is not None:
        return settings

    with _settings_lock:
        if _settings is None:
            if _init_error is not None:
                raise ResourceLoadError(
                    CONFIG_PROPERTIES,
                    f"Settings failed to initialize earlier: {_init_error}",
                ) from _init_error
            try:
                _settings = Settings(loader)
            except ResourceLoadError as e:
                _init_error = e
                raise
        return _settings


def reset_settings() -> None:
    """Forget the process-wide settings (and any initialization failure)."""
    global _settings, _init_error
    with _settings_lock:
        _settings = None
        _init_error = None
