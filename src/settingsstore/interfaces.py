"""Core interfaces for the settings store.

The store depends on a resource-loading collaborator to turn the logical
name of its default resource into a byte stream. Implementations live in
``settingsstore.resources``; test doubles in ``settingsstore.testing``.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO


class IResourceLoader(ABC):
    """Interface for resolving bundled resources by logical name."""

    @abstractmethod
    def open(self, name: str) -> BinaryIO:
        """Open a resource for binary reading.

        The caller owns the returned stream and must close it.

        Args:
            name: Logical resource name (e.g. ``"config.properties"``).

        Returns:
            A readable binary stream.

        Raises:
            ResourceNotFoundError: If no resource has that name.
            OSError: If the resource exists but cannot be read.
        """
        pass

    def describe(self) -> str:
        """Human-readable location, used in log messages."""
        return type(self).__name__
