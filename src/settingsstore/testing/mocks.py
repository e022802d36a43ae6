"""Mock implementations for testing."""

import io
import threading
import time
from typing import BinaryIO, Optional, Union

from ..errors import ResourceNotFoundError
from ..interfaces import IResourceLoader


class MockResourceLoader(IResourceLoader):
    """In-memory resource loader.

    Counts every ``open`` call so tests can assert how many times the
    default resource was loaded. An optional delay widens race windows
    in concurrency tests.
    """

    def __init__(
        self,
        resources: Optional[dict[str, Union[bytes, str]]] = None,
        delay_ms: float = 0,
    ):
        self.resources: dict[str, bytes] = {}
        for name, content in (resources or {}).items():
            self.add(name, content)
        self.delay_ms = delay_ms
        self._open_count = 0
        self._lock = threading.Lock()

    def add(self, name: str, content: Union[bytes, str]) -> None:
        """Register or replace a resource."""
        if isinstance(content, str):
            content = content.encode("latin-1")
        self.resources[name] = content

    @property
    def open_count(self) -> int:
        with self._lock:
            return self._open_count

    def open(self, name: str) -> BinaryIO:
        with self._lock:
            self._open_count += 1
        if self.delay_ms > 0:
            time.sleep(self.delay_ms / 1000)
        if name not in self.resources:
            raise ResourceNotFoundError(name, "memory")
        return io.BytesIO(self.resources[name])

    def describe(self) -> str:
        return "memory"


class FailingResourceLoader(IResourceLoader):
    """Loader whose every ``open`` raises the given error."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or OSError("Simulated read failure")
        self.open_count = 0

    def open(self, name: str) -> BinaryIO:
        self.open_count += 1
        raise self.error


class FailingStream(io.RawIOBase):
    """Binary stream that serves some bytes, then raises on read or write.

    Args:
        data: Bytes served before failing on read.
        fail_write: Raise on every write instead.
    """

    def __init__(self, data: bytes = b"", fail_write: bool = False):
        self._buffer = io.BytesIO(data)
        self.fail_write = fail_write
        self.written = bytearray()

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        chunk = self._buffer.read(len(b))
        if not chunk:
            raise OSError("Simulated read failure")
        b[:len(chunk)] = chunk
        return len(chunk)

    def write(self, b) -> int:
        if self.fail_write:
            raise OSError("Simulated write failure")
        self.written.extend(b)
        return len(b)
