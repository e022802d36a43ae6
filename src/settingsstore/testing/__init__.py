"""Testing utilities for the settings store."""

from .mocks import (
    MockResourceLoader,
    FailingResourceLoader,
    FailingStream,
)

__all__ = [
    "MockResourceLoader",
    "FailingResourceLoader",
    "FailingStream",
]
