"""Shared base types for the application registry."""

from .errors import (
    AppHostError,
    ConfigurationError,
    QueueFullError,
    RecordWaitTimeoutError,
    RegistryError,
)

__all__ = [
    "AppHostError",
    "ConfigurationError",
    "QueueFullError",
    "RecordWaitTimeoutError",
    "RegistryError",
]
