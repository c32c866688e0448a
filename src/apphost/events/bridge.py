"""Outbound bridge to the inspector front end.

The transport and its encoding live outside this package. The registry
only needs ``send(event_name, payload)``, fire-and-forget.
"""

from abc import ABC, abstractmethod
from typing import Any


class Bridge(ABC):
    """Fire-and-forget channel to the inspector front end."""

    @abstractmethod
    def send(self, event_name: str, payload: dict[str, Any]) -> None:
        """Send one event. Must not block."""
        pass


class NullBridge(Bridge):
    """Bridge that drops everything, for hosts with no front end attached."""

    def send(self, event_name: str, payload: dict[str, Any]) -> None:
        pass


class RecordingBridge(Bridge):
    """Bridge that keeps every sent message in memory.

    Example:
        >>> bridge = RecordingBridge()
        >>> bridge.send("APP_REMOVE", {"id": "app"})
        >>> bridge.payloads("APP_REMOVE")
        [{'id': 'app'}]
    """

    def __init__(self):
        self.messages: list[tuple[str, dict[str, Any]]] = []

    def send(self, event_name: str, payload: dict[str, Any]) -> None:
        self.messages.append((event_name, payload))

    def payloads(self, event_name: str) -> list[dict[str, Any]]:
        """Payloads sent under one event name, oldest first."""
        return [payload for name, payload in self.messages if name == event_name]

    def clear(self) -> None:
        self.messages.clear()
