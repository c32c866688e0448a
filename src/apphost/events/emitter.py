"""Event emitter for registry bridge notifications.

The emitter sends each typed event to the bridge as ``(event_name,
payload)`` and passes a serialized copy to any registered fallback
handlers (log capture, embedding hosts, tests).

Usage:
    from apphost.events.emitter import EventEmitter
    from apphost.events.types import AppRemoveEvent

    emitter = EventEmitter("app_registry", bridge)
    emitter.emit(AppRemoveEvent(id="my-app"))

    unregister = register_fallback_handler(lambda event_dict: seen.append(event_dict))
    # ...
    unregister()
"""

from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime
from typing import Any

from .bridge import Bridge
from .types import AppHostEvent

# Global handlers receiving every serialized event
_fallback_handlers: list[Callable[[dict[str, Any]], None]] = []


def register_fallback_handler(handler: Callable[[dict[str, Any]], None]) -> Callable[[], None]:
    """Register a handler that receives every emitted event as a dict.

    Args:
        handler: Callable that receives serialized event dicts

    Returns:
        Unregister function to remove the handler
    """
    _fallback_handlers.append(handler)

    def unregister() -> None:
        if handler in _fallback_handlers:
            _fallback_handlers.remove(handler)

    return unregister


def clear_fallback_handlers() -> None:
    """Clear all registered fallback handlers."""
    _fallback_handlers.clear()


class EventEmitter:
    """Emits typed events to a bridge and to fallback handlers.

    Attributes:
        component: Default component name for events without one set
        bridge: Outbound channel, or None to only reach fallback handlers
    """

    def __init__(self, component: str, bridge: Bridge | None = None):
        self.component = component
        self.bridge = bridge

    def emit(self, event: AppHostEvent) -> None:
        """Send the event over the bridge, then to fallback handlers.

        Args:
            event: The typed event to emit
        """
        if not event.component:
            event.component = self.component

        if self.bridge is not None:
            self.bridge.send(event.event_name, event.payload())

        self._emit_to_fallback_handlers(self._serialize(event))

    def _emit_to_fallback_handlers(self, serialized: dict[str, Any]) -> None:
        for handler in _fallback_handlers:
            try:
                handler(serialized)
            except Exception:
                # A broken observer must not break registration
                pass

    def _serialize(self, event: AppHostEvent) -> dict[str, Any]:
        """Convert typed event to a JSON-friendly dict."""
        result = asdict(event)
        result["event_class"] = type(event).__name__
        result["event_name"] = event.event_name

        if isinstance(result.get("timestamp"), datetime):
            result["timestamp"] = result["timestamp"].isoformat()

        return result
