"""Registry Event System.

Typed dataclass events for everything the registry reports to the
inspector front end, plus the bridge they travel over.

Architecture:
    - Events are typed dataclasses defined in types.py
    - EventEmitter in emitter.py sends them to the bridge and fallback handlers
    - Bridge implementations live in bridge.py

Usage:
    from apphost.events import EventEmitter, AppSelectedEvent

    emitter = EventEmitter("app_registry", bridge)
    emitter.emit(AppSelectedEvent(id="app", last_inspected_component_id=None))
"""

from .bridge import Bridge, NullBridge, RecordingBridge
from .emitter import (
    EventEmitter,
    clear_fallback_handlers,
    register_fallback_handler,
)
from .types import (
    AppAddEvent,
    AppHostEvent,
    AppListEvent,
    AppRemoveEvent,
    AppSelectedEvent,
    BaseEvent,
    BridgeEvents,
)

__all__ = [
    # Bridge
    "Bridge",
    "NullBridge",
    "RecordingBridge",
    # Emission
    "EventEmitter",
    "clear_fallback_handlers",
    "register_fallback_handler",
    # Types
    "AppAddEvent",
    "AppHostEvent",
    "AppListEvent",
    "AppRemoveEvent",
    "AppSelectedEvent",
    "BaseEvent",
    "BridgeEvents",
]
