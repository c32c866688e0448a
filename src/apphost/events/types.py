"""Typed bridge events for the application registry.

Events are dataclasses. Each one knows the bridge event name it travels
under and how to build the camelCase payload the front end expects.

Event Categories:
- App Lifecycle Events: a record was added or removed
- Selection Events: the selected record changed
- Snapshot Events: the full list of visible records

Usage:
    from apphost.events.types import AppRemoveEvent

    event = AppRemoveEvent(id="my-app")
    event.payload()  # {"id": "my-app"}
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar


class BridgeEvents:
    """Event names sent over the bridge."""

    APP_ADD = "APP_ADD"
    APP_SELECTED = "APP_SELECTED"
    APP_LIST = "APP_LIST"
    APP_REMOVE = "APP_REMOVE"


@dataclass
class BaseEvent:
    """Base class for all registry events.

    Attributes:
        timestamp: When the event was created
        component: The component that emitted this event
    """

    event_name: ClassVar[str] = ""

    timestamp: datetime = field(default_factory=datetime.now)
    component: str = ""

    def payload(self) -> dict[str, Any]:
        """Bridge payload for this event."""
        return {}


# -----------------------------------------------------------------------------
# App Lifecycle Events
# -----------------------------------------------------------------------------


@dataclass
class AppAddEvent(BaseEvent):
    """A record finished registration.

    Attributes:
        app_record: Minimized record projection (id, name, version, iframe)
    """

    event_name: ClassVar[str] = BridgeEvents.APP_ADD

    app_record: dict[str, Any] = field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        return {"appRecord": self.app_record}


@dataclass
class AppRemoveEvent(BaseEvent):
    """A record was removed.

    Attributes:
        id: Identifier of the removed record
    """

    event_name: ClassVar[str] = BridgeEvents.APP_REMOVE

    id: str = ""

    def payload(self) -> dict[str, Any]:
        return {"id": self.id}


# -----------------------------------------------------------------------------
# Selection Events
# -----------------------------------------------------------------------------


@dataclass
class AppSelectedEvent(BaseEvent):
    """The selected record changed.

    Attributes:
        id: Identifier of the newly selected record
        last_inspected_component_id: Component last inspected in that record
    """

    event_name: ClassVar[str] = BridgeEvents.APP_SELECTED

    id: str = ""
    last_inspected_component_id: str | None = None

    def payload(self) -> dict[str, Any]:
        return {"id": self.id, "lastInspectedComponentId": self.last_inspected_component_id}


# -----------------------------------------------------------------------------
# Snapshot Events
# -----------------------------------------------------------------------------


@dataclass
class AppListEvent(BaseEvent):
    """Snapshot of every record not hidden from the inspector.

    Attributes:
        apps: Minimized record projections in registration order
    """

    event_name: ClassVar[str] = BridgeEvents.APP_LIST

    apps: list[dict[str, Any]] = field(default_factory=list)

    def payload(self) -> dict[str, Any]:
        return {"apps": self.apps}


AppHostEvent = AppAddEvent | AppRemoveEvent | AppSelectedEvent | AppListEvent
