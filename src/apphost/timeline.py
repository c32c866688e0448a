"""Timeline layers attached to application records.

Every registered record gets the built-in timeline layers; removing an
application drops every layer it owns. Event recording on the layers is
handled by the timeline subsystem, not here.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from apphost.utils.logger import get_logger

if TYPE_CHECKING:
    from apphost.registry.context import ApplicationRecord, RegistryContext

logger = get_logger("timeline")


@dataclass(frozen=True)
class TimelineLayer:
    """A timeline lane shown for one record."""

    id: str
    label: str
    color: int
    app_id: str


BUILTIN_LAYERS: tuple[tuple[str, str, int], ...] = (
    ("mouse", "Mouse", 0xA451AF),
    ("keyboard", "Keyboard", 0x8151AF),
    ("component-event", "Component events", 0x41B883),
    ("performance", "Performance", 0x41B86A),
)


class TimelineLayers:
    """In-memory timeline collaborator keyed by application handle identity."""

    def __init__(self):
        self._layers: dict[int, tuple[Any, list[TimelineLayer]]] = {}

    def add_builtin_layers(self, record: "ApplicationRecord", ctx: "RegistryContext") -> None:
        layers = [
            TimelineLayer(id=layer_id, label=label, color=color, app_id=record.id)
            for layer_id, label, color in BUILTIN_LAYERS
        ]
        _, owned = self._layers.setdefault(id(record.app), (record.app, []))
        owned.extend(layers)
        logger.debug(f"Added {len(layers)} built-in layers for '{record.id}'")

    def remove_layers_for_app(self, app: Any, ctx: "RegistryContext") -> None:
        entry = self._layers.pop(id(app), None)
        if entry is not None:
            logger.debug(f"Removed {len(entry[1])} layers for app {app!r}")

    def layers_for(self, app: Any) -> list[TimelineLayer]:
        entry = self._layers.get(id(app))
        return list(entry[1]) if entry is not None else []
