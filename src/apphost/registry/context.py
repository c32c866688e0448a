"""Record registry state.

:class:`RegistryContext` is the authoritative, process-wide collection of
active application records plus the selection pointer, the shared record
counter and the collaborators the registration pipeline talks to.

Nothing here writes onto application handles or component instances.
Per-handle and per-instance state lives in identity-keyed side tables
owned by the context.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from apphost.backends.base import BackendAdapter, BackendOptions, HostDocument
from apphost.backends.factory import BackendFactory
from apphost.events import Bridge, EventEmitter, NullBridge
from apphost.registry.ids import IdAllocator
from apphost.registry.waiters import WaiterRegistry
from apphost.timeline import TimelineLayers
from apphost.utils.config import RegistrySettings, get_registry_settings
from apphost.utils.queue import JobQueue

V = TypeVar("V")


class IdentityMap(Generic[V]):
    """Mapping keyed by object identity, for unhashable or externally owned keys."""

    def __init__(self):
        self._items: dict[int, tuple[Any, V]] = {}

    def get(self, key: Any, default: V | None = None) -> V | None:
        item = self._items.get(id(key))
        return item[1] if item is not None else default

    def set(self, key: Any, value: V) -> None:
        self._items[id(key)] = (key, value)

    def pop(self, key: Any, default: V | None = None) -> V | None:
        item = self._items.pop(id(key), None)
        return item[1] if item is not None else default

    def keys(self) -> Iterator[Any]:
        return (key for key, _ in self._items.values())

    def __contains__(self, key: Any) -> bool:
        return id(key) in self._items

    def __len__(self) -> int:
        return len(self._items)


@dataclass(eq=False)
class AppDescriptor:
    """Identity and metadata for one application instance.

    Descriptors are compared by identity: registering the same descriptor
    object twice yields one record.

    :param app: The application handle
    :param version: Runtime version string reported by the application
    :param meta: Free-form metadata copied onto the record
    :param types: Framework type references supplied by the application
    """

    app: Any
    version: str
    meta: dict[str, Any] | None = None
    types: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class ApplicationRecord:
    """The tracked representation of one registered application instance."""

    id: str
    name: str
    descriptor: AppDescriptor
    backend: BackendAdapter
    root_instance: Any
    last_inspected_component_id: str | None = None
    instance_map: dict[str, Any] = field(default_factory=dict)
    perf_group_ids: dict[str, Any] = field(default_factory=dict)
    iframe: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def app(self) -> Any:
        return self.descriptor.app

    @property
    def version(self) -> str:
        return self.descriptor.version

    @property
    def root_instance_id(self) -> str:
        return f"{self.id}:root"


class RegistryContext:
    """Process-wide registry state and collaborators.

    Attributes:
        app_records: Active records in registration order
        current_app_record: Selected record, always one of app_records
        current_inspected_component_id: Mirror of the selected record's last inspected id
        record_counter: Shared monotonic seed for names and fallback identifiers
        ids: Identifier allocator
        waiters: Pending waits for records not yet registered
        jobs: Serialized registration queue
        backends: Available backend options, matched in order
        enabled_backends: Activated adapters keyed by their options
        host_document: Document that marks a record as not living in an iframe
    """

    def __init__(
        self,
        bridge: Bridge | None = None,
        *,
        timeline: TimelineLayers | None = None,
        backends: list[BackendOptions] | None = None,
        host_document: HostDocument | None = None,
        settings: RegistrySettings | None = None,
    ):
        self.settings = settings if settings is not None else get_registry_settings()
        self.bridge = bridge if bridge is not None else NullBridge()
        self.timeline = timeline if timeline is not None else TimelineLayers()
        self.backends = list(backends) if backends is not None else BackendFactory.available_backends()
        self.host_document = host_document

        self.app_records: list[ApplicationRecord] = []
        self.current_app_record: ApplicationRecord | None = None
        self.current_inspected_component_id: str | None = None
        self.record_counter = 0

        self.enabled_backends: dict[BackendOptions, BackendAdapter] = {}
        self.records_by_app: IdentityMap[ApplicationRecord] = IdentityMap()
        self.instance_uids: IdentityMap[str] = IdentityMap()

        self.ids = IdAllocator(self)
        self.waiters = WaiterRegistry(self)
        self.jobs = JobQueue(max_depth=self.settings.max_queue_depth)
        self.emitter = EventEmitter("app_registry", self.bridge)

    def find_record(self, app: Any) -> ApplicationRecord | None:
        """Published record for an application handle, if any."""
        for record in self.app_records:
            if record.app is app:
                return record
        return None

    def find_record_by_descriptor(self, descriptor: AppDescriptor) -> ApplicationRecord | None:
        for record in self.app_records:
            if record.descriptor is descriptor:
                return record
        return None

    def get_instance_uid(self, instance: Any) -> str | None:
        """Composite instance id tagged onto a component instance."""
        return self.instance_uids.get(instance)
