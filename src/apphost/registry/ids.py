"""Record identifier allocation.

Identifiers are human-readable (usually a slug of the app name) and unique
among active records. A taken default id is deduplicated by probing
``"{default}:1"``, ``"{default}:2"``, ... and emitting ``"{default}_{n}"``
for the first free probe. Probe keys and emitted ids use different
separators; existing front ends depend on the emitted form. The probe key
stays reserved for as long as the emitted id is allocated, so repeated
collisions keep counting up.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from apphost.registry.context import RegistryContext


class IdAllocator:
    """Allocates and frees record identifiers for one registry context."""

    def __init__(self, ctx: "RegistryContext"):
        self.ctx = ctx
        self._allocated: set[str] = set()
        # emitted id -> probe key reserved with it
        self._probe_keys: dict[str, str] = {}
        self._by_app: dict[int, tuple[Any, str]] = {}

    def allocate(self, app: Any, default_id: str | None = None) -> str:
        """Return the identifier for an application handle, allocating it once.

        Args:
            app: The application handle
            default_id: Preferred identifier; without it the shared record
                counter is used (post-increment)

        Returns:
            The handle's identifier; repeated calls return the same value
        """
        cached = self._by_app.get(id(app))
        if cached is not None:
            return cached[1]

        if default_id is not None:
            record_id = default_id
        else:
            record_id = str(self.ctx.record_counter)
            self.ctx.record_counter += 1

        if default_id and record_id in self._allocated:
            count = 1
            while f"{default_id}:{count}" in self._allocated:
                count += 1
            probe_key = f"{default_id}:{count}"
            record_id = f"{default_id}_{count}"
            self._allocated.add(probe_key)
            self._probe_keys[record_id] = probe_key

        self._allocated.add(record_id)
        self._by_app[id(app)] = (app, record_id)
        return record_id

    def free(self, record_id: str) -> None:
        """Release an identifier so a later allocation can reuse it."""
        self._allocated.discard(record_id)
        probe_key = self._probe_keys.pop(record_id, None)
        if probe_key is not None:
            self._allocated.discard(probe_key)
        for key, (_, cached_id) in list(self._by_app.items()):
            if cached_id == record_id:
                del self._by_app[key]

    def cached_id(self, app: Any) -> str | None:
        cached = self._by_app.get(id(app))
        return cached[1] if cached is not None else None

    def is_allocated(self, record_id: str) -> bool:
        return record_id in self._allocated

    @property
    def allocated_ids(self) -> set[str]:
        """Emitted identifiers currently in use."""
        return self._allocated - set(self._probe_keys.values())
