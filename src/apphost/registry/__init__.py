"""Application record registry.

Public entry points for registering, looking up, selecting, listing and
removing application records.
"""

from apphost.registry.apps import (
    get_app_record,
    get_app_record_id,
    map_app_record,
    register_app,
    register_legacy_apps,
    remove_app,
    select_app,
    send_apps,
    wait_for_apps_registration,
)
from apphost.registry.context import (
    AppDescriptor,
    ApplicationRecord,
    IdentityMap,
    RegistryContext,
)
from apphost.registry.ids import IdAllocator
from apphost.registry.waiters import Waiter, WaiterRegistry

__all__ = [
    "AppDescriptor",
    "ApplicationRecord",
    "IdAllocator",
    "IdentityMap",
    "RegistryContext",
    "Waiter",
    "WaiterRegistry",
    "get_app_record",
    "get_app_record_id",
    "map_app_record",
    "register_app",
    "register_legacy_apps",
    "remove_app",
    "select_app",
    "send_apps",
    "wait_for_apps_registration",
]
