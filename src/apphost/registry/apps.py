"""Application registration, selection and removal.

Registration runs as jobs on the context's serialized queue, so the shared
record counter, the identifier set and the record list are never observed
half-updated by another registration. Selection, listing and removal run
directly; removal waits on the waiter registry for registrations that
have started but not yet published their record.

Usage:
    ctx = RegistryContext(bridge, backends=[BackendOptions(3, adapter_class=MyBackend)])
    await register_app(AppDescriptor(app=app, version="3.4.1"), ctx)
    await send_apps(ctx)
    await remove_app(app, ctx)
"""

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

from slugify import slugify

from apphost.backends.base import BackendAdapter
from apphost.backends.factory import BackendFactory
from apphost.events import AppAddEvent, AppListEvent, AppRemoveEvent, AppSelectedEvent
from apphost.registry.context import AppDescriptor, ApplicationRecord, RegistryContext
from apphost.utils.logger import get_logger

logger = get_logger("app_registry")


async def register_app(descriptor: AppDescriptor, ctx: RegistryContext) -> None:
    """Queue registration of an application and wait for that job to finish.

    Registering a descriptor that already has a record, or one no backend
    handles, completes without creating anything.

    Raises:
        QueueFullError: If the registration queue is at its depth cap
    """
    return await ctx.jobs.queue(lambda: _register_app_job(descriptor, ctx))


async def _register_app_job(descriptor: AppDescriptor, ctx: RegistryContext) -> None:
    if ctx.find_record_by_descriptor(descriptor) is not None:
        return

    options = BackendFactory.find_backend_options(descriptor.version, ctx.backends)
    if options is None:
        logger.debug(f"No backend for app version '{descriptor.version}', skipping registration")
        return

    backend = BackendFactory.get_backend(options, ctx)
    await _create_app_record(descriptor, backend, ctx)


async def _create_app_record(
    descriptor: AppDescriptor, backend: BackendAdapter, ctx: RegistryContext
) -> None:
    app = descriptor.app
    root_instance = await backend.get_app_root_instance(app)
    if root_instance is None:
        logger.warning(f"No root instance found for app {app!r}, it might have been unmounted")
        return

    ctx.record_counter += 1
    name = await backend.get_app_record_name(app, str(ctx.record_counter))
    record_id = ctx.ids.allocate(app, slugify(name) or None)

    elements = await backend.get_component_root_elements(root_instance)

    record = ApplicationRecord(
        id=record_id,
        name=name,
        descriptor=descriptor,
        backend=backend,
        root_instance=root_instance,
        iframe=_iframe_origin(elements, ctx),
        meta=dict(descriptor.meta or {}),
    )
    ctx.records_by_app.set(app, record)
    root_id = record.root_instance_id
    record.instance_map[root_id] = root_instance
    ctx.instance_uids.set(root_instance, root_id)

    ctx.timeline.add_builtin_layers(record, ctx)

    ctx.app_records.append(record)

    if backend.options.setup_app is not None:
        backend.options.setup_app(backend, record)

    await backend.register_application(app)

    # remove_app may have run while the backend was registering
    if record in ctx.app_records:
        ctx.emitter.emit(AppAddEvent(app_record=map_app_record(record)))
        logger.key_info(f"Registered app '{record.name}' as '{record.id}'")

    await ctx.waiters.resolve(app, record)

    # A woken waiter may already have removed the record
    if record not in ctx.app_records:
        return

    if ctx.current_app_record is None and not await _is_hidden(record):
        await select_app(record, ctx)


def _iframe_origin(elements: list[Any], ctx: RegistryContext) -> str | None:
    """Path of the first element's document when it is not the host document."""
    if not elements:
        return None
    document = elements[0].owner_document
    if document is None or ctx.host_document is None or document is ctx.host_document:
        return None
    return document.path


async def _is_hidden(record: ApplicationRecord) -> bool:
    options = await record.backend.get_component_devtools_options(record.root_instance)
    return bool(options and options.get("hide"))


async def select_app(record: ApplicationRecord, ctx: RegistryContext) -> None:
    """Make a record the selected one and tell the front end."""
    ctx.current_app_record = record
    ctx.current_inspected_component_id = record.last_inspected_component_id
    ctx.emitter.emit(
        AppSelectedEvent(id=record.id, last_inspected_component_id=record.last_inspected_component_id)
    )


def map_app_record(record: ApplicationRecord) -> dict[str, Any]:
    """Minimized projection of a record sent to the front end."""
    return {
        "id": record.id,
        "name": record.name,
        "version": record.version,
        "iframe": record.iframe,
    }


def get_app_record_id(app: Any, ctx: RegistryContext, default_id: str | None = None) -> str:
    """Identifier for an application handle, allocated on first call."""
    return ctx.ids.allocate(app, default_id)


async def get_app_record(app: Any, ctx: RegistryContext) -> ApplicationRecord:
    """Record for an application handle, waiting for an in-flight registration.

    Raises:
        RecordWaitTimeoutError: If no record appears within the wait timeout
    """
    return await ctx.waiters.await_record(app)


async def wait_for_apps_registration(ctx: RegistryContext) -> None:
    """Wait until every registration queued before this call has finished."""

    async def noop() -> None:
        pass

    await ctx.jobs.queue(noop)


async def send_apps(ctx: RegistryContext) -> list[dict[str, Any]]:
    """Send the list of records not hidden from the inspector.

    Returns:
        The projected records that were sent
    """
    visible = []
    for record in list(ctx.app_records):
        if not await _is_hidden(record):
            visible.append(record)

    apps = [map_app_record(record) for record in visible]
    ctx.emitter.emit(AppListEvent(apps=apps))
    return apps


async def remove_app(app: Any, ctx: RegistryContext) -> None:
    """Remove an application's record, waiting for it if registration is in flight.

    Failures (a timed-out wait included) are logged and never raised.
    """
    try:
        record = await get_app_record(app, ctx)
        ctx.ids.free(record.id)
        if record in ctx.app_records:
            ctx.app_records.remove(record)
        ctx.records_by_app.pop(app)
        ctx.instance_uids.pop(record.root_instance)
        if ctx.current_app_record is record:
            ctx.current_app_record = None
            ctx.current_inspected_component_id = None
        ctx.timeline.remove_layers_for_app(app, ctx)
        ctx.emitter.emit(AppRemoveEvent(id=record.id))
        logger.info(f"Removed app '{record.id}'")
    except Exception as e:
        if ctx.settings.debug_info:
            logger.error(f"Failed to remove app {app!r}: {e}", exc_info=True)
        else:
            logger.debug(f"Failed to remove app {app!r}: {e}")


def register_legacy_apps(
    scan: Callable[[], Iterable[Any]],
    version: str,
    ctx: RegistryContext,
    meta: dict[str, Any] | None = None,
) -> list[asyncio.Future]:
    """Register already-mounted applications found by a discovery scan.

    For hosts whose applications never call the registration entry point.
    Each discovered handle is queued with a synthesized descriptor. Must be
    called while the event loop is running.

    Args:
        scan: Callable returning the mounted application handles
        version: Runtime version shared by the discovered applications
        ctx: Registry context
        meta: Metadata attached to every synthesized descriptor

    Returns:
        One future per queued registration, in discovery order
    """
    futures = []
    for app in scan():
        descriptor = AppDescriptor(app=app, version=version, meta=meta, types={})
        futures.append(ctx.jobs.queue(lambda d=descriptor: _register_app_job(d, ctx)))
    logger.debug(f"Queued {len(futures)} legacy app registration(s)")
    return futures
