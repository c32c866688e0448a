"""Waiting for a record to exist.

Operations that run outside the job queue (removal, mostly) use the
waiter registry to synchronize with a registration that has started but
not yet published its record. Each wait is bounded by
``registry.wait_timeout_ms``; an expired waiter is flagged so a late
delivery skips it.
"""

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apphost.base.errors import RecordWaitTimeoutError
from apphost.utils.logger import get_logger

if TYPE_CHECKING:
    from apphost.registry.context import ApplicationRecord, RegistryContext

logger = get_logger("app_registry")


@dataclass(eq=False)
class Waiter:
    """One pending wait for an application's record.

    Attributes:
        future: Settled with the record on delivery
        expired: Set when the wait timed out or was cancelled
    """

    future: asyncio.Future = field(default_factory=lambda: asyncio.get_running_loop().create_future())
    expired: bool = False

    @property
    def live(self) -> bool:
        return not self.expired and not self.future.done()


class WaiterRegistry:
    """Ordered waiter lists keyed by application handle identity."""

    def __init__(self, ctx: "RegistryContext"):
        self.ctx = ctx
        self._waiters: dict[int, tuple[Any, list[Waiter]]] = {}

    def pending_count(self, app: Any) -> int:
        """Number of live waiters for an application handle."""
        entry = self._waiters.get(id(app))
        if entry is None:
            return 0
        return sum(1 for waiter in entry[1] if waiter.live)

    async def await_record(self, app: Any, timeout: float | None = None) -> "ApplicationRecord":
        """Return the application's record, waiting for it to be registered.

        Args:
            app: The application handle
            timeout: Deadline in seconds, defaults to the configured wait timeout

        Returns:
            The application's record

        Raises:
            RecordWaitTimeoutError: If no registration delivered a record in time
        """
        record = self.ctx.find_record(app)
        if record is not None:
            return record

        if timeout is None:
            timeout = self.ctx.settings.wait_timeout

        waiter = Waiter()
        _, waiters = self._waiters.setdefault(id(app), (app, []))
        waiters.append(waiter)

        try:
            return await asyncio.wait_for(waiter.future, timeout=timeout)
        except TimeoutError:
            waiter.expired = True
            raise RecordWaitTimeoutError(app, int(timeout * 1000)) from None
        except asyncio.CancelledError:
            waiter.expired = True
            raise
        finally:
            self._discard(app, waiter)

    async def resolve(self, app: Any, record: "ApplicationRecord") -> None:
        """Deliver a finished record to every live waiter, in registration order.

        Only waiters registered before delivery starts are served. Each
        delivery yields to the event loop before the next one.
        """
        entry = self._waiters.get(id(app))
        if entry is None:
            return

        delivered = 0
        for waiter in list(entry[1]):
            if not waiter.live:
                continue
            waiter.future.set_result(record)
            delivered += 1
            await asyncio.sleep(0)

        logger.debug(f"Delivered record '{record.id}' to {delivered} waiter(s)")

    def _discard(self, app: Any, waiter: Waiter) -> None:
        entry = self._waiters.get(id(app))
        if entry is None:
            return
        waiters = entry[1]
        if waiter in waiters:
            waiters.remove(waiter)
        if not waiters:
            del self._waiters[id(app)]
