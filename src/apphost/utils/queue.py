"""Serialized asynchronous job queue.

Jobs are zero-argument coroutine functions. They run strictly one at a
time, in submission order, on a single worker task that drains a FIFO.
Each submission gets a future settled with that job's outcome; a failing
job rejects only its own future and the worker moves on to the next one.

Usage:
    jobs = JobQueue()
    result = await jobs.queue(lambda: do_work(...))
"""

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

from apphost.base.errors import QueueFullError
from apphost.utils.logger import get_logger

logger = get_logger("job_queue")

Job = Callable[[], Awaitable[Any]]


class JobQueue:
    """FIFO of deferred jobs drained by a single worker task.

    Attributes:
        max_depth: Maximum number of jobs waiting to start, None for unbounded
    """

    def __init__(self, max_depth: int | None = None):
        self.max_depth = max_depth
        self._pending: deque[tuple[Job, asyncio.Future]] = deque()
        self._worker: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        """Number of jobs queued but not yet started."""
        return len(self._pending)

    @property
    def idle(self) -> bool:
        """True when no job is running or waiting."""
        return not self._pending and (self._worker is None or self._worker.done())

    def queue(self, job: Job) -> asyncio.Future:
        """Submit a job and return a future for its outcome.

        Args:
            job: Zero-argument callable returning an awaitable

        Returns:
            Future resolved with the job's return value or its exception

        Raises:
            QueueFullError: If max_depth jobs are already waiting
        """
        if self.max_depth is not None and len(self._pending) >= self.max_depth:
            raise QueueFullError(self.max_depth)

        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._pending.append((job, future))

        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain(), name="job_queue_worker")

        return future

    async def _drain(self) -> None:
        """Run queued jobs until the FIFO is empty."""
        while self._pending:
            job, future = self._pending.popleft()
            try:
                result = await job()
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    future.cancel()
                    raise
                # The job itself was cancelled, not the worker
                logger.debug("Queued job was cancelled")
                future.cancel()
            except Exception as e:
                logger.debug(f"Queued job failed: {e!r}")
                if not future.done():
                    future.set_exception(e)
            else:
                if not future.done():
                    future.set_result(result)
