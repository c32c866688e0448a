"""Exception hierarchy for the application registry.

Most failures inside the registration pipeline are absorbed rather than
raised: a missing backend adapter or a missing root instance abandons the
registration quietly, and removal swallows its own failures. The classes
below cover the cases that do surface to a caller.

Exception Hierarchy:
    - **AppHostError**: Root of every package-specific exception
    - **RegistryError**: Record registry and job queue failures
    - **RecordWaitTimeoutError**: A wait for a record outlived its deadline
    - **QueueFullError**: The job queue reached its configured depth cap
    - **ConfigurationError**: Invalid ``registry`` configuration section

.. seealso::
   :func:`apphost.registry.apps.get_app_record` : Raises RecordWaitTimeoutError
   :class:`apphost.utils.queue.JobQueue` : Raises QueueFullError
"""

from typing import Any


class AppHostError(Exception):
    """Base exception for all application registry errors."""

    pass


class RegistryError(AppHostError):
    """Exception for record registry errors.

    Raised when issues occur with record registration, lookup, or the
    serialized job queue that drives registration.
    """

    pass


class RecordWaitTimeoutError(RegistryError):
    """Raised when a record for an application did not appear in time.

    :param app: The application handle that was awaited
    :param timeout_ms: The deadline that expired, in milliseconds
    """

    def __init__(self, app: Any, timeout_ms: int):
        self.app = app
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out getting app record for app {app!r} after {timeout_ms}ms")


class QueueFullError(RegistryError):
    """Raised when a job is submitted to a queue at its depth cap."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Job queue is full ({max_depth} pending jobs), rejecting new job")


class ConfigurationError(AppHostError):
    """Exception for configuration-related errors.

    Raised when the ``registry`` section of config.yml contains values that
    fail validation.
    """

    pass
