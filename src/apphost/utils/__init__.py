"""Utilities Package.

Modules:
    config: Configuration builder and access functions
    logger: Rich component logging
    queue: Serialized asynchronous job queue
"""

from . import config, logger, queue

__all__ = ["config", "logger", "queue"]
