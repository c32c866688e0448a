"""
Backend adapter abstraction.

Each backend adapter bridges the registry to one framework major
version's runtime introspection. Adapters are registered as
BackendOptions and activated lazily, once per registry context.
"""

from apphost.backends.base import BackendAdapter, BackendOptions
from apphost.backends.factory import BackendFactory, get_major_version

__all__ = ["BackendAdapter", "BackendFactory", "BackendOptions", "get_major_version"]
