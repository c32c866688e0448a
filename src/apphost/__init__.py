"""Application record registry for introspection hosts.

Tracks instrumented application instances attached to an inspection
backend: serialized registration, backend selection by framework version,
collision-free record identifiers, and bridge notifications.

This package contains:
- Backend adapter interfaces and factory
- Record registry, registration pipeline, selection and removal
- Typed bridge events
- Configuration and logging utilities
"""

# Version information
__version__ = "0.3.0"

__all__ = ["__version__"]

# Use specific imports like: from apphost.registry import register_app
