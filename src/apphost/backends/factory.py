"""
Backend factory for resolving and activating backend adapters.

Keeps the process-wide list of available backend options, maps an
application's runtime version to the options for its framework major
version, and lazily activates one adapter per options per context.
"""

import re
from typing import TYPE_CHECKING

from apphost.backends.base import BackendAdapter, BackendOptions
from apphost.utils.logger import get_logger

if TYPE_CHECKING:
    from apphost.registry.context import RegistryContext

logger = get_logger("backend_factory")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_major_version(version: str) -> int | None:
    """Integer prefix before the first ``.`` of a version string.

    Returns None when the version has no ``.`` or the prefix does not start
    with an integer.

    Examples:
        >>> get_major_version("3.2.0")
        3
        >>> get_major_version("3") is None
        True
    """
    if not version:
        return None
    dot = version.find(".")
    if dot == -1:
        return None
    match = _LEADING_INT.match(version[:dot])
    return int(match.group(1)) if match else None


class BackendFactory:
    """
    Factory for backend adapters.

    Example:
        >>> BackendFactory.register(BackendOptions(framework_version=3, adapter_class=MyBackend))
        >>> options = BackendFactory.find_backend_options("3.2.0", ctx.backends)
        >>> backend = BackendFactory.get_backend(options, ctx)
    """

    _available_backends: list[BackendOptions] = []

    @classmethod
    def register(cls, options: BackendOptions) -> None:
        """
        Register backend options as available to new registry contexts.

        Args:
            options: Backend options, matched in registration order
        """
        cls._available_backends.append(options)
        logger.debug(f"Registered backend for framework version {options.framework_version}")

    @classmethod
    def available_backends(cls) -> list[BackendOptions]:
        """Registered backend options, in registration order."""
        return list(cls._available_backends)

    @classmethod
    def clear(cls) -> None:
        cls._available_backends.clear()

    @staticmethod
    def find_backend_options(
        version: str, backends: list[BackendOptions]
    ) -> BackendOptions | None:
        """First options whose framework version matches the version's major part."""
        major = get_major_version(version)
        if major is None:
            return None
        for options in backends:
            if options.framework_version == major:
                return options
        return None

    @staticmethod
    def get_backend(options: BackendOptions, ctx: "RegistryContext") -> BackendAdapter:
        """
        Return the context's adapter for these options, activating it if needed.

        Args:
            options: Backend options to activate
            ctx: Registry context owning the adapter cache

        Returns:
            The active adapter instance
        """
        backend = ctx.enabled_backends.get(options)
        if backend is None:
            adapter_class = options.load_adapter_class()
            backend = adapter_class(options, ctx)
            ctx.enabled_backends[options] = backend
            backend.setup()
            logger.success(
                f"Activated backend {adapter_class.__name__} "
                f"for framework version {options.framework_version}"
            )
        return backend
