"""
Abstract base class for backend adapters.

A backend adapter bridges the registry to one framework major version's
runtime introspection: finding an application's root component, naming
it, locating its rendered root elements and reading inspector options.
The registry never instruments applications itself.
"""

import importlib
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from apphost.registry.context import ApplicationRecord, RegistryContext


class HostDocument(Protocol):
    """A document an element can belong to."""

    path: str


class RootElement(Protocol):
    """A rendered element owned by some document."""

    owner_document: HostDocument


class BackendAdapter(ABC):
    """
    Abstract base class for backend adapters.

    Implementations are instantiated lazily by :class:`BackendFactory`, once
    per :class:`BackendOptions` per registry context.

    Attributes:
        options: The options this adapter was activated from
        ctx: The registry context the adapter serves
    """

    def __init__(self, options: "BackendOptions", ctx: "RegistryContext"):
        self.options = options
        self.ctx = ctx

    def setup(self) -> None:
        """Called once right after activation. Override to install hooks."""
        pass

    @abstractmethod
    async def get_app_root_instance(self, app: Any) -> Any | None:
        """
        Find the root component instance of an application.

        Args:
            app: The application handle

        Returns:
            Root instance, or None when the application is not mounted
        """
        pass

    @abstractmethod
    async def get_app_record_name(self, app: Any, fallback_seed: str) -> str:
        """
        Human-readable name for an application.

        Args:
            app: The application handle
            fallback_seed: Counter value to build a name from when the app has none
        """
        pass

    @abstractmethod
    async def get_component_root_elements(self, instance: Any) -> Sequence[RootElement]:
        """Rendered root elements of a component instance, in document order."""
        pass

    @abstractmethod
    async def get_component_devtools_options(self, instance: Any) -> Mapping[str, Any]:
        """Inspector options declared by a component; ``hide`` keeps it out of lists."""
        pass

    @abstractmethod
    async def register_application(self, app: Any) -> None:
        """Finish registering an application with the backend runtime."""
        pass


@dataclass(eq=False)
class BackendOptions:
    """Registration metadata for a backend adapter.

    Either ``adapter_class`` is given directly, or ``module_path`` and
    ``class_name`` name it for lazy import on first activation.

    :param framework_version: Framework major version this adapter handles
    :param adapter_class: BackendAdapter subclass
    :param module_path: Python module path for lazy import
    :param class_name: Adapter class name within the module
    :param setup_app: Optional hook called with (backend, record) after a record is published
    :param description: Human-readable description

    Examples:
        >>> BackendOptions(
        ...     framework_version=3,
        ...     module_path="my_host.backends.v3",
        ...     class_name="V3Backend",
        ...     description="Framework 3.x runtime introspection",
        ... )
    """

    framework_version: int
    adapter_class: type[BackendAdapter] | None = None
    module_path: str | None = None
    class_name: str | None = None
    setup_app: Callable[[BackendAdapter, "ApplicationRecord"], Any] | None = None
    description: str = ""

    def load_adapter_class(self) -> type[BackendAdapter]:
        """Return the adapter class, importing it on first use.

        Raises:
            ValueError: If neither an adapter class nor an import path is set
            ImportError: If the module cannot be imported
        """
        if self.adapter_class is None:
            if not self.module_path or not self.class_name:
                raise ValueError(
                    f"Backend for framework version {self.framework_version} needs either "
                    f"adapter_class or module_path and class_name"
                )
            module = importlib.import_module(self.module_path)
            self.adapter_class = getattr(module, self.class_name)
        return self.adapter_class
