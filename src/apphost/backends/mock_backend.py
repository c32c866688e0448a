"""
Mock backend adapter for development and testing.

Works with lightweight in-memory application handles instead of a real
framework runtime, so the registry can be exercised without an
instrumented application.
"""

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from apphost.backends.base import BackendAdapter
from apphost.utils.logger import get_logger

logger = get_logger("mock_backend")


@dataclass(eq=False)
class MockDocument:
    """A document elements can belong to."""

    path: str = "/"


@dataclass(eq=False)
class MockElement:
    """A rendered element."""

    owner_document: MockDocument


@dataclass(eq=False)
class MockInstance:
    """A component instance.

    Attributes:
        elements: Rendered root elements
        devtools_options: Inspector options (``hide`` keeps it out of lists)
    """

    elements: list[MockElement] = field(default_factory=list)
    devtools_options: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class MockApp:
    """An application handle.

    Attributes:
        name: Display name, or None to fall back to a seeded name
        root_instance: Root component, or None for an unmounted app
    """

    name: str | None = None
    root_instance: MockInstance | None = None


class MockBackend(BackendAdapter):
    """
    Mock backend adapter reading everything off MockApp handles.

    Set ``response_delay_ms`` on an instance (or the class) to add a
    suspension point to every call, simulating a real runtime round trip.

    Example:
        >>> options = BackendOptions(framework_version=3, adapter_class=MockBackend)
        >>> app = MockApp(name="Shop", root_instance=MockInstance())
        >>> await register_app(AppDescriptor(app=app, version="3.2.0"), ctx)
    """

    response_delay_ms: float = 0

    def __init__(self, options, ctx):
        super().__init__(options, ctx)
        self.registered_apps: list[Any] = []

    def setup(self) -> None:
        logger.debug(f"Mock backend active for framework version {self.options.framework_version}")

    async def _delay(self) -> None:
        await asyncio.sleep(self.response_delay_ms / 1000)

    async def get_app_root_instance(self, app: Any) -> Any | None:
        await self._delay()
        return getattr(app, "root_instance", None)

    async def get_app_record_name(self, app: Any, fallback_seed: str) -> str:
        await self._delay()
        return getattr(app, "name", None) or f"App {fallback_seed}"

    async def get_component_root_elements(self, instance: Any) -> Sequence[MockElement]:
        await self._delay()
        return list(getattr(instance, "elements", []))

    async def get_component_devtools_options(self, instance: Any) -> Mapping[str, Any]:
        await self._delay()
        return getattr(instance, "devtools_options", {})

    async def register_application(self, app: Any) -> None:
        await self._delay()
        self.registered_apps.append(app)
