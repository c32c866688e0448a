"""
Pytest configuration and shared test utilities.

This module provides shared fixtures and factories for all registry tests.
"""

import pytest

from apphost.backends.base import BackendOptions
from apphost.backends.factory import BackendFactory
from apphost.backends.mock_backend import (
    MockApp,
    MockBackend,
    MockDocument,
    MockElement,
    MockInstance,
)
from apphost.events import RecordingBridge, clear_fallback_handlers
from apphost.registry import AppDescriptor, RegistryContext
from apphost.utils.config import RegistrySettings

# ===================================================================
# Test App Factory
# ===================================================================


def create_test_app(
    name: str | None = "App",
    *,
    hide: bool = False,
    document: MockDocument | None = None,
    mounted: bool = True,
) -> MockApp:
    """Factory function to create mock application handles.

    Args:
        name: Display name reported by the backend, None for a seeded fallback
        hide: Whether the root component asks to be hidden from the inspector
        document: Document the root element lives in, None for no root element
        mounted: False to create an app with no root instance

    Examples:
        Visible app rendered in the host document::

            app = create_test_app("Shop", document=host_document)

        App rendered inside an iframe::

            app = create_test_app("Widget", document=MockDocument(path="/frame.html"))
    """
    if not mounted:
        return MockApp(name=name, root_instance=None)

    elements = [MockElement(owner_document=document)] if document is not None else []
    root = MockInstance(elements=elements, devtools_options={"hide": hide})
    return MockApp(name=name, root_instance=root)


def create_descriptor(app: MockApp, version: str = "3.2.0", **kwargs) -> AppDescriptor:
    """Wrap an application handle in a descriptor."""
    return AppDescriptor(app=app, version=version, **kwargs)


# ===================================================================
# Fixtures
# ===================================================================


@pytest.fixture(autouse=True)
def reset_global_registries():
    """Keep module-level handler and backend lists from leaking between tests."""
    yield
    clear_fallback_handlers()
    BackendFactory.clear()


@pytest.fixture
def bridge() -> RecordingBridge:
    return RecordingBridge()


@pytest.fixture
def host_document() -> MockDocument:
    return MockDocument(path="/index.html")


@pytest.fixture
def settings() -> RegistrySettings:
    """Settings with a short wait deadline so timeout tests stay fast."""
    return RegistrySettings(wait_timeout_ms=100)


@pytest.fixture
def v2_options() -> BackendOptions:
    return BackendOptions(framework_version=2, adapter_class=MockBackend, description="2.x")


@pytest.fixture
def v3_options() -> BackendOptions:
    return BackendOptions(framework_version=3, adapter_class=MockBackend, description="3.x")


@pytest.fixture
def ctx(bridge, host_document, settings, v2_options, v3_options) -> RegistryContext:
    """Registry context with backends for framework versions 2 and 3."""
    return RegistryContext(
        bridge,
        backends=[v2_options, v3_options],
        host_document=host_document,
        settings=settings,
    )


@pytest.fixture
def make_app():
    """Factory fixture for mock application handles (see create_test_app)."""
    return create_test_app


@pytest.fixture
def make_descriptor():
    """Factory fixture for descriptors (see create_descriptor)."""
    return create_descriptor
