"""Pytest fixtures for registry event tests."""

from datetime import datetime
from typing import Any

import pytest

from apphost.events import AppAddEvent, AppListEvent, AppRemoveEvent, AppSelectedEvent


@pytest.fixture
def sample_record() -> dict[str, Any]:
    return {"id": "shop", "name": "Shop", "version": "3.2.0", "iframe": None}


@pytest.fixture
def sample_events(sample_record) -> dict[str, Any]:
    """Provide one event of each type."""
    now = datetime.now()
    return {
        "add": AppAddEvent(app_record=sample_record, component="app_registry", timestamp=now),
        "remove": AppRemoveEvent(id="shop", component="app_registry", timestamp=now),
        "selected": AppSelectedEvent(
            id="shop",
            last_inspected_component_id="shop:42",
            component="app_registry",
            timestamp=now,
        ),
        "list": AppListEvent(apps=[sample_record], component="app_registry", timestamp=now),
    }
