"""Tests for registry event types (dataclasses)."""

from datetime import datetime

from apphost.events import (
    AppAddEvent,
    AppListEvent,
    AppRemoveEvent,
    AppSelectedEvent,
    BaseEvent,
    BridgeEvents,
)

# =============================================================================
# Test Base Event
# =============================================================================


class TestBaseEvent:
    """Test BaseEvent dataclass."""

    def test_default_timestamp_is_generated(self):
        event = BaseEvent()
        assert isinstance(event.timestamp, datetime)

    def test_default_component_is_empty_string(self):
        assert BaseEvent().component == ""

    def test_base_payload_is_empty(self):
        assert BaseEvent().payload() == {}


# =============================================================================
# Test Bridge Payloads
# =============================================================================


class TestEventPayloads:
    """Each event travels under its bridge name with a camelCase payload."""

    def test_app_add(self, sample_record):
        event = AppAddEvent(app_record=sample_record)
        assert event.event_name == BridgeEvents.APP_ADD == "APP_ADD"
        assert event.payload() == {"appRecord": sample_record}

    def test_app_selected(self):
        event = AppSelectedEvent(id="shop", last_inspected_component_id=None)
        assert event.event_name == "APP_SELECTED"
        assert event.payload() == {"id": "shop", "lastInspectedComponentId": None}

    def test_app_list(self, sample_record):
        event = AppListEvent(apps=[sample_record])
        assert event.event_name == "APP_LIST"
        assert event.payload() == {"apps": [sample_record]}

    def test_app_remove(self):
        event = AppRemoveEvent(id="shop")
        assert event.event_name == "APP_REMOVE"
        assert event.payload() == {"id": "shop"}

    def test_list_default_is_not_shared(self):
        first = AppListEvent()
        first.apps.append({"id": "x"})
        assert AppListEvent().apps == []
