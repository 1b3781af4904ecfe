"""Unit tests for EventService.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

from datetime import datetime
from datetime import timezone as dt_timezone

import pytest

from eventease.domain.errors import ErrorCode, EventNotFoundError


class TestEventService:
    """Tests for EventService."""

    def test_get_event_returns_domain_event(self, event_service):
        event = event_service.get_event(1)
        assert event.name == "Tech Conference 2026"
        assert event.capacity.value == 10

    def test_get_event_not_found_raises_error(self, event_service):
        with pytest.raises(EventNotFoundError) as excinfo:
            event_service.get_event(999)
        assert excinfo.value.code is ErrorCode.EVENT_NOT_FOUND

    def test_list_events(self, event_service):
        assert [event.id for event in event_service.list_events()] == [1, 2, 3]

    def test_events_by_category_is_case_insensitive(self, event_service):
        assert [event.id for event in event_service.events_by_category("music")] == [2]

    def test_empty_category_returns_everything(self, event_service):
        assert len(event_service.events_by_category("")) == 3

    def test_search_combines_filters(self, event_service):
        results = event_service.search_events(location="seattle", category="Technology")
        assert [event.id for event in results] == [1]

    def test_search_by_date_matches_calendar_day(self, event_service):
        results = event_service.search_events(date=datetime(2026, 5, 9, tzinfo=dt_timezone.utc))
        assert [event.id for event in results] == [2]
