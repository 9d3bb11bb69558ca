"""
Test suite for reading provider events and stored announcement mappings.
"""
from datetime import date

import pytest

from bot.models import AllDaySpan, AnnouncementMapping, CalendarEvent, TimedSpan, mapping_key
from utils.error_handling import ProviderError, TransientIOError


def test_timed_and_all_day_events_are_read_back():
    timed = CalendarEvent.from_provider({
        "id": "evt1",
        "summary": "Kickoff",
        "htmlLink": "https://calendar.google.com/event?eid=evt1",
        "start": {"dateTime": "2025-09-16T22:00:00Z", "timeZone": "America/Indiana/Indianapolis"},
        "end": {"dateTime": "2025-09-16T23:30:00Z"},
    })
    assert isinstance(timed.when, TimedSpan)
    assert timed.title == "Kickoff"
    assert timed.location == ""

    all_day = CalendarEvent.from_provider({"id": "evt2", "start": {"date": "2025-10-04"}, "end": {"date": "2025-10-05"}})
    assert all_day.when == AllDaySpan(start=date(2025, 10, 4), end=date(2025, 10, 5))
    assert all_day.title == "(untitled)"


def test_event_without_start_time_is_a_provider_error():
    """A body with neither start.dateTime nor start.date cannot be announced."""
    with pytest.raises(ProviderError) as excinfo:
        CalendarEvent.from_provider({"id": "x", "summary": "t", "htmlLink": "L"})
    assert str(excinfo.value) == "Event x has no start time"

    with pytest.raises(ProviderError):
        CalendarEvent.from_provider({"id": "x", "start": {}, "end": {}})


def test_mapping_round_trip_and_corrupt_values():
    mapping = AnnouncementMapping(channel_id="555", message_id="777")
    assert AnnouncementMapping.from_stored(mapping.to_json()) == mapping
    assert AnnouncementMapping.from_stored({"channelId": 555, "messageId": 777}) == mapping
    assert mapping_key("evt1") == "cal:evt1"

    with pytest.raises(TransientIOError):
        AnnouncementMapping.from_stored('{"channelId": "555"}')
