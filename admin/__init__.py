"""
admin package: the web admin console's event form, as typed payloads plus the
client that submits them to the organization's events API.
"""
from .event_forms import (
    AllDaySchedule,
    EventForm,
    RawRecurrence,
    Reminders,
    RuleRecurrence,
    TimedSchedule,
    build_payload,
    parse_attendees,
)
from .events_api import EventsApiClient

__all__ = [
    'AllDaySchedule', 'EventForm', 'RawRecurrence', 'Reminders', 'RuleRecurrence',
    'TimedSchedule', 'build_payload', 'parse_attendees', 'EventsApiClient',
]
