# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        ADMIN EVENT FORM PAYLOADS                           ║
# ║   Timed vs all-day event shapes, validated before they are turned into    ║
# ║                   the events API's JSON payload.                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
import re

from utils.environ import DEFAULT_TIMEZONE
from utils.error_handling import ValidationError
from utils.rrule import build_rrule, parse_exdates, parse_iso_date

_HAS_SECONDS = re.compile(r"T\d{2}:\d{2}:\d{2}")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SCHEDULE VARIANTS                                                         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass
class TimedSchedule:
    """Local wall-clock start/end (``YYYY-MM-DDTHH:MM[:SS]``) in a fixed timezone."""
    start: str
    end: str
    time_zone: str = DEFAULT_TIMEZONE


@dataclass
class AllDaySchedule:
    start_date: str
    end_date: Optional[str] = None


Schedule = Union[TimedSchedule, AllDaySchedule]

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ OPTIONAL SECTIONS                                                         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass
class Reminders:
    use_default: bool = True
    email_minutes: Optional[int] = None

    def to_payload(self) -> Optional[Dict[str, Any]]:
        if self.use_default:
            return {"useDefault": True}
        if self.email_minutes is None:
            return None
        return {"useDefault": False, "overrides": [{"method": "email", "minutes": max(0, self.email_minutes)}]}


@dataclass
class RawRecurrence:
    """An RRULE typed in by hand; passed through untouched apart from trimming."""
    rrule: str

    def to_rrule(self) -> Optional[str]:
        return self.rrule.strip() or None


@dataclass
class RuleRecurrence:
    """The builder fields of the form; see utils.rrule.build_rrule."""
    freq: str = "NONE"
    interval: Optional[int] = None
    by_week_days: List[str] = field(default_factory=list)
    by_month_day: Optional[int] = None
    count: Optional[int] = None
    until: Optional[str] = None

    def to_rrule(self) -> Optional[str]:
        return build_rrule(
            self.freq,
            interval=self.interval,
            by_week_days=self.by_week_days,
            by_month_day=self.by_month_day,
            count=self.count,
            until=self.until,
        )

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ EVENT FORM                                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass
class EventForm:
    title: str
    schedule: Schedule
    description: str = ""
    location: str = ""
    url: str = ""
    attendees: List[str] = field(default_factory=list)
    reminders: Reminders = field(default_factory=Reminders)
    recurrence: Optional[Union[RawRecurrence, RuleRecurrence]] = None
    # Comma-separated YYYY-MM-DD dates, as typed in the form
    exdates: str = ""

# --- parse_attendees ---
# Splits the free-text attendee box on commas, whitespace and newlines.
def parse_attendees(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [s for s in re.split(r"[\n,\s]+", text.strip()) if s]

# --- ensure_seconds ---
# The events API wants RFC 3339 with seconds; datetime-local inputs omit them.
def ensure_seconds(value: str) -> str:
    if not value or _HAS_SECONDS.search(value):
        return value
    return f"{value}:00"

def _parse_local(value: str, field_name: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}")

# --- build_payload ---
# Validates the form and produces the events API request body.
# Timed events carry startISO/endISO/timeZone, all-day events startDate/endDate.
# Raises: ValidationError for a missing title, malformed or inverted times,
#         or bad recurrence fields.
def build_payload(form: EventForm) -> Dict[str, Any]:
    if not form.title or not form.title.strip():
        raise ValidationError("Title is required")

    payload: Dict[str, Any] = {
        "title": form.title.strip(),
        "description": form.description,
        "location": form.location,
        "url": form.url,
    }

    schedule = form.schedule
    if isinstance(schedule, TimedSchedule):
        start = ensure_seconds(schedule.start)
        end = ensure_seconds(schedule.end)
        if _parse_local(end, "end") <= _parse_local(start, "start"):
            raise ValidationError("End time must be after start time")
        payload.update({"startISO": start, "endISO": end, "timeZone": schedule.time_zone})
    elif isinstance(schedule, AllDaySchedule):
        start_date = parse_iso_date(schedule.start_date, "start date")
        end_date = parse_iso_date(schedule.end_date, "end date") if schedule.end_date else start_date
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")
        payload.update({"startDate": start_date.isoformat(), "endDate": end_date.isoformat()})
    else:
        raise ValidationError(f"Unsupported schedule type: {type(schedule).__name__}")

    if form.attendees:
        payload["attendees"] = [{"email": email} for email in form.attendees]

    reminders = form.reminders.to_payload()
    if reminders is not None:
        payload["reminders"] = reminders

    if form.recurrence is not None:
        rule = form.recurrence.to_rrule()
        if rule:
            payload["rrule"] = rule

    exdates = parse_exdates(form.exdates)
    if exdates:
        payload["exDates"] = exdates

    return payload
