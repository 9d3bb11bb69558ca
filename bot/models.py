# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                         BOT DATA MODEL MODULE                              ║
# ║   Calendar events as read back from the provider, partial edits, and the   ║
# ║          mapping from an event to the message announcing it.               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union
import json

from utils.error_handling import ProviderError, TransientIOError
from utils.timezone_utils import parse_provider_datetime

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ EVENT TIME VARIANTS                                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass(frozen=True)
class TimedSpan:
    start: datetime
    end: datetime
    timezone: Optional[str] = None


@dataclass(frozen=True)
class AllDaySpan:
    start: date
    # Exclusive, as the provider stores it
    end: date


EventTime = Union[TimedSpan, AllDaySpan]

# --- span_from_provider ---
# Builds the matching EventTime variant from the provider's start/end objects.
# Args:
#     start: Provider start object ({dateTime, timeZone} or {date}).
#     end: Provider end object of the same shape.
# Returns: TimedSpan or AllDaySpan.
def span_from_provider(start: Dict[str, Any], end: Dict[str, Any]) -> EventTime:
    if start.get("dateTime"):
        return TimedSpan(
            start=parse_provider_datetime(start["dateTime"]),
            end=parse_provider_datetime(end.get("dateTime") or start["dateTime"]),
            timezone=start.get("timeZone"),
        )
    start_day = date.fromisoformat(start["date"])
    return AllDaySpan(start=start_day, end=date.fromisoformat(end.get("date") or start["date"]))

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CALENDAR EVENT                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass
class CalendarEvent:
    """Snapshot of a provider event. Never cached; re-read for every command."""

    id: str
    title: str
    when: EventTime
    link: str = ""
    location: str = ""
    description: str = ""

    # --- from_provider ---
    # Raises: ProviderError when the body carries neither start.dateTime nor start.date.
    @classmethod
    def from_provider(cls, body: Dict[str, Any]) -> "CalendarEvent":
        start = body.get("start") or {}
        if not (start.get("dateTime") or start.get("date")):
            raise ProviderError(f"Event {body.get('id')} has no start time")
        return cls(
            id=body["id"],
            title=body.get("summary") or "(untitled)",
            when=span_from_provider(start, body.get("end") or {}),
            link=body.get("htmlLink") or "",
            location=body.get("location") or "",
            description=body.get("description") or "",
        )


@dataclass
class EventChanges:
    """Fields supplied by an edit; None means keep the provider's current value."""

    title: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.title, self.start, self.end, self.location, self.description))

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ANNOUNCEMENT MAPPING                                                      ║
# ╚════════════════════════════════════════════════════════════════════════════╝

MAPPING_KEY_PREFIX = "cal:"

def mapping_key(event_id: str) -> str:
    return f"{MAPPING_KEY_PREFIX}{event_id}"


@dataclass(frozen=True)
class AnnouncementMapping:
    channel_id: str
    message_id: str

    def to_json(self) -> str:
        return json.dumps({"channelId": self.channel_id, "messageId": self.message_id})

    # --- from_stored ---
    # Accepts the stored value either as a JSON string or an already-decoded dict.
    # Raises: TransientIOError when the stored value is not a valid mapping.
    @classmethod
    def from_stored(cls, value: Union[str, Dict[str, Any]]) -> "AnnouncementMapping":
        try:
            data = json.loads(value) if isinstance(value, str) else value
            return cls(channel_id=str(data["channelId"]), message_id=str(data["messageId"]))
        except (ValueError, TypeError, KeyError) as e:
            raise TransientIOError(f"Corrupt announcement mapping: {value!r}") from e
