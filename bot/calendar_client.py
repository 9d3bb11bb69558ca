# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                      GOOGLE CALENDAR CLIENT MODULE                         ║
# ║    Service-account access to the shared calendar: create, read, merge-     ║
# ║    update and delete timed events, with provider errors translated.        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
calendar_client.py: Google Calendar API wrapper used by the command dispatcher.

All methods block on HTTP; async callers run them through ``asyncio.to_thread``.
"""
from typing import Any, Dict, Optional
from datetime import datetime

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from bot.models import CalendarEvent, EventChanges
from utils.environ import BotConfig
from utils.error_handling import NotFoundError, ProviderError, ValidationError
from utils.logging import logger
from utils.timezone_utils import parse_provider_datetime, to_utc_rfc3339

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CONSTANTS & CREDENTIALS                                                   ║
# ╚════════════════════════════════════════════════════════════════════════════╝

SCOPES = ["https://www.googleapis.com/auth/calendar.events"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

# --- load_credentials ---
# Loads service account credentials, preferring the inline email/key pair
# (GOOGLE_SA_EMAIL / GOOGLE_SA_PRIVATE_KEY) over the JSON key file.
# Environment-provided keys usually carry literal "\n" sequences; those are unescaped.
# Args:
#     config: The bot configuration.
# Returns: google.oauth2.service_account.Credentials scoped for calendar events.
def load_credentials(config: BotConfig) -> service_account.Credentials:
    if config.google_sa_email and config.google_sa_private_key:
        logger.info(f"Using inline service account credentials for {config.google_sa_email}")
        return service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": config.google_sa_email,
                "private_key": config.google_sa_private_key.replace("\\n", "\n"),
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
    logger.info(f"Loading service account credentials from {config.google_credentials_file}")
    return service_account.Credentials.from_service_account_file(
        config.google_credentials_file, scopes=SCOPES
    )

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CALENDAR CLIENT                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class CalendarClient:
    """Thin wrapper over ``service.events()`` bound to one calendar and timezone."""

    def __init__(self, service: Any, calendar_id: str, timezone: str):
        self.service = service
        self.calendar_id = calendar_id
        self.timezone = timezone

    @classmethod
    def from_config(cls, config: BotConfig) -> "CalendarClient":
        credentials = load_credentials(config)
        service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        logger.info("Google Calendar service initialized.")
        return cls(service, config.calendar_id, config.timezone)

    # --- _time_field ---
    # Provider start/end object: UTC instant plus the organization timezone.
    def _time_field(self, dt: datetime) -> Dict[str, str]:
        return {"dateTime": to_utc_rfc3339(dt), "timeZone": self.timezone}

    # --- _translate_error ---
    # Maps an HttpError onto the bot's error taxonomy.
    # 404 and 410 (deleted) become NotFoundError, everything else ProviderError.
    def _translate_error(self, error: HttpError, event_id: Optional[str] = None) -> Exception:
        status = error.resp.status
        reason = getattr(error, "reason", None) or str(error)
        if status in (404, 410) and event_id:
            return NotFoundError(f"Event {event_id} not found")
        return ProviderError(f"Calendar API error {status}: {reason}", status_code=status)

    # --- create_event ---
    # Inserts a timed event on the shared calendar.
    # Returns: The created event as read back from the provider response.
    # Raises: ProviderError when the provider rejects the payload.
    def create_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        location: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CalendarEvent:
        body: Dict[str, Any] = {
            "summary": title,
            "start": self._time_field(start),
            "end": self._time_field(end),
        }
        if location:
            body["location"] = location
        if description:
            body["description"] = description
        try:
            created = self.service.events().insert(calendarId=self.calendar_id, body=body).execute()
        except HttpError as e:
            raise self._translate_error(e) from e
        logger.info(f"Created calendar event '{title}' (id={created.get('id')})")
        return CalendarEvent.from_provider(created)

    def get_raw_event(self, event_id: str) -> Dict[str, Any]:
        try:
            return self.service.events().get(calendarId=self.calendar_id, eventId=event_id).execute()
        except HttpError as e:
            raise self._translate_error(e, event_id) from e

    def get_event(self, event_id: str) -> CalendarEvent:
        return CalendarEvent.from_provider(self.get_raw_event(event_id))

    # --- update_event ---
    # Read-merge-write: fetches the current body, overlays only the supplied
    # fields and writes the whole object back. Last write wins.
    # Args:
    #     event_id: Provider event id.
    #     changes: Fields to overwrite; None fields keep their current values.
    # Returns: The updated event.
    # Raises: NotFoundError, ProviderError, ValidationError (merged end <= start).
    def update_event(self, event_id: str, changes: EventChanges) -> CalendarEvent:
        base = self.get_raw_event(event_id)
        merged = dict(base)
        if changes.title is not None:
            merged["summary"] = changes.title
        if changes.description is not None:
            merged["description"] = changes.description
        if changes.location is not None:
            merged["location"] = changes.location
        if changes.start is not None:
            merged["start"] = self._time_field(changes.start)
        if changes.end is not None:
            merged["end"] = self._time_field(changes.end)

        start_dt = (merged.get("start") or {}).get("dateTime")
        end_dt = (merged.get("end") or {}).get("dateTime")
        if start_dt and end_dt and parse_provider_datetime(end_dt) <= parse_provider_datetime(start_dt):
            raise ValidationError("End time must be after start time")

        try:
            updated = self.service.events().update(
                calendarId=self.calendar_id, eventId=event_id, body=merged
            ).execute()
        except HttpError as e:
            raise self._translate_error(e, event_id) from e
        logger.info(f"Updated calendar event {event_id}")
        return CalendarEvent.from_provider(updated)

    # --- delete_event ---
    # Raises NotFoundError when the event is already gone; callers treat that as success.
    def delete_event(self, event_id: str) -> None:
        try:
            self.service.events().delete(calendarId=self.calendar_id, eventId=event_id).execute()
        except HttpError as e:
            raise self._translate_error(e, event_id) from e
        logger.info(f"Deleted calendar event {event_id}")
