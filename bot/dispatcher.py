# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        EVENT COMMAND DISPATCHER                            ║
# ║   addevent / editevent / deleteevent: validate, mutate the calendar,       ║
# ║        reconcile the announcement, and produce the reply text.             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
dispatcher.py: Orchestrates one command invocation end to end.

Each operation awaits its steps strictly in order (calendar first, then the
announcement, which needs the calendar result). Nothing is retried or rolled
back: if the calendar write succeeds and the announcement fails, the event
stays on the calendar and the user sees the announcement error.
"""

import asyncio
from datetime import datetime
from typing import Optional

from bot.announcer import Announcer
from bot.dependencies import Dependencies
from bot.models import EventChanges
from utils.error_handling import NotFoundError, ValidationError
from utils.logging import logger
from utils.timezone_utils import parse_local_datetime

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ARGUMENT HELPERS                                                          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def _require(name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Missing required argument: {name}")
    return value.strip()


def _check_order(start: datetime, end: datetime) -> None:
    if end <= start:
        raise ValidationError("End time must be after start time")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ DISPATCHER                                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class CommandDispatcher:
    def __init__(self, deps: Dependencies):
        self.deps = deps
        self.calendar = deps.calendar_client
        self.announcer = Announcer(
            deps.mapping_store,
            deps.chat_client,
            deps.config.announce_channel_id,
            deps.config.timezone,
        )

    def _parse_time(self, value: str) -> datetime:
        return parse_local_datetime(value, self.deps.config.timezone)

    # --- _run ---
    # Command boundary: any error becomes the reply text.
    # Validation problems are expected user input and only logged as warnings.
    async def _run(self, command: str, handler, *args, **kwargs) -> str:
        try:
            return await handler(*args, **kwargs)
        except ValidationError as e:
            logger.warning(f"/{command} rejected: {e}")
            return str(e)
        except Exception as e:
            logger.exception(f"/{command} failed: {e}")
            return str(e) or e.__class__.__name__

    # --- add_event ---
    # Creates a timed event and announces it.
    # Reply: "Created: <link>\nID: `<id>`".
    async def add_event(self, title: Optional[str], start: Optional[str], end: Optional[str],
                        location: Optional[str] = None, desc: Optional[str] = None) -> str:
        return await self._run("addevent", self._add_event, title, start, end, location, desc)

    async def _add_event(self, title, start, end, location, desc) -> str:
        title = _require("title", title)
        start_text = _require("start", start)
        end_text = _require("end", end)
        start_dt = self._parse_time(start_text)
        end_dt = self._parse_time(end_text)
        _check_order(start_dt, end_dt)

        event = await asyncio.to_thread(
            self.calendar.create_event, title, start_dt, end_dt, location, desc
        )
        await self.announcer.announce(event)
        return f"Created: {event.link}\nID: `{event.id}`"

    # --- edit_event ---
    # Merges the supplied fields onto the provider's current event and re-announces.
    # Reply: "Updated: <link>".
    async def edit_event(self, event_id: Optional[str], title: Optional[str] = None,
                         start: Optional[str] = None, end: Optional[str] = None,
                         location: Optional[str] = None, desc: Optional[str] = None) -> str:
        return await self._run("editevent", self._edit_event, event_id, title, start, end, location, desc)

    async def _edit_event(self, event_id, title, start, end, location, desc) -> str:
        event_id = _require("id", event_id)
        changes = EventChanges(
            title=title,
            start=self._parse_time(start) if start else None,
            end=self._parse_time(end) if end else None,
            location=location,
            description=desc,
        )
        if changes.start and changes.end:
            _check_order(changes.start, changes.end)
        if changes.is_empty():
            logger.info(f"/editevent for {event_id} changes nothing; refreshing its announcement")

        event = await asyncio.to_thread(self.calendar.update_event, event_id, changes)
        await self.announcer.announce(event)
        return f"Updated: {event.link}"

    # --- delete_event ---
    # Deletes the event (already-deleted is fine) and retracts its announcement.
    # Reply: "Deleted <id>".
    async def delete_event(self, event_id: Optional[str]) -> str:
        return await self._run("deleteevent", self._delete_event, event_id)

    async def _delete_event(self, event_id) -> str:
        event_id = _require("id", event_id)
        try:
            await asyncio.to_thread(self.calendar.delete_event, event_id)
        except NotFoundError:
            logger.info(f"Event {event_id} was already deleted from the calendar")
        await self.announcer.retract(event_id)
        return f"Deleted {event_id}"
