# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        EVENT ANNOUNCER MODULE                              ║
# ║   Keeps exactly one Discord message per calendar event in step with the    ║
# ║               event's current state via the mapping store.                 ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
announcer.py: Reconciles a calendar event with its announcement message.

Reconciliation is an explicit branch check rather than exception-driven:

1. look up the mapping for the event id;
2. mapping present -> edit that message; an edit reporting "message gone"
   falls through to step 3;
3. no usable mapping -> post to the announcement channel and record the new
   (channel, message) pair.

Retraction deletes the message best-effort and always drops the mapping.
"""

import asyncio
from typing import Optional

from bot.models import AllDaySpan, AnnouncementMapping, CalendarEvent
from utils.error_handling import with_async_error_handling
from utils.logging import logger
from utils.timezone_utils import format_medium_date, format_when

MAX_MESSAGE_LENGTH = 2000

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ MESSAGE FORMATTING                                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- format_announcement ---
# Renders the announcement text: title, clock + local start time,
# pin + location (or "TBA"), description, then the event link.
# Args:
#     event: The event as currently stored by the provider.
#     timezone: IANA name of the organization's timezone.
# Returns: The message content string.
def format_announcement(event: CalendarEvent, timezone: str) -> str:
    if isinstance(event.when, AllDaySpan):
        when = format_medium_date(event.when.start)
    else:
        when = format_when(event.when.start, timezone)
    head = f"📅 **{event.title}**\n🕒 {when}\n📍 {event.location or 'TBA'}\n\n"
    tail = f"\n\n<{event.link}>"
    description = event.description or ""
    # Discord rejects messages over the limit; only the description gives way
    room = MAX_MESSAGE_LENGTH - len(head) - len(tail)
    if len(description) > room:
        description = description[:max(room - 1, 0)] + "…"
    return f"{head}{description}{tail}"

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ANNOUNCER                                                                 ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class Announcer:
    def __init__(self, mapping_store, chat_client, announce_channel_id: str, timezone: str):
        self.mapping_store = mapping_store
        self.chat_client = chat_client
        self.announce_channel_id = announce_channel_id
        self.timezone = timezone

    # --- announce ---
    # Edits the existing announcement for the event or posts a new one.
    # Returns: The mapping now announcing the event, or None when Discord
    #          refused the new post (no mapping is written in that case).
    # Raises: TransientIOError from the mapping store or a failed Discord edit.
    async def announce(self, event: CalendarEvent) -> Optional[AnnouncementMapping]:
        content = format_announcement(event, self.timezone)
        mapping = await asyncio.to_thread(self.mapping_store.get, event.id)

        if mapping is not None:
            edited = await self.chat_client.edit_message(mapping.channel_id, mapping.message_id, content)
            if edited:
                logger.info(f"Updated announcement for event {event.id} (message {mapping.message_id})")
                return mapping
            logger.info(f"Announcement for event {event.id} was removed from Discord, reposting")

        return await self._post_new(event.id, content)

    async def _post_new(self, event_id: str, content: str) -> Optional[AnnouncementMapping]:
        posted = await self.chat_client.post_message(self.announce_channel_id, content)
        if posted is None:
            logger.warning(f"Event {event_id} was not announced; no mapping recorded")
            return None
        await asyncio.to_thread(self.mapping_store.set, event_id, posted)
        logger.info(f"Announced event {event_id} as message {posted.message_id}")
        return posted

    # --- retract ---
    # Removes the announcement for a deleted event. Message deletion is
    # best-effort; the mapping entry is removed regardless.
    # Returns: True if a mapping existed.
    async def retract(self, event_id: str) -> bool:
        mapping = await asyncio.to_thread(self.mapping_store.get, event_id)
        if mapping is None:
            logger.debug(f"No announcement recorded for event {event_id}")
            return False

        await with_async_error_handling(
            self.chat_client.delete_message,
            mapping.channel_id,
            mapping.message_id,
            error_message=f"Could not delete announcement for event {event_id}",
        )
        await asyncio.to_thread(self.mapping_store.delete, event_id)
        logger.info(f"Retracted announcement for event {event_id}")
        return True
