# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                      DISCORD ANNOUNCEMENT MESSAGES                         ║
# ║   Post, edit and delete announcement messages through the running bot's    ║
# ║        HTTP session, without needing the channel in the cache.            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from typing import Optional

import discord
from discord import Forbidden, HTTPException, NotFound

from bot.models import AnnouncementMapping
from utils.error_handling import TransientIOError
from utils.logging import logger


class DiscordChatClient:
    """Message operations bound to a discord.py client."""

    def __init__(self, client: discord.Client):
        self.client = client

    # --- _channel ---
    # A partial messageable only needs the id; sending through it is a plain
    # REST call, so the channel does not have to be cached or intents enabled.
    def _channel(self, channel_id: str) -> discord.PartialMessageable:
        return self.client.get_partial_messageable(int(channel_id))

    # --- post_message ---
    # Posts a new message to a channel.
    # Returns: The (channel_id, message_id) of the new message, or None if Discord
    #          rejected the post (logged, not raised).
    async def post_message(self, channel_id: str, content: str) -> Optional[AnnouncementMapping]:
        try:
            message = await self._channel(channel_id).send(content)
        except Forbidden:
            logger.error(f"Permission error posting to channel {channel_id}. Check bot permissions.")
            return None
        except HTTPException as e:
            logger.warning(f"Discord rejected message post to channel {channel_id}: {e.status} {e.text}")
            return None
        return AnnouncementMapping(channel_id=str(message.channel.id), message_id=str(message.id))

    # --- edit_message ---
    # Replaces a message's content.
    # Returns: True when edited, False when the message (or channel) no longer exists.
    # Raises: TransientIOError for any other Discord HTTP error.
    async def edit_message(self, channel_id: str, message_id: str, content: str) -> bool:
        partial = self._channel(channel_id).get_partial_message(int(message_id))
        try:
            await partial.edit(content=content)
        except NotFound:
            logger.info(f"Announcement message {message_id} in channel {channel_id} is gone")
            return False
        except HTTPException as e:
            raise TransientIOError(f"Discord message edit failed: {e.status} {e.text}") from e
        return True

    # --- delete_message ---
    # Deletes a message; a message that is already gone counts as deleted.
    async def delete_message(self, channel_id: str, message_id: str) -> None:
        partial = self._channel(channel_id).get_partial_message(int(message_id))
        try:
            await partial.delete()
        except NotFound:
            logger.debug(f"Message {message_id} was already deleted")
        except HTTPException as e:
            raise TransientIOError(f"Discord message delete failed: {e.status} {e.text}") from e
