# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                  ANNOUNCEMENT BOT ADDEVENT COMMAND HANDLER                 ║
# ║    Creates a calendar event and posts its announcement                     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from typing import Optional
import discord
from discord import Interaction, app_commands
from utils.logging import logger
from .utilities import get_dispatcher, send_reply

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ADDEVENT COMMAND HANDLER                                                   ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- handle_addevent_command ---
# Defers (calendar + Discord round trips can exceed the 3s window), runs the
# dispatcher and replies with the created event's link and id, or the error text.
async def handle_addevent_command(interaction: Interaction, title: str, start: str, end: str,
                                  location: Optional[str] = None, desc: Optional[str] = None):
    await interaction.response.defer()
    logger.info(f"/addevent by {interaction.user} title={title!r} start={start!r} end={end!r}")
    reply = await get_dispatcher(interaction).add_event(title, start, end, location, desc)
    await send_reply(interaction, reply)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ COMMAND REGISTRATION                                                      ║
# ╚════════════════════════════════════════════════════════════════════════════╝

async def register(bot: discord.Client):
    @bot.tree.command(name="addevent", description="Add a calendar event")
    @app_commands.default_permissions(manage_events=True)
    @app_commands.describe(
        title="Title",
        start="Start ISO 2025-10-02T18:00",
        end="End ISO 2025-10-02T19:30",
        location="Location",
        desc="Description",
    )
    async def addevent_command(interaction: discord.Interaction, title: str, start: str, end: str,
                               location: Optional[str] = None, desc: Optional[str] = None):
        await handle_addevent_command(interaction, title, start, end, location, desc)
