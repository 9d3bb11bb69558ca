# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                 ANNOUNCEMENT BOT EDITEVENT COMMAND HANDLER                 ║
# ║    Applies partial edits to an event and refreshes its announcement        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from typing import Optional
import discord
from discord import Interaction, app_commands
from utils.logging import logger
from .utilities import get_dispatcher, send_reply

# --- handle_editevent_command ---
# Only the options the user filled in are changed; the rest keep the
# calendar's current values.
async def handle_editevent_command(interaction: Interaction, id: str, title: Optional[str] = None,
                                   start: Optional[str] = None, end: Optional[str] = None,
                                   location: Optional[str] = None, desc: Optional[str] = None):
    await interaction.response.defer()
    logger.info(f"/editevent by {interaction.user} id={id}")
    reply = await get_dispatcher(interaction).edit_event(id, title, start, end, location, desc)
    await send_reply(interaction, reply)

async def register(bot: discord.Client):
    @bot.tree.command(name="editevent", description="Edit a calendar event")
    @app_commands.default_permissions(manage_events=True)
    @app_commands.describe(
        id="Calendar event ID",
        title="New title",
        start="New start ISO",
        end="New end ISO",
        location="New location",
        desc="New description",
    )
    async def editevent_command(interaction: discord.Interaction, id: str, title: Optional[str] = None,
                                start: Optional[str] = None, end: Optional[str] = None,
                                location: Optional[str] = None, desc: Optional[str] = None):
        await handle_editevent_command(interaction, id, title, start, end, location, desc)
