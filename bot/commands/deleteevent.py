# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                ANNOUNCEMENT BOT DELETEEVENT COMMAND HANDLER                ║
# ║    Deletes an event and removes its announcement message                   ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import discord
from discord import Interaction, app_commands
from utils.logging import logger
from .utilities import get_dispatcher, send_reply

async def handle_deleteevent_command(interaction: Interaction, id: str):
    await interaction.response.defer()
    logger.info(f"/deleteevent by {interaction.user} id={id}")
    reply = await get_dispatcher(interaction).delete_event(id)
    await send_reply(interaction, reply)

async def register(bot: discord.Client):
    @bot.tree.command(name="deleteevent", description="Delete a calendar event")
    @app_commands.default_permissions(manage_events=True)
    @app_commands.describe(id="Calendar event ID")
    async def deleteevent_command(interaction: discord.Interaction, id: str):
        await handle_deleteevent_command(interaction, id)
