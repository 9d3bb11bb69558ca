# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                     ANNOUNCEMENT BOT CORE MODULE                           ║
# ║    Builds the discord.py bot, registers the event commands and syncs      ║
# ║             them to the organization's guild on first ready.              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import discord
from discord.ext import commands

from bot.chat_client import DiscordChatClient
from bot.commands import COMMAND_MODULES
from bot.dependencies import Dependencies
from bot.dispatcher import CommandDispatcher
from utils.logging import logger

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ BOT CONSTRUCTION                                                          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- create_bot ---
# Builds the Bot with only the Guilds intent (slash commands need nothing more)
# and attaches the CommandDispatcher that command handlers look up.
# Announcement messages go out through this bot unless deps supplies a chat client.
# Args:
#     deps: The dependency container built at startup.
# Returns: A configured, not yet started commands.Bot.
def create_bot(deps: Dependencies) -> commands.Bot:
    config = deps.config
    intents = discord.Intents.none()
    intents.guilds = True
    bot = commands.Bot(
        command_prefix=commands.when_mentioned,
        intents=intents,
        application_id=int(config.discord_app_id) if config.discord_app_id else None,
    )
    if deps.chat_client is None:
        deps.chat_client = DiscordChatClient(bot)
    bot.dispatcher = CommandDispatcher(deps)
    bot.is_initialized = False

    # --- setup_hook ---
    # Runs once after login, before the gateway connects.
    async def setup_hook():
        for module in COMMAND_MODULES:
            await module.register(bot)
        logger.info(f"Registered {len(COMMAND_MODULES)} event commands")

    bot.setup_hook = setup_hook

    # --- on_ready ---
    # Syncs slash commands once; reconnects skip straight through.
    @bot.event
    async def on_ready():
        logger.info(f"Logged in as {bot.user}")
        if bot.is_initialized:
            logger.info("Bot reconnected, skipping initialization")
            return
        try:
            synced = await sync_commands(bot, config.discord_guild_id)
            logger.info(f"Synced {len(synced)} commands.")
            bot.is_initialized = True
        except discord.DiscordException as e:
            logger.exception(f"Error during initialization: {e}")

    @bot.event
    async def on_disconnect():
        logger.warning("Bot disconnected from Discord. Waiting for reconnection...")

    @bot.event
    async def on_resumed():
        logger.info("Bot connection resumed")

    return bot

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ COMMAND SYNC                                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- sync_commands ---
# Guild-scoped sync makes new commands appear immediately; without a guild id
# the commands are synced globally.
async def sync_commands(bot: commands.Bot, guild_id=None):
    if guild_id:
        guild = discord.Object(id=int(guild_id))
        bot.tree.copy_global_to(guild=guild)
        return await bot.tree.sync(guild=guild)
    return await bot.tree.sync()

# --- run_bot ---
# Starts the bot and blocks until it is closed.
async def run_bot(deps: Dependencies):
    bot = create_bot(deps)
    async with bot:
        await bot.start(deps.config.discord_token)
