# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                 ANNOUNCEMENT BOT COMMAND UTILITIES MODULE                  ║
# ║     Shared helpers for the event command modules and their replies         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from discord import Interaction

from bot.dispatcher import CommandDispatcher

# Discord's per-message character limit
MAX_MESSAGE_LENGTH = 2000

# --- get_dispatcher ---
# Returns the CommandDispatcher attached to the bot at startup.
# Args:
#     interaction: The discord.Interaction whose client is the running bot.
def get_dispatcher(interaction: Interaction) -> CommandDispatcher:
    return interaction.client.dispatcher

# --- split_message ---
# Splits text on line boundaries so no chunk exceeds the Discord limit.
# Lines longer than the limit are hard-wrapped.
def split_message(message: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    chunks = []
    chunk = ""
    for line in message.split("\n"):
        while len(line) > limit:
            if chunk:
                chunks.append(chunk)
                chunk = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if chunk and len(chunk) + len(line) + 1 > limit:
            chunks.append(chunk)
            chunk = line
        else:
            chunk = f"{chunk}\n{line}" if chunk else line
    if chunk:
        chunks.append(chunk)
    return chunks

# --- send_reply ---
# Sends the dispatcher's reply as follow-up message(s) to a deferred interaction.
async def send_reply(interaction: Interaction, message: str):
    for chunk in split_message(message) or ["(no response)"]:
        await interaction.followup.send(chunk)
