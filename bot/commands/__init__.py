# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                ANNOUNCEMENT BOT COMMANDS PACKAGE INIT                      ║
# ║    Exports the event command handlers and their registration hooks        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
Initializes the bot.commands package.

Each command module exposes a ``handle_*_command`` coroutine holding its logic
and a ``register(bot)`` coroutine that adds the slash command to the tree.
``COMMAND_MODULES`` lists the modules ``bot.core`` registers at startup.
"""

from . import addevent, deleteevent, editevent
from .addevent import handle_addevent_command
from .deleteevent import handle_deleteevent_command
from .editevent import handle_editevent_command
from .utilities import send_reply, split_message

COMMAND_MODULES = (addevent, editevent, deleteevent)

__all__ = [
    'COMMAND_MODULES',
    'handle_addevent_command',
    'handle_editevent_command',
    'handle_deleteevent_command',
    'send_reply',
    'split_message',
]
