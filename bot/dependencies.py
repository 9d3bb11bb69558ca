"""
dependencies.py: The collaborators a command needs, built once at startup.

Handlers receive this container instead of reaching for module-level clients,
which lets tests swap in fakes for the calendar, store and chat layers.
"""
from dataclasses import dataclass
from typing import Any, Optional

from bot.calendar_client import CalendarClient
from bot.mapping_store import create_mapping_store
from utils.environ import BotConfig


@dataclass
class Dependencies:
    calendar_client: Any
    mapping_store: Any
    # Bound to the running bot by bot.core.create_bot when left unset
    chat_client: Optional[Any]
    config: BotConfig


# --- build_dependencies ---
# Constructs the production clients from configuration.
# Raises whatever credential loading raises; main.py reports it and exits.
def build_dependencies(config: BotConfig) -> Dependencies:
    return Dependencies(
        calendar_client=CalendarClient.from_config(config),
        mapping_store=create_mapping_store(config),
        chat_client=None,
        config=config,
    )
