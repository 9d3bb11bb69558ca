# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                       ENVIRONMENT CONFIGURATION                            ║
# ║    Centralized access and type conversion for environment variables.       ║
# ║     Builds the BotConfig handed to the dependency container at startup.    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ HELPER FUNCTIONS                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- get_bool_env ---
# Retrieves an environment variable and interprets it as a boolean.
# Considers '1', 'true', 'yes' (case-insensitive) as True.
# Args:
#     var_name: The name of the environment variable.
#     default: The default boolean value if the variable is not set.
# Returns: The boolean value of the environment variable or the default.
def get_bool_env(var_name: str, default: bool = False) -> bool:
    val = os.getenv(var_name, str(default)).lower()
    return val in ("1", "true", "yes")

# --- get_str_env ---
# Retrieves an environment variable as a string.
# Args:
#     var_name: The name of the environment variable.
#     default: The default string value if the variable is not set.
# Returns: The string value of the environment variable or the default.
def get_str_env(var_name: str, default: Optional[str] = "") -> Optional[str]:
    return os.getenv(var_name, default)

# --- get_default_service_account_path ---
# Determines the default path for the Google service account JSON file.
# Checks potential locations in order: Docker volume, project root, current directory.
# Returns: A string representing the determined file path.
def get_default_service_account_path() -> str:
    docker_path = "/app/service_account.json"
    if os.path.exists(docker_path):
        return docker_path
    project_root = Path(__file__).resolve().parent.parent
    local_path = project_root / "service_account.json"
    if local_path.exists():
        return str(local_path)
    return "./service_account.json"

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CORE CONFIGURATION VARIABLES                                               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Debug mode flag (controls verbose logging)
DEBUG: bool = get_bool_env("DEBUG", False)

# Organization timezone used for parsing command input and rendering announcements
DEFAULT_TIMEZONE: str = "America/Indiana/Indianapolis"

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ BOT CONFIGURATION                                                          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass(frozen=True)
class BotConfig:
    """Settings read once at process start and passed around explicitly."""

    discord_token: Optional[str] = None
    discord_app_id: Optional[str] = None
    discord_guild_id: Optional[str] = None
    announce_channel_id: Optional[str] = None
    calendar_id: Optional[str] = None
    timezone: str = DEFAULT_TIMEZONE
    google_credentials_file: Optional[str] = None
    google_sa_email: Optional[str] = None
    google_sa_private_key: Optional[str] = None
    upstash_url: Optional[str] = None
    upstash_token: Optional[str] = None
    mapping_store_file: Optional[str] = None
    events_api_url: Optional[str] = None
    events_api_token: Optional[str] = None
    debug: bool = False

    # --- missing ---
    # Lists the environment variables the bot cannot run without.
    # A mapping store backend is required: either Upstash credentials or a local file.
    # Returns: Names of unset required variables, empty when the config is usable.
    def missing(self) -> List[str]:
        required = {
            "DISCORD_BOT_TOKEN": self.discord_token,
            "DISCORD_ANNOUNCE_CHANNEL_ID": self.announce_channel_id,
            "CALENDAR_ID": self.calendar_id,
        }
        names = [name for name, value in required.items() if not value]
        if not self.mapping_store_file and not (self.upstash_url and self.upstash_token):
            names.append("UPSTASH_REDIS_REST_URL/UPSTASH_REDIS_REST_TOKEN (or MAPPING_STORE_FILE)")
        return names

# --- load_bot_config ---
# Reads every bot setting from the environment into a BotConfig.
# Returns: A populated BotConfig; validation is left to BotConfig.missing().
def load_bot_config() -> BotConfig:
    return BotConfig(
        discord_token=get_str_env("DISCORD_BOT_TOKEN", None),
        discord_app_id=get_str_env("DISCORD_APP_ID", None),
        discord_guild_id=get_str_env("DISCORD_GUILD_ID", None),
        announce_channel_id=get_str_env("DISCORD_ANNOUNCE_CHANNEL_ID", None),
        calendar_id=get_str_env("CALENDAR_ID", None),
        timezone=get_str_env("TIMEZONE", None) or DEFAULT_TIMEZONE,
        google_credentials_file=get_str_env(
            "GOOGLE_APPLICATION_CREDENTIALS", get_default_service_account_path()
        ),
        google_sa_email=get_str_env("GOOGLE_SA_EMAIL", None),
        google_sa_private_key=get_str_env("GOOGLE_SA_PRIVATE_KEY", None),
        upstash_url=get_str_env("UPSTASH_REDIS_REST_URL", None),
        upstash_token=get_str_env("UPSTASH_REDIS_REST_TOKEN", None),
        mapping_store_file=get_str_env("MAPPING_STORE_FILE", None),
        events_api_url=get_str_env("EVENTS_API_URL", None),
        events_api_token=get_str_env("EVENTS_API_TOKEN", None),
        debug=DEBUG,
    )
