# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                  ANNOUNCEMENT BOT ERROR HANDLING UTILITIES                 ║
# ║   Error taxonomy shared by the calendar, store and chat layers, plus the   ║
# ║          best-effort helper used for steps whose failure is benign.        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import logging
from typing import Any, Optional

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CONFIGURATION AND GLOBALS                                                  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

logger = logging.getLogger("calendarbot")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ERROR TAXONOMY                                                             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class BotError(Exception):
    """Base class for every error a command can report back to the user."""


class ValidationError(BotError):
    """Missing or malformed command arguments. Raised before any network call."""


class ProviderError(BotError):
    """The calendar provider (or admin events API) rejected a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(BotError):
    """The referenced calendar event or chat message does not exist."""


class TransientIOError(BotError):
    """Network or storage failure talking to the mapping store or Discord."""

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ASYNCHRONOUS ERROR HANDLING                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- with_async_error_handling ---
# Runs an async function, logging and swallowing any exception.
# Only for best-effort steps; everything else propagates to the command boundary.
# Args:
#     coro_func: The async function to execute.
#     *args: Positional arguments for the function.
#     default_value: The value to return if an exception occurs.
#     error_message: A prefix for the log message when an error occurs.
#     **kwargs: Keyword arguments for the function.
# Returns: The function's result or default_value on error.
async def with_async_error_handling(
    coro_func,
    *args,
    default_value: Any = None,
    error_message: str = "An async error occurred",
    **kwargs
) -> Any:
    try:
        return await coro_func(*args, **kwargs)
    except Exception as e:
        logger.warning(f"{error_message} in {coro_func.__name__}: {e}")
        return default_value
