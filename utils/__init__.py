"""
Shared helpers for the announcement bot: configuration, logging, error
taxonomy, timezone handling and recurrence rules.
"""

from .error_handling import (
    BotError,
    NotFoundError,
    ProviderError,
    TransientIOError,
    ValidationError,
)
from .rrule import build_rrule, parse_exdates
from .timezone_utils import format_when, parse_local_datetime, to_utc_rfc3339
