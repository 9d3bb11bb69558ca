# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        RECURRENCE RULE BUILDER                             ║
# ║   Turns the admin form's repeat fields into an RFC 5545 RRULE string and   ║
# ║                 parses the exception-date list.                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from datetime import date
from typing import Iterable, List, Optional
import re

from utils.error_handling import ValidationError

FREQUENCIES = ("NONE", "DAILY", "WEEKLY", "MONTHLY", "YEARLY")
WEEKDAY_CODES = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# --- parse_iso_date ---
# Strict YYYY-MM-DD parser used for UNTIL and exception dates.
# Raises: ValidationError on anything else.
def parse_iso_date(value: str, field: str = "date") -> date:
    text = (value or "").strip()
    if not _ISO_DATE.match(text):
        raise ValidationError(f"Invalid {field}: {value!r} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}")

# --- build_rrule ---
# Assembles RRULE:FREQ=..[;INTERVAL=n][;BYDAY=..][;BYMONTHDAY=n][;COUNT=n|;UNTIL=..].
# INTERVAL is emitted only when greater than 1, BYDAY only for WEEKLY and
# BYMONTHDAY only for MONTHLY/YEARLY. COUNT wins when both COUNT and UNTIL are
# given. UNTIL is end of day UTC on the given calendar date.
# Args:
#     freq: One of FREQUENCIES.
#     interval: Repeat every n periods.
#     by_week_days: Weekday codes (MO..SU).
#     by_month_day: Day of month, 1-31 (or -31..-1 counting from the end).
#     count: Number of occurrences.
#     until: Last date as YYYY-MM-DD.
# Returns: The rule string, or None for "NONE".
def build_rrule(
    freq: str,
    interval: Optional[int] = None,
    by_week_days: Optional[Iterable[str]] = None,
    by_month_day: Optional[int] = None,
    count: Optional[int] = None,
    until: Optional[str] = None,
) -> Optional[str]:
    freq = (freq or "NONE").upper()
    if freq not in FREQUENCIES:
        raise ValidationError(f"Unknown frequency: {freq}")
    if freq == "NONE":
        return None

    parts = [f"FREQ={freq}"]

    if interval and interval > 1:
        parts.append(f"INTERVAL={interval}")

    if freq == "WEEKLY" and by_week_days:
        days = [d.strip().upper() for d in by_week_days if d and d.strip()]
        bad = [d for d in days if d not in WEEKDAY_CODES]
        if bad:
            raise ValidationError(f"Unknown weekday code(s): {', '.join(bad)}")
        if days:
            parts.append(f"BYDAY={','.join(days)}")

    if freq in ("MONTHLY", "YEARLY") and by_month_day:
        if not (1 <= abs(by_month_day) <= 31):
            raise ValidationError(f"Day of month out of range: {by_month_day}")
        parts.append(f"BYMONTHDAY={by_month_day}")

    if count and count > 0:
        parts.append(f"COUNT={count}")
    elif until:
        until_date = parse_iso_date(until, "until date")
        parts.append(f"UNTIL={until_date.strftime('%Y%m%d')}T235959Z")

    return "RRULE:" + ";".join(parts)

# --- parse_exdates ---
# Splits a comma-separated list of YYYY-MM-DD dates, dropping blanks.
# Returns: ISO date strings in input order.
def parse_exdates(text: Optional[str]) -> List[str]:
    if not text:
        return []
    entries = [s.strip() for s in text.split(",")]
    return [parse_iso_date(s, "exception date").isoformat() for s in entries if s]
