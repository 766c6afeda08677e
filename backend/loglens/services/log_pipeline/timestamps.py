# timestamps.py - Turns the "local time + zone offset" pair written on each header into one comparable UTC instant.

from __future__ import annotations
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

LOCAL_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

LOCAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}$")
OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})$")

# Instants this close to the datetime limits cannot be padded and bucketed on the timeline
EDGE_MARGIN = timedelta(hours=1)
EARLIEST = datetime.min.replace(tzinfo=timezone.utc) + EDGE_MARGIN
LATEST = datetime.max.replace(tzinfo=timezone.utc) - EDGE_MARGIN


def parse_offset(offset: str) -> Optional[timezone]:
    """
    Parse a signed "HH:MM" zone offset.
    Returns None when the shape is wrong or the value is out of range.
    """
    m = OFFSET_RE.match(offset.strip())
    if not m:
        return None

    sign, hours, minutes = m.group(1), int(m.group(2)), int(m.group(3))
    if hours > 23 or minutes > 59:
        return None

    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if sign == "-" else delta)


# The literal is the wall clock at the given offset, so utc = local - offset (ISO 8601).
# "2025-04-17 08:21:24.838 +02:00" -> 2025-04-17 06:21:24.838 UTC
def resolve_timestamp(local: str, offset: str) -> Optional[datetime]:
    local = local.strip()
    if not LOCAL_RE.match(local):
        return None

    tz = parse_offset(offset)
    if tz is None:
        return None

    try:
        naive = datetime.strptime(local, LOCAL_FORMAT)
    except ValueError:
        # Right shape but impossible calendar value, e.g. month 13
        return None

    try:
        resolved = naive.replace(tzinfo=tz).astimezone(timezone.utc)
    except OverflowError:
        # Shifting by the offset leaves the representable range, e.g. year 1 at +02:00
        return None

    if resolved < EARLIEST or resolved > LATEST:
        return None
    return resolved
