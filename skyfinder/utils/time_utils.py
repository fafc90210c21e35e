from __future__ import annotations

from datetime import datetime, timedelta, timezone


def local_datetime(unix_time: float, utc_offset_sec: int = 0) -> datetime:
    tz = timezone(timedelta(seconds=utc_offset_sec))
    return datetime.fromtimestamp(unix_time, tz)


def format_date(unix_time: float, utc_offset_sec: int = 0) -> str:
    dt = local_datetime(unix_time, utc_offset_sec)
    return f"{dt:%A}, {dt:%b} {dt.day}"


def format_clock(unix_time: float, utc_offset_sec: int = 0) -> str:
    dt = local_datetime(unix_time, utc_offset_sec)
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt:%M} {dt:%p}"
