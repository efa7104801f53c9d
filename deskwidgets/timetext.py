"""Human-readable age of a notification, as shown in its title bar."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)
_SHORT_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _aware(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.now().astimezone()
    if moment.tzinfo is None:
        # A naive time is taken as local time.
        return moment.astimezone()
    return moment


def relative_time_text(ctime_ms: int | str, now: datetime | None = None) -> str | None:
    """Describe how long ago ``ctime_ms`` (milliseconds since the epoch) was.

    Same-day times are given in minutes or hours, the previous day as
    ``Yesterday`` with the clock time, the last week by weekday and clock
    time, and anything older by date. Calendar days are counted in the time
    zone of ``now`` (local time when ``now`` is naive or omitted). Returns
    None for a time that lies after ``now``.
    """
    created_ms = int(ctime_ms)
    current = _aware(now)
    now_ms = (current - _EPOCH) // _MILLISECOND
    elapsed_ms = now_ms - created_ms
    if elapsed_ms < 0:
        return None

    created = (_EPOCH + timedelta(milliseconds=created_ms)).astimezone(current.tzinfo)
    elapsed_days = (current.date() - created.date()).days
    minutes = elapsed_ms // 1000 // 60

    if elapsed_days == 0:
        if minutes == 0:
            return "Just now"
        if 0 < minutes < 60:
            return f"{minutes} minutes ago"
        return f"{minutes // 60} hours ago"
    if 1 <= elapsed_days < 2:
        return "Yesterday " + " " + created.strftime("%H:%M")
    if 2 <= elapsed_days < 7:
        return f"{_SHORT_DAY_NAMES[created.weekday()]} {created.strftime('%H:%M')}"
    return created.strftime("%Y/%m/%d")