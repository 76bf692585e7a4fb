from datetime import datetime, time
import time as _time

TIME_OPTION_LABELS = {
    "emergency": "Emergency",
    "within_1_hour": "Within 1 hour",
    "within_5_hours": "Within 5 hours",
    "today": "Today",
}


def now_ms() -> int:
    return int(_time.time() * 1000)


def parse_iso_timestamp(value: str) -> datetime:
    """
    Parses an ISO-8601 timestamp as sent by browsers
    (e.g. "2025-01-31T09:15:00.000Z"). Naive values are taken as local time.
    Raises ValueError when the string is not a timestamp.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("timestamp must be a non-empty ISO-8601 string")
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def start_of_day_ms(now: int) -> int:
    """Local midnight of the day containing `now` (epoch ms)."""
    day = datetime.fromtimestamp(now / 1000).date()
    return int(datetime.combine(day, time.min).timestamp() * 1000)


def urgency_tag(needed_at_iso: str, now: int, time_option: str = None) -> str:
    """
    Derives the feed label for a need:
    explicit time option first, then how close the deadline is.
    """
    if time_option in TIME_OPTION_LABELS:
        return TIME_OPTION_LABELS[time_option]

    needed = parse_iso_timestamp(needed_at_iso)
    diff_sec = needed.timestamp() - now / 1000
    if diff_sec <= 3600:
        return "Within 1 hour"
    if diff_sec <= 2 * 3600:
        return "Urgent"

    local_needed = needed.astimezone()
    today = datetime.fromtimestamp(now / 1000).date()
    if local_needed.date() == today:
        return "Today"
    return local_needed.strftime("%Y-%m-%d %H:%M")
