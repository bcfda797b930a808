# schedcheck/utils/conflict.py
from datetime import datetime, time
from typing import Optional


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    """
    Half-open wall-clock overlap:
        start_a < end_b AND end_a > start_b

    Touching ranges (end_a == start_b) do NOT overlap.
    Both ranges are expected to have start < end.
    """
    return start_a < end_b and end_a > start_b


def duration_seconds(start: time, end: time) -> int:
    # negative when end is before start
    anchor = datetime(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return int(delta.total_seconds())


def format_time_12h(t: Optional[time]) -> str:
    """time(13, 5) -> '1:05 PM'"""
    if t is None:
        return "?"
    return t.strftime("%I:%M %p").lstrip("0")
