"""
Day pattern parsing.

Registrar day codes are free text: "MWF", "TTh", "M-T-TH-F",
"Mon-Fri (Daily)", "Sat" ... This module turns them into a set of
Weekday values so two patterns can be compared.

Rules, in priority order:
1. "MTWTHF", "DAILY" or "MON-FRI" anywhere  -> Mon..Fri
2. "MON-SAT" anywhere                       -> Mon..Sat
3. exactly "SAT"/"SATURDAY" or "SUN"/"SUNDAY"
4. left-to-right scan over DAY_TOKENS, longest token first,
   anything unmatched is skipped

Parsing never fails. Garbage gives an empty set, which overlaps nothing.
"""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache
from typing import Iterable, Optional


class Weekday(IntEnum):
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6
    SUN = 7

    @property
    def short(self) -> str:
        return self.name.capitalize()


WEEKDAYS = frozenset({Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI})
MON_TO_SAT = WEEKDAYS | {Weekday.SAT}

# (marker, days) - substring match, checked in order
RANGE_MARKERS: tuple[tuple[str, frozenset[Weekday]], ...] = (
    ("MTWTHF", WEEKDAYS),
    ("DAILY", WEEKDAYS),
    ("MON-FRI", WEEKDAYS),
    ("MON-SAT", MON_TO_SAT),
)

EXACT_PATTERNS: dict[str, frozenset[Weekday]] = {
    "SAT": frozenset({Weekday.SAT}),
    "SATURDAY": frozenset({Weekday.SAT}),
    "SUN": frozenset({Weekday.SUN}),
    "SUNDAY": frozenset({Weekday.SUN}),
}

# Longest first: "TH" must win over "T", "SAT" over "SA" + "T".
DAY_TOKENS: tuple[tuple[str, Weekday], ...] = (
    ("SAT", Weekday.SAT),
    ("TH", Weekday.THU),
    ("SU", Weekday.SUN),
    ("SA", Weekday.SAT),
    ("M", Weekday.MON),
    ("T", Weekday.TUE),
    ("W", Weekday.WED),
    ("F", Weekday.FRI),
)


def _scan_tokens(text: str) -> frozenset[Weekday]:
    days: set[Weekday] = set()
    i = 0
    while i < len(text):
        for token, day in DAY_TOKENS:
            if text.startswith(token, i):
                days.add(day)
                i += len(token)
                break
        else:
            i += 1
    return frozenset(days)


@lru_cache(maxsize=1024)
def parse_day_pattern(pattern: Optional[str]) -> frozenset[Weekday]:
    """
    Parse a day pattern into a frozenset of Weekday.

    >>> sorted(parse_day_pattern("TTh"))
    [<Weekday.TUE: 2>, <Weekday.THU: 4>]
    """
    text = (pattern or "").strip().upper()
    if not text:
        return frozenset()

    for marker, days in RANGE_MARKERS:
        if marker in text:
            return days

    if text in EXACT_PATTERNS:
        return EXACT_PATTERNS[text]

    return _scan_tokens(text)


def days_overlap(pattern_a: Optional[str], pattern_b: Optional[str]) -> bool:
    """True if the two patterns share at least one weekday."""
    return not parse_day_pattern(pattern_a).isdisjoint(parse_day_pattern(pattern_b))


def format_days(days: Iterable[Weekday]) -> str:
    # canonical Mon -> Sun order
    return ", ".join(d.short for d in sorted(set(days)))
