"""
Conflict rules.

Every rule pulls a candidate pool from a ScheduleQuery (active schedules in
the same academic year + semester, optionally without the schedule itself)
and tests each candidate:

    room-time         same room,              days intersect AND times overlap
    section-time      same subject + section, days intersect AND times overlap
    duplicate         same subject + section, no day/time test
    faculty-time      same faculty,           days intersect AND times overlap
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from schedcheck.models.schedule import Schedule
from schedcheck.services.schedule_query import ScheduleFilter, ScheduleQuery
from schedcheck.utils.conflict import format_time_12h, overlaps
from schedcheck.utils.day_pattern import days_overlap


class ConflictKind(str, Enum):
    ROOM_TIME = "room_time_conflict"
    SECTION_TIME = "section_conflict"
    DUPLICATE_SUBJECT_SECTION = "duplicate_subject_section"
    FACULTY_TIME = "faculty_conflict"


@dataclass(frozen=True)
class ConflictRecord:
    kind: ConflictKind
    schedule: Schedule      # the *other* schedule
    message: str


def _pool(
    query: ScheduleQuery,
    schedule: Schedule,
    exclude_self: bool,
    **keys,
) -> list[Schedule]:
    exclude_id: Optional[int] = schedule.id if (exclude_self and schedule.id) else None
    return query.find_active(
        ScheduleFilter(
            academic_year_id=schedule.academic_year_id,
            semester=schedule.semester,
            exclude_id=exclude_id,
            **keys,
        )
    )


def _clashes(a: Schedule, b: Schedule) -> bool:
    if not days_overlap(a.day_pattern, b.day_pattern):
        return False
    return overlaps(a.start_time, a.end_time, b.start_time, b.end_time)


def _subject_code(s: Schedule) -> str:
    return s.subject.code if s.subject is not None else "Unknown"


def _room_phrase(s: Schedule, prefix: str = "Room ") -> str:
    if s.room is None:
        return "No Room Assigned"
    return prefix + s.room.label


def _time_range(s: Schedule) -> tuple[str, str]:
    return format_time_12h(s.start_time), format_time_12h(s.end_time)


def check_room_time(query: ScheduleQuery, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
    if schedule.room_id is None:
        return []

    conflicts = []
    for existing in _pool(query, schedule, exclude_self, room_id=schedule.room_id):
        if not _clashes(schedule, existing):
            continue
        start, end = _time_range(existing)
        room = existing.room.label if existing.room is not None else "Unassigned"
        conflicts.append(ConflictRecord(
            kind=ConflictKind.ROOM_TIME,
            schedule=existing,
            message=(
                f"Room {room} is already booked for {_subject_code(existing)} "
                f"({existing.day_pattern}) from {start} to {end} "
                f"(Section: {existing.section or 'N/A'})"
            ),
        ))
    return conflicts


def check_section_time(query: ScheduleQuery, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
    # the room may differ: this catches the same class booked twice
    if not schedule.section or schedule.subject_id is None:
        return []

    conflicts = []
    pool = _pool(query, schedule, exclude_self, subject_id=schedule.subject_id, section=schedule.section)
    for existing in pool:
        if not _clashes(schedule, existing):
            continue
        start, end = _time_range(existing)
        conflicts.append(ConflictRecord(
            kind=ConflictKind.SECTION_TIME,
            schedule=existing,
            message=(
                f"Section {schedule.section} is already scheduled for {_subject_code(existing)} "
                f"({existing.day_pattern}) from {start} to {end} in {_room_phrase(existing)}"
            ),
        ))
    return conflicts


def check_duplicate_subject_section(
    query: ScheduleQuery, schedule: Schedule, exclude_self: bool = False
) -> list[ConflictRecord]:
    """Any other active listing of the same subject + section is a duplicate, whatever its time."""
    if not schedule.section or schedule.subject_id is None:
        return []

    conflicts = []
    pool = _pool(query, schedule, exclude_self, subject_id=schedule.subject_id, section=schedule.section)
    for existing in pool:
        start, end = _time_range(existing)
        conflicts.append(ConflictRecord(
            kind=ConflictKind.DUPLICATE_SUBJECT_SECTION,
            schedule=existing,
            message=(
                f"Subject {_subject_code(existing)} Section {existing.section or 'N/A'} already exists "
                f"on {existing.day_pattern} from {start} to {end} in {_room_phrase(existing)}"
            ),
        ))
    return conflicts


def check_faculty_time(query: ScheduleQuery, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
    if schedule.faculty_id is None:
        return []

    conflicts = []
    for existing in _pool(query, schedule, exclude_self, faculty_id=schedule.faculty_id):
        if not _clashes(schedule, existing):
            continue
        start, end = _time_range(existing)
        name = existing.faculty.name if existing.faculty is not None else "Unknown"
        conflicts.append(ConflictRecord(
            kind=ConflictKind.FACULTY_TIME,
            schedule=existing,
            message=(
                f"Faculty {name} is already teaching {_subject_code(existing)} "
                f"(Section {existing.section or 'N/A'}) on {existing.day_pattern} "
                f"from {start} to {end} in {_room_phrase(existing)}"
            ),
        ))
    return conflicts
