from __future__ import annotations

import logging
from typing import Optional

from schedcheck.config import Settings, settings as default_settings
from schedcheck.models.schedule import Schedule
from schedcheck.services import conflict_rules
from schedcheck.services.conflict_rules import ConflictRecord
from schedcheck.services.schedule_query import ScheduleQuery
from schedcheck.utils.conflict import duration_seconds

logger = logging.getLogger("schedcheck.conflicts")


class ConflictDetector:
    """
    Runs the conflict rules for a single schedule.

    detect_conflicts() is what decides the is_conflicted flag: room-time,
    then section-time when the schedule has a section. Duplicate listings and
    faculty double-booking are separate checks the caller opts into.
    """

    def __init__(self, query: ScheduleQuery, settings: Optional[Settings] = None):
        self.query = query
        self.settings = settings or default_settings

    def detect_conflicts(self, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
        # draft without a room cannot clash on room/time
        if schedule.room_id is None:
            return []

        conflicts = conflict_rules.check_room_time(self.query, schedule, exclude_self)
        if schedule.section:
            conflicts += conflict_rules.check_section_time(self.query, schedule, exclude_self)

        logger.debug("schedule id=%s -> %d conflict(s)", schedule.id, len(conflicts))
        return conflicts

    def check_duplicate_subject_section(self, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
        return conflict_rules.check_duplicate_subject_section(self.query, schedule, exclude_self)

    def check_faculty_conflicts(self, schedule: Schedule, exclude_self: bool = False) -> list[ConflictRecord]:
        return conflict_rules.check_faculty_time(self.query, schedule, exclude_self)

    def update_conflict_status(self, schedule: Schedule) -> list[ConflictRecord]:
        """Recompute is_conflicted in place. Persisting it is up to the caller."""
        conflicts = self.detect_conflicts(schedule, exclude_self=True)
        schedule.is_conflicted = bool(conflicts)
        return conflicts

    def validate_time_range(self, schedule: Schedule) -> list[str]:
        errors: list[str] = []
        start, end = schedule.start_time, schedule.end_time
        if start is None or end is None:
            return ["Start time and end time are required."]

        if start >= end:
            errors.append("End time must be after start time.")

        seconds = duration_seconds(start, end)
        if seconds > self.settings.MAX_MEETING_HOURS * 3600:
            errors.append(f"Schedule duration cannot exceed {self.settings.MAX_MEETING_HOURS} hours.")
        if seconds < self.settings.MIN_MEETING_MINUTES * 60:
            errors.append(f"Schedule duration must be at least {self.settings.MIN_MEETING_MINUTES} minutes.")

        return errors

    def validate_room_capacity(self, schedule: Schedule) -> list[str]:
        room = schedule.room
        enrolled = schedule.enrolled_students or 0
        if room is None or not room.capacity or enrolled <= 0:
            return []
        if enrolled > room.capacity:
            return [f"Enrolled students ({enrolled}) exceeds room capacity ({room.capacity})."]
        return []

    @staticmethod
    def conflict_summary(conflicts: list[ConflictRecord]) -> str:
        if not conflicts:
            return "No conflicts detected."
        lines = [f"{len(conflicts)} conflict(s) detected:"]
        lines += [f"• {c.message}" for c in conflicts]
        return "\n".join(lines)
