"""
Batch re-evaluation of the is_conflicted flag.

scan_and_update_all_conflicts() works in two phases:

1. evaluate every active schedule and collect an immutable tuple of
   FlagChange for the ones whose stored flag is wrong. Nothing is mutated
   here, so every evaluation sees the flags as loaded.
2. hand the whole tuple to ScheduleQuery.apply_conflict_flags() once.

Rules never read is_conflicted, so the order of evaluation does not matter.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from schedcheck.models.schedule import Schedule
from schedcheck.services.conflict_detector import ConflictDetector
from schedcheck.services.conflict_rules import ConflictRecord
from schedcheck.services.schedule_query import FlagChange, ScheduleFilter, ScheduleQuery

logger = logging.getLogger("schedcheck.conflicts")


@dataclass(frozen=True)
class ScanStats:
    total_scanned: int
    conflicts_found: int
    schedules_updated: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ConflictedSchedule:
    schedule: Schedule
    conflicts: list[ConflictRecord]

    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)


class ConflictScanner:
    def __init__(self, query: ScheduleQuery, detector: Optional[ConflictDetector] = None):
        self.query = query
        self.detector = detector or ConflictDetector(query)

    def compute_flag_changes(self, schedules: list[Schedule]) -> tuple[tuple[FlagChange, ...], int]:
        """Phase 1. Returns (changes, number of schedules currently conflicted)."""
        changes: list[FlagChange] = []
        conflicted = 0
        for s in schedules:
            has_conflicts = bool(self.detector.detect_conflicts(s, exclude_self=True))
            if has_conflicts:
                conflicted += 1
            if bool(s.is_conflicted) != has_conflicts:
                changes.append(FlagChange(schedule_id=s.id, is_conflicted=has_conflicts))
        return tuple(changes), conflicted

    def scan_and_update_all_conflicts(self, department_id: Optional[int] = None) -> ScanStats:
        schedules = self.query.find_active(ScheduleFilter(department_id=department_id))
        logger.info("Conflict scan started: %d active schedule(s), department=%s", len(schedules), department_id)

        changes, conflicted = self.compute_flag_changes(schedules)

        # phase 2: single batched write, errors propagate
        if changes:
            self.query.apply_conflict_flags(changes)

        stats = ScanStats(
            total_scanned=len(schedules),
            conflicts_found=conflicted,
            schedules_updated=len(changes),
        )
        logger.info(
            "Conflict scan finished: scanned=%d conflicted=%d updated=%d",
            stats.total_scanned, stats.conflicts_found, stats.schedules_updated,
        )
        return stats

    def get_conflicted_schedules_with_details(
        self,
        department_id: Optional[int] = None,
        academic_year_id: Optional[int] = None,
        semester: Optional[str] = None,
    ) -> list[ConflictedSchedule]:
        # recomputed live; the stored flag may be stale
        schedules = self.query.find_active(ScheduleFilter(
            department_id=department_id,
            academic_year_id=academic_year_id,
            semester=semester,
        ))
        out = []
        for s in schedules:
            conflicts = self.detector.detect_conflicts(s, exclude_self=True)
            if conflicts:
                out.append(ConflictedSchedule(schedule=s, conflicts=conflicts))
        return out
