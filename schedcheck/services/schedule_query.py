"""
Candidate pool lookups for the conflict rules.

The rules only need two capabilities from storage:

    find_active(filters)           -> schedules matching ScheduleFilter
    apply_conflict_flags(changes)  -> write a batch of is_conflicted values atomically

SqlAlchemyScheduleQuery is the production adapter, InMemoryScheduleQuery
keeps plain Schedule objects in a list (tests, embedding).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from schedcheck.config import settings
from schedcheck.errors import ConflictScanError
from schedcheck.models.schedule import Schedule
from schedcheck.models.subject import Subject

logger = logging.getLogger("schedcheck.query")


@dataclass(frozen=True)
class ScheduleFilter:
    room_id: Optional[int] = None
    academic_year_id: Optional[int] = None
    semester: Optional[str] = None
    subject_id: Optional[int] = None
    section: Optional[str] = None
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    exclude_id: Optional[int] = None
    status: str = settings.ACTIVE_STATUS


@dataclass(frozen=True)
class FlagChange:
    schedule_id: int
    is_conflicted: bool


class ScheduleQuery(Protocol):
    def find_active(self, filters: ScheduleFilter) -> list[Schedule]: ...

    def apply_conflict_flags(self, changes: Sequence[FlagChange]) -> None: ...


def _department_of(s: Schedule) -> Optional[int]:
    if s.subject is not None:
        return s.subject.department_id
    return None


class InMemoryScheduleQuery:
    """Filters a list of (possibly detached) Schedule objects in Python."""

    def __init__(self, schedules: Iterable[Schedule] = ()):
        self.schedules: list[Schedule] = list(schedules)
        self.flag_writes = 0

    def add(self, schedule: Schedule) -> Schedule:
        self.schedules.append(schedule)
        return schedule

    def get(self, schedule_id: int) -> Optional[Schedule]:
        for s in self.schedules:
            if s.id == schedule_id:
                return s
        return None

    def find_active(self, filters: ScheduleFilter) -> list[Schedule]:
        f = filters
        out = []
        for s in self.schedules:
            if s.status != f.status:
                continue
            if f.exclude_id is not None and s.id == f.exclude_id:
                continue
            if f.room_id is not None and s.room_id != f.room_id:
                continue
            if f.academic_year_id is not None and s.academic_year_id != f.academic_year_id:
                continue
            if f.semester is not None and s.semester != f.semester:
                continue
            if f.subject_id is not None and s.subject_id != f.subject_id:
                continue
            if f.section is not None and s.section != f.section:
                continue
            if f.faculty_id is not None and s.faculty_id != f.faculty_id:
                continue
            if f.department_id is not None and _department_of(s) != f.department_id:
                continue
            out.append(s)
        return sorted(out, key=lambda x: x.id or 0)

    def apply_conflict_flags(self, changes: Sequence[FlagChange]) -> None:
        by_id = {s.id: s for s in self.schedules}
        missing = [c.schedule_id for c in changes if c.schedule_id not in by_id]
        if missing:
            # validate the whole batch before touching anything
            raise ConflictScanError(
                f"Unknown schedule ids in conflict flag batch: {missing}",
                [c.schedule_id for c in changes],
            )
        for c in changes:
            by_id[c.schedule_id].is_conflicted = c.is_conflicted
        self.flag_writes += 1


class SqlAlchemyScheduleQuery:
    def __init__(self, db: Session):
        self.db = db

    def get(self, schedule_id: int) -> Optional[Schedule]:
        return self.db.query(Schedule).filter(Schedule.id == schedule_id).first()

    def find_active(self, filters: ScheduleFilter) -> list[Schedule]:
        f = filters
        q = (
            self.db.query(Schedule)
            .options(
                joinedload(Schedule.subject),
                joinedload(Schedule.room),
                joinedload(Schedule.faculty),
            )
            .filter(Schedule.status == f.status)
        )

        if f.exclude_id is not None:
            q = q.filter(Schedule.id != f.exclude_id)
        if f.room_id is not None:
            q = q.filter(Schedule.room_id == f.room_id)
        if f.academic_year_id is not None:
            q = q.filter(Schedule.academic_year_id == f.academic_year_id)
        if f.semester is not None:
            q = q.filter(Schedule.semester == f.semester)
        if f.subject_id is not None:
            q = q.filter(Schedule.subject_id == f.subject_id)
        if f.section is not None:
            q = q.filter(Schedule.section == f.section)
        if f.faculty_id is not None:
            q = q.filter(Schedule.faculty_id == f.faculty_id)
        if f.department_id is not None:
            q = q.join(Subject, Subject.id == Schedule.subject_id).filter(
                Subject.department_id == f.department_id
            )

        return q.order_by(Schedule.id.asc()).all()

    def apply_conflict_flags(self, changes: Sequence[FlagChange]) -> None:
        """
        One transaction for the whole batch: two UPDATE ... WHERE id IN (...)
        statements, then commit. Any failure rolls everything back.
        """
        if not changes:
            return

        ids = [c.schedule_id for c in changes]
        to_true = [c.schedule_id for c in changes if c.is_conflicted]
        to_false = [c.schedule_id for c in changes if not c.is_conflicted]

        try:
            if to_true:
                self.db.query(Schedule).filter(Schedule.id.in_(to_true)).update(
                    {Schedule.is_conflicted: True}, synchronize_session=False
                )
            if to_false:
                self.db.query(Schedule).filter(Schedule.id.in_(to_false)).update(
                    {Schedule.is_conflicted: False}, synchronize_session=False
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Conflict flag batch failed (%d records)", len(ids))
            raise ConflictScanError(
                f"Failed to write conflict flags for {len(ids)} schedule(s)", ids
            ) from e
