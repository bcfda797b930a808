from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from schedcheck.database import get_db
from schedcheck.errors import ConflictScanError
from schedcheck.services.conflict_detector import ConflictDetector
from schedcheck.services.conflict_scanner import ConflictScanner
from schedcheck.services.schedule_query import SqlAlchemyScheduleQuery

from schedcheck.schemas.conflict import (
    ConflictOut, ConflictStatusOut, ConflictedScheduleOut,
    ScanStatsOut, ScheduleBriefOut, ScheduleCheckOut,
)

import logging
logger = logging.getLogger("schedcheck.admin")


router = APIRouter(prefix="/admin/conflicts", tags=["Admin - Conflicts"])


def get_schedule_query(db: Session = Depends(get_db)) -> SqlAlchemyScheduleQuery:
    return SqlAlchemyScheduleQuery(db)


def _get_schedule_or_404(query: SqlAlchemyScheduleQuery, schedule_id: int):
    s = query.get(schedule_id)
    if not s:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return s


@router.post("/scan", response_model=ScanStatsOut)
def scan_conflicts(
    department_id: Optional[int] = Query(None, description="只掃描此系所的課程"),
    query: SqlAlchemyScheduleQuery = Depends(get_schedule_query),
):
    try:
        stats = ConflictScanner(query).scan_and_update_all_conflicts(department_id)
    except ConflictScanError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Conflict scan failed, no flags were saved ({e.attempted} records attempted)",
        )
    return ScanStatsOut(**stats.as_dict())


@router.get("", response_model=list[ConflictedScheduleOut])
def list_conflicted_schedules(
    department_id: Optional[int] = Query(None),
    academic_year_id: Optional[int] = Query(None),
    semester: Optional[str] = Query(None, description="e.g. 1st Semester"),
    query: SqlAlchemyScheduleQuery = Depends(get_schedule_query),
):
    items = ConflictScanner(query).get_conflicted_schedules_with_details(
        department_id=department_id,
        academic_year_id=academic_year_id,
        semester=semester,
    )
    return [
        ConflictedScheduleOut(
            schedule=ScheduleBriefOut.model_validate(x.schedule),
            conflicts=[ConflictOut.from_record(c) for c in x.conflicts],
            conflict_count=x.conflict_count,
        )
        for x in items
    ]


@router.get("/schedules/{schedule_id}", response_model=ScheduleCheckOut)
def check_schedule(schedule_id: int, query: SqlAlchemyScheduleQuery = Depends(get_schedule_query)):
    s = _get_schedule_or_404(query, schedule_id)
    detector = ConflictDetector(query)

    conflicts = detector.detect_conflicts(s, exclude_self=True)
    duplicates = detector.check_duplicate_subject_section(s, exclude_self=True)
    faculty = detector.check_faculty_conflicts(s, exclude_self=True)

    return ScheduleCheckOut(
        schedule_id=s.id,
        is_conflicted=bool(conflicts),
        conflicts=[ConflictOut.from_record(c) for c in conflicts],
        duplicates=[ConflictOut.from_record(c) for c in duplicates],
        faculty_conflicts=[ConflictOut.from_record(c) for c in faculty],
        time_errors=detector.validate_time_range(s),
        capacity_errors=detector.validate_room_capacity(s),
        summary=detector.conflict_summary(conflicts + duplicates + faculty),
    )


@router.post("/schedules/{schedule_id}/refresh", response_model=ConflictStatusOut)
def refresh_schedule_status(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    query = SqlAlchemyScheduleQuery(db)
    s = _get_schedule_or_404(query, schedule_id)
    conflicts = ConflictDetector(query).update_conflict_status(s)
    db.commit()
    db.refresh(s)
    logger.info("schedule %s is_conflicted=%s", s.id, s.is_conflicted)

    return ConflictStatusOut(
        schedule_id=s.id,
        is_conflicted=s.is_conflicted,
        conflicts=[ConflictOut.from_record(c) for c in conflicts],
    )
