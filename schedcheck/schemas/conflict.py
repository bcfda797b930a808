from datetime import time
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class ScheduleBriefOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    academic_year_id: int
    semester: str
    subject_id: int
    room_id: Optional[int] = None
    faculty_id: Optional[int] = None
    section: Optional[str] = None
    day_pattern: Optional[str] = None
    start_time: time
    end_time: time
    enrolled_students: int = 0
    status: str
    is_conflicted: bool = False


class ConflictOut(BaseModel):
    type: str
    schedule_id: int
    message: str

    @classmethod
    def from_record(cls, c) -> "ConflictOut":
        return cls(type=c.kind.value, schedule_id=c.schedule.id, message=c.message)


class ScanStatsOut(BaseModel):
    total_scanned: int
    conflicts_found: int
    schedules_updated: int


class ConflictedScheduleOut(BaseModel):
    schedule: ScheduleBriefOut
    conflicts: List[ConflictOut]
    conflict_count: int


class ScheduleCheckOut(BaseModel):
    schedule_id: int
    is_conflicted: bool
    conflicts: List[ConflictOut] = []
    duplicates: List[ConflictOut] = []
    faculty_conflicts: List[ConflictOut] = []
    time_errors: List[str] = []
    capacity_errors: List[str] = []
    summary: str


class ConflictStatusOut(BaseModel):
    schedule_id: int
    is_conflicted: bool
    conflicts: List[ConflictOut]
