from sqlalchemy import Boolean, Column, Integer, String, Time, ForeignKey
from sqlalchemy.orm import relationship
from schedcheck.database import Base

# related mappers must be registered before Schedule is configured
from schedcheck.models import academic_year, department, faculty, room, subject  # noqa: F401

class Schedule(Base):
    """
    One meeting of a subject-section: room, day pattern and time window
    inside one academic period (academic_year_id + semester).
    """
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True)

    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)
    semester = Column(String(20), nullable=False, index=True)

    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), index=True)
    faculty_id = Column(Integer, ForeignKey("faculty.id"), index=True)

    section = Column(String(50))
    day_pattern = Column(String(255))
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    enrolled_students = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default="active", nullable=False, index=True)

    # derived: only written by conflict recomputation
    is_conflicted = Column(Boolean, default=False, nullable=False)

    # relationship
    academic_year = relationship("AcademicYear")
    subject = relationship("Subject", back_populates="schedules")
    room = relationship("Room")
    faculty = relationship("Faculty")
