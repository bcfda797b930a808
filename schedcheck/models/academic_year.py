from sqlalchemy import Boolean, Column, Integer, String
from schedcheck.database import Base

class AcademicYear(Base):
    __tablename__ = "academic_years"

    id = Column(Integer, primary_key=True)
    label = Column(String(20), nullable=False)   # e.g. "2025-2026"
    is_current = Column(Boolean, default=False, nullable=False)
