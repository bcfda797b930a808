from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from schedcheck.database import Base

class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True)
    code = Column(String(20), nullable=False)
    title = Column(String(255))

    department_id = Column(Integer, ForeignKey("departments.id"))

    # relationship
    department = relationship("Department", back_populates="subjects")
    schedules = relationship("Schedule", back_populates="subject")
