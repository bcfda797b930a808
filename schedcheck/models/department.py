from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from schedcheck.database import Base

class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    code = Column(String(20))
    name = Column(String(100), nullable=False)

    subjects = relationship("Subject", back_populates="department")
