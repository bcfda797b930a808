from sqlalchemy import Column, Integer, String
from schedcheck.database import Base

class Faculty(Base):
    __tablename__ = "faculty"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
