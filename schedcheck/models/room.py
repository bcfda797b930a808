from sqlalchemy import Column, Integer, String
from schedcheck.database import Base

class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True)
    code = Column(String(20))
    name = Column(String(100))

    # null = capacity unknown, never checked
    capacity = Column(Integer)

    @property
    def label(self) -> str:
        return self.code or self.name or "Unnamed Room"
