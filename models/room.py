# models/room.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class RoomStatus(str, enum.Enum):
     """Occupancy of a room. Only the contract lifecycle changes it."""
     VACANT = "Vacant"
     OCCUPIED = "Occupied"


class Room(TimestampMixin, Base):
     """
     Room model - individual rentable rooms within a boarding house.
     Maps to existing 'rooms' table in the database.
     """
     __tablename__ = "rooms"
     __table_args__ = (
          UniqueConstraint("house_id", "room_number", name="uq_rooms_house_room_number"),
     )

     room_id = Column(Integer, primary_key=True, autoincrement=True)
     house_id = Column(
          Integer,
          ForeignKey("boarding_houses.house_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     room_number = Column(String(50), nullable=False)
     floor = Column(Integer, nullable=True)
     area_m2 = Column(Numeric(10, 2), nullable=True)
     base_rent = Column(Numeric(12, 2), nullable=True)
     facilities = Column(Text, nullable=True)
     status = Column(String(20), default=RoomStatus.VACANT.value, nullable=False, index=True)

     # Relationships
     house = relationship("BoardingHouse", back_populates="rooms")
     contracts = relationship("Contract", back_populates="room")

     def __repr__(self):
          return f"<Room(room_id={self.room_id}, room_number='{self.room_number}', status='{self.status}')>"
