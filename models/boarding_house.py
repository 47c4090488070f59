# models/boarding_house.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class BoardingHouse(TimestampMixin, Base):
     """
     BoardingHouse model - a building with rentable rooms.
     Maps to existing 'boarding_houses' table in the database.
     """
     __tablename__ = "boarding_houses"

     house_id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=True, index=True)
     house_name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=True)
     description = Column(Text, nullable=True)

     # Maintained by the room ledger whenever a room is added
     total_rooms = Column(Integer, default=0, nullable=False)

     # Relationships
     landlord = relationship("Landlord", back_populates="houses")
     rooms = relationship("Room", back_populates="house", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<BoardingHouse(house_id={self.house_id}, name='{self.house_name}')>"
