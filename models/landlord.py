# models/landlord.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class Landlord(Base):
     """
     Landlord model - the back-office user who owns boarding houses.
     Maps to existing 'landlords' table in the database.
     """
     __tablename__ = "landlords"

     landlord_id = Column(Integer, primary_key=True, autoincrement=True)
     full_name = Column(String(255), nullable=False)
     phone = Column(String(20), unique=True, nullable=False, index=True)
     email = Column(String(255), unique=True, nullable=True, index=True)
     password_hash = Column(String(255), nullable=False)
     address = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     houses = relationship("BoardingHouse", back_populates="landlord")

     def __repr__(self):
          return f"<Landlord(landlord_id={self.landlord_id}, phone='{self.phone}')>"
