# models/tenant.py
from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Tenant(TimestampMixin, Base):
     """
     Tenant model - identity of a person renting a room.
     Maps to existing 'tenants' table in the database.

     The phone number is the natural key: contracts for a phone that is
     already registered reuse the same tenant row.
     """
     __tablename__ = "tenants"

     tenant_id = Column(Integer, primary_key=True, autoincrement=True)

     # Personal info
     full_name = Column(String(255), nullable=False)
     phone = Column(String(20), unique=True, nullable=False, index=True)
     email = Column(String(255), nullable=True)

     # ID verification
     id_card_number = Column(String(50), nullable=False)
     id_card_photos = Column(JSON, nullable=True)  # Ordered list of stored image paths

     # Relationships
     contracts = relationship("Contract", back_populates="tenant")
     account = relationship("UserAccount", back_populates="tenant", uselist=False)
     maintenance_requests = relationship("MaintenanceRequest", back_populates="tenant")

     def __repr__(self):
          return f"<Tenant(tenant_id={self.tenant_id}, name='{self.full_name}', phone='{self.phone}')>"
