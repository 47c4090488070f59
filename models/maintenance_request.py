# models/maintenance_request.py
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class MaintenanceStatus(str, enum.Enum):
     NEW = "New"
     IN_PROGRESS = "InProgress"
     COMPLETED = "Completed"
     CANCELLED = "Cancelled"


class MaintenanceRequest(Base):
     """
     Maintenance request raised by a tenant for the room they rent.
     Maps to existing 'maintenance_requests' table in the database.
     """
     __tablename__ = "maintenance_requests"

     request_id = Column(Integer, primary_key=True, autoincrement=True)
     room_id = Column(Integer, ForeignKey("rooms.room_id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False, index=True)

     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     request_date = Column(DateTime, server_default=func.now(), nullable=False)
     status = Column(String(20), default=MaintenanceStatus.NEW.value, nullable=False, index=True)
     resolved_date = Column(DateTime, nullable=True)
     resolution_note = Column(Text, nullable=True)

     # Relationships
     room = relationship("Room")
     tenant = relationship("Tenant", back_populates="maintenance_requests")

     def __repr__(self):
          return f"<MaintenanceRequest(request_id={self.request_id}, status='{self.status}')>"
