# models/contract.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class ContractStatus(str, enum.Enum):
     """Lifecycle state of a lease contract."""
     ACTIVE = "Active"
     TERMINATED = "Terminated"
     EXPIRED = "Expired"


class Contract(TimestampMixin, Base):
     """
     Contract model - lease agreement between a tenant and a room.
     Maps to existing 'contracts' table in the database.

     ``is_current`` marks the contract that occupies the room right now.
     The filtered unique index allows at most one current contract per room.
     """
     __tablename__ = "contracts"
     __table_args__ = (
          Index(
               "uq_contracts_current_room",
               "room_id",
               unique=True,
               sqlite_where=text("is_current = 1"),
               mssql_where=text("is_current = 1"),
               postgresql_where=text("is_current"),
          ),
     )

     contract_id = Column(Integer, primary_key=True, autoincrement=True)
     room_id = Column(Integer, ForeignKey("rooms.room_id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False, index=True)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     # Pricing
     deposit_amount = Column(Numeric(12, 2), nullable=False, default=0)
     rent_amount = Column(Numeric(12, 2), nullable=False)

     # Free text; may carry the legacy "PASSWORD:<digits>" line
     notes = Column(Text, nullable=True)
     contract_file_url = Column(String(500), nullable=True)

     status = Column(String(20), default=ContractStatus.ACTIVE.value, nullable=False, index=True)
     is_current = Column(Boolean, default=True, nullable=False)

     # Relationships
     room = relationship("Room", back_populates="contracts")
     tenant = relationship("Tenant", back_populates="contracts")
     invoices = relationship("Invoice", back_populates="contract")

     def __repr__(self):
          return f"<Contract(contract_id={self.contract_id}, room_id={self.room_id}, status='{self.status}', is_current={self.is_current})>"
