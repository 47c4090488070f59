# models/invoice.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class InvoiceStatus(str, enum.Enum):
     """Stored payment status. "Overdue" is derived at read time, never stored."""
     UNPAID = "Unpaid"
     PAID = "Paid"


class ServiceType(str, enum.Enum):
     """What an invoice line bills for."""
     ELECTRICITY = "electricity"
     WATER = "water"
     OTHER = "other"


class Invoice(Base):
     """
     Invoice model - one billed period of a contract.
     Maps to existing 'invoices' table in the database.

     A contract can have only one invoice per billing period (YYYY-MM).
     """
     __tablename__ = "invoices"
     __table_args__ = (
          UniqueConstraint("contract_id", "billing_period", name="uq_invoices_contract_period"),
     )

     invoice_id = Column(Integer, primary_key=True, autoincrement=True)
     contract_id = Column(
          Integer,
          ForeignKey("contracts.contract_id"),
          nullable=False,
          index=True
     )

     # Invoice details
     invoice_type = Column(String(50), nullable=True)
     billing_period = Column(String(7), nullable=False)
     issue_date = Column(Date, nullable=False)
     due_date = Column(Date, nullable=True, index=True)
     room_rent = Column(Numeric(12, 2), nullable=False, default=0)
     total_amount = Column(Numeric(12, 2), nullable=False)
     status = Column(String(20), default=InvoiceStatus.UNPAID.value, nullable=False, index=True)
     paid_date = Column(DateTime, nullable=True)
     notes = Column(Text, nullable=True)

     # Relationships
     contract = relationship("Contract", back_populates="invoices")
     details = relationship(
          "InvoiceDetail",
          back_populates="invoice",
          order_by="InvoiceDetail.usage_id",
     )

     def __repr__(self):
          return f"<Invoice(invoice_id={self.invoice_id}, period='{self.billing_period}', status='{self.status}')>"

     @property
     def is_paid(self) -> bool:
          return self.status == InvoiceStatus.PAID


class InvoiceDetail(Base):
     """
     Invoice line item - a metered or flat charge on an invoice.
     Maps to existing 'invoice_details' table in the database.

     Rows written before ``service_type`` existed have it NULL; readers name
     those by position (see services.invoice_service.describe_line_items).
     """
     __tablename__ = "invoice_details"

     usage_id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_id = Column(
          Integer,
          ForeignKey("invoices.invoice_id"),
          nullable=False,
          index=True
     )
     service_type = Column(String(20), nullable=True)
     previous_reading = Column(Numeric(12, 2), nullable=True)
     current_reading = Column(Numeric(12, 2), nullable=True)
     unit_price = Column(Numeric(12, 2), nullable=False, default=0)
     amount = Column(Numeric(12, 2), nullable=False)

     # Relationships
     invoice = relationship("Invoice", back_populates="details")

     def __repr__(self):
          return f"<InvoiceDetail(usage_id={self.usage_id}, invoice_id={self.invoice_id}, amount={self.amount})>"
