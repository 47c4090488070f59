# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.

Line items accept both the dashboard's short keys (old/new/price) and the
column names (previous_reading/current_reading/unit_price).
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, field_validator

from models import ServiceType


class InvoiceItemCreate(BaseModel):
     """One metered or flat charge on a new invoice."""
     previous_reading: Optional[Decimal] = Field(
          None, validation_alias=AliasChoices("previous_reading", "old"), description="Meter reading at period start"
     )
     current_reading: Optional[Decimal] = Field(
          None, validation_alias=AliasChoices("current_reading", "new"), description="Meter reading at period end"
     )
     unit_price: Optional[Decimal] = Field(
          None, ge=0, validation_alias=AliasChoices("unit_price", "price"), description="Price per unit"
     )
     amount: Decimal = Field(..., ge=0, description="Line total")
     service_type: Optional[ServiceType] = Field(None, description="electricity, water or other")


class InvoiceCreate(BaseModel):
     """Schema for creating a new invoice."""
     contract_id: int = Field(..., gt=0, description="Contract being billed (must exist)")
     invoice_type: Optional[str] = Field(
          None, max_length=50, validation_alias=AliasChoices("type", "invoice_type"), description="e.g. Monthly"
     )
     billing_period: Optional[str] = Field(
          None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM; derived from due_date when omitted"
     )
     due_date: Optional[date] = Field(None, description="Payment due date")
     items: List[InvoiceItemCreate] = Field(default_factory=list)
     total_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Invoice total")
     room_rent: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     notes: Optional[str] = None

     @field_validator("billing_period", "due_date", mode="before")
     @classmethod
     def blank_as_missing(cls, value):
          """Forms send "" for fields left empty."""
          if isinstance(value, str) and not value.strip():
               return None
          return value

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "type": "Monthly",
                    "contract_id": 1,
                    "billing_period": "2026-03",
                    "due_date": "2026-03-10",
                    "items": [
                         {"old": 120, "new": 180, "price": 3500, "amount": 210000, "service_type": "electricity"},
                         {"old": 30, "new": 36, "price": 15000, "amount": 90000, "service_type": "water"}
                    ],
                    "room_rent": 2500000,
                    "total_amount": 2800000,
                    "notes": "March bill"
               }
          }
     )


class InvoiceStatusUpdate(BaseModel):
     """Schema for setting the payment status."""
     status: str = Field(..., description="Paid or Unpaid")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "status": "Paid"
               }
          }
     )


class InvoiceItemResponse(BaseModel):
     usage_id: int
     service_type: str
     service_name: str
     unit_label: str
     previous_reading: Optional[Decimal] = None
     current_reading: Optional[Decimal] = None
     unit_price: Decimal
     amount: Decimal


class InvoiceResponse(BaseModel):
     """Schema for invoice response."""
     invoice_id: int
     contract_id: int
     invoice_type: Optional[str] = None
     billing_period: str
     issue_date: date
     due_date: Optional[date] = None
     room_rent: Decimal
     total_amount: Decimal
     status: str
     display_status: str
     overdue_days: int = 0
     paid_date: Optional[datetime] = None
     notes: Optional[str] = None

     # Optional related data
     tenant_name: Optional[str] = None
     tenant_phone: Optional[str] = None
     room_number: Optional[str] = None
     house_name: Optional[str] = None
     items: List[InvoiceItemResponse] = Field(default_factory=list)

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "invoice_id": 1,
                    "contract_id": 1,
                    "invoice_type": "Monthly",
                    "billing_period": "2026-03",
                    "issue_date": "2026-03-01",
                    "due_date": "2026-03-10",
                    "room_rent": 2500000,
                    "total_amount": 2800000,
                    "status": "Unpaid",
                    "display_status": "Overdue",
                    "overdue_days": 4,
                    "paid_date": None,
                    "tenant_name": "Nguyen Van A",
                    "tenant_phone": "0901234567",
                    "room_number": "101",
                    "house_name": "Sunrise House",
                    "items": []
               }
          }
     )


class InvoiceListResponse(BaseModel):
     """Schema for invoice list response."""
     invoices: List[InvoiceResponse]
     total: int
