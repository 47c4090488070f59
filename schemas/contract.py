# schemas/contract.py
"""
Pydantic schemas for Contract API request/response validation.

Contract creation is a multipart form (ID photos and the signed lease are
uploaded with it), so only updates and responses have JSON schemas.
"""
from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class ContractUpdate(BaseModel):
     """
     Schema for editing a contract.

     ``password`` of six or more digits resets the tenant's portal secret.
     ``status`` moves the lease: Active, Terminated, Expired or Unoccupied.
     An omitted ``deposit_amount`` keeps the stored deposit.
     """
     start_date: date
     end_date: date
     deposit_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     rent_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     notes: Optional[str] = None
     status: Optional[str] = None
     password: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "start_date": "2026-01-01",
                    "end_date": "2026-12-31",
                    "deposit_amount": 3000000,
                    "rent_amount": 2500000,
                    "notes": "Includes parking",
                    "status": "Active",
                    "password": "482913"
               }
          }
     )


class ContractResponse(BaseModel):
     """Schema for contract response. ``notes`` never contains the PASSWORD line."""
     contract_id: int
     room_id: int
     tenant_id: int
     start_date: date
     end_date: date
     deposit_amount: Decimal
     rent_amount: Decimal
     notes: Optional[str] = None
     contract_file_url: Optional[str] = None
     status: str
     is_current: bool

     # Optional related data
     tenant_name: Optional[str] = None
     tenant_phone: Optional[str] = None
     tenant_email: Optional[str] = None
     id_card_photos: List[str] = Field(default_factory=list)
     room_number: Optional[str] = None
     house_name: Optional[str] = None
     username: Optional[str] = None
     password: Optional[str] = None

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "contract_id": 1,
                    "room_id": 3,
                    "tenant_id": 7,
                    "start_date": "2026-01-01",
                    "end_date": "2026-12-31",
                    "deposit_amount": 3000000,
                    "rent_amount": 2500000,
                    "notes": "Includes parking",
                    "contract_file_url": "/uploads/contracts/lease_1.pdf",
                    "status": "Active",
                    "is_current": True,
                    "tenant_name": "Nguyen Van A",
                    "tenant_phone": "0901234567",
                    "room_number": "101",
                    "house_name": "Sunrise House",
                    "username": "0901234567",
                    "password": "482913"
               }
          }
     )
