# schemas/room.py
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class HouseCreate(BaseModel):
     house_name: str = Field(..., min_length=1, max_length=255)
     address: Optional[str] = Field(None, max_length=500)
     description: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "house_name": "Sunrise House",
                    "address": "12 Nguyen Trai, District 1",
                    "description": "Three floors, shared parking"
               }
          }
     )


class HouseResponse(BaseModel):
     house_id: int
     landlord_id: Optional[int] = None
     house_name: str
     address: Optional[str] = None
     description: Optional[str] = None
     total_rooms: int

     model_config = ConfigDict(from_attributes=True)


class RoomCreate(BaseModel):
     house_id: int = Field(..., gt=0)
     room_number: str = Field(..., min_length=1, max_length=50)
     floor: Optional[int] = None
     area_m2: Optional[Decimal] = Field(None, ge=0)
     base_rent: Optional[Decimal] = Field(None, ge=0)
     facilities: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "house_id": 1,
                    "room_number": "101",
                    "floor": 1,
                    "area_m2": 18.5,
                    "base_rent": 2500000,
                    "facilities": "Air conditioner, private bathroom"
               }
          }
     )


class RoomUpdate(BaseModel):
     """Descriptive fields only; occupancy follows the room's contracts."""
     room_number: Optional[str] = Field(None, min_length=1, max_length=50)
     floor: Optional[int] = None
     area_m2: Optional[Decimal] = Field(None, ge=0)
     base_rent: Optional[Decimal] = Field(None, ge=0)
     facilities: Optional[str] = None


class RoomResponse(BaseModel):
     room_id: int
     house_id: int
     room_number: str
     floor: Optional[int] = None
     area_m2: Optional[Decimal] = None
     base_rent: Optional[Decimal] = None
     facilities: Optional[str] = None
     status: str

     model_config = ConfigDict(from_attributes=True)
