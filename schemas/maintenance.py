# schemas/maintenance.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class MaintenanceCreate(BaseModel):
     room_id: int = Field(..., gt=0)
     title: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "room_id": 3,
                    "title": "Leaking tap",
                    "description": "Bathroom tap drips all night"
               }
          }
     )


class MaintenanceResponse(BaseModel):
     request_id: int
     room_id: int
     tenant_id: int
     title: str
     description: Optional[str] = None
     request_date: Optional[datetime] = None
     status: str
     resolved_date: Optional[datetime] = None
     resolution_note: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class MaintenanceListResponse(BaseModel):
     requests: List[MaintenanceResponse]
     total: int


class MaintenanceCancel(BaseModel):
     note: Optional[str] = Field(None, max_length=1000, description="Why the tenant cancelled")
