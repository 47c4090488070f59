# schemas/auth.py
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class LandlordRegister(BaseModel):
     full_name: str = Field(..., min_length=1, max_length=255)
     phone: str = Field(..., min_length=8, max_length=20)
     email: str = Field(..., max_length=255)
     password: str = Field(..., min_length=6, max_length=128)
     address: Optional[str] = Field(None, max_length=500)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "full_name": "Tran Thi B",
                    "phone": "0912345678",
                    "email": "owner@example.com",
                    "password": "s3cret-pass",
                    "address": "12 Nguyen Trai, District 1"
               }
          }
     )


class LandlordLogin(BaseModel):
     phone: str
     password: str


class TenantLogin(BaseModel):
     """Tenants sign in with their phone number and the six-digit secret."""
     username: str
     password: str

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "username": "0901234567",
                    "password": "482913"
               }
          }
     )


class TokenResponse(BaseModel):
     access_token: str
     token_type: str = "bearer"
     role: str
     id: int
     full_name: Optional[str] = None
