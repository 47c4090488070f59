# routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.auth import LandlordLogin, LandlordRegister, TenantLogin, TokenResponse
from security import ROLE_LANDLORD, ROLE_TENANT, create_access_token
from services import auth_service

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register/landlord", status_code=status.HTTP_201_CREATED)
def register_landlord(body: LandlordRegister, db: Session = Depends(get_session)):
     landlord = auth_service.register_landlord(
          db,
          full_name=body.full_name,
          phone=body.phone,
          email=body.email,
          password=body.password,
          address=body.address,
     )
     return {"success": True, "landlord_id": landlord.landlord_id}


@router.post("/login/landlord", response_model=TokenResponse)
def login_landlord(body: LandlordLogin, db: Session = Depends(get_session)):
     landlord = auth_service.login_landlord(db, body.phone, body.password)
     return TokenResponse(
          access_token=create_access_token(landlord.landlord_id, ROLE_LANDLORD),
          role=ROLE_LANDLORD,
          id=landlord.landlord_id,
          full_name=landlord.full_name,
     )


@router.post("/login/tenant", response_model=TokenResponse)
def login_tenant(body: TenantLogin, db: Session = Depends(get_session)):
     """Tenants sign in with their phone number and portal password."""
     account = auth_service.login_tenant(db, body.username, body.password)
     return TokenResponse(
          access_token=create_access_token(account.tenant_id, ROLE_TENANT),
          role=ROLE_TENANT,
          id=account.tenant_id,
          full_name=account.tenant.full_name if account.tenant else None,
     )
