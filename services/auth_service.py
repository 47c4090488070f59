# services/auth_service.py
"""
Landlord accounts and portal sign-in for landlords and tenants.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from database import transaction
from exceptions import AuthenticationError, ConflictError, ForbiddenError, ValidationError
from models import Contract, ContractStatus, Landlord, UserAccount
from services.credential_service import authenticate_tenant, hash_password, verify_password

logger = logging.getLogger(__name__)


def register_landlord(
     db: Session,
     full_name: str,
     phone: str,
     email: str,
     password: str,
     address: Optional[str] = None,
) -> Landlord:
     """
     Create a landlord account.

     Raises:
          ValidationError: Missing fields
          ConflictError: Phone or e-mail already registered
     """
     if not all([full_name, phone, email, password]):
          raise ValidationError("full_name, phone, email and password are required")

     with transaction(db, "Register landlord"):
          existing = db.query(Landlord).filter(
               (Landlord.phone == phone) | (Landlord.email == email)
          ).first()
          if existing is not None:
               raise ConflictError("Phone or email already registered")

          landlord = Landlord(
               full_name=full_name,
               phone=phone,
               email=email,
               password_hash=hash_password(password),
               address=address,
          )
          db.add(landlord)
          db.flush()

     logger.info("Registered landlord %s", landlord.landlord_id)
     return landlord


def login_landlord(db: Session, phone: str, password: str) -> Landlord:
     """
     Raises:
          AuthenticationError: Unknown phone or wrong password
     """
     landlord = db.query(Landlord).filter(Landlord.phone == phone).first()
     if landlord is None or not verify_password(password, landlord.password_hash):
          raise AuthenticationError("Incorrect phone number or password")
     return landlord


def login_tenant(db: Session, username: str, password: str) -> UserAccount:
     """
     Sign a tenant into the portal.

     The tenant must hold an active account and a current, non-terminated
     contract. A legacy plaintext secret is upgraded to a hash on success.

     Raises:
          AuthenticationError: Unknown username or wrong secret
          ForbiddenError: Account locked, or the tenant no longer has a lease
     """
     with transaction(db, "Tenant login"):
          account = authenticate_tenant(db, username, password)
          if account is None:
               raise AuthenticationError("Incorrect username or password")
          if not account.is_active:
               raise ForbiddenError("Account is locked")

          latest = (
               db.query(Contract)
               .filter(
                    Contract.tenant_id == account.tenant_id,
                    Contract.is_current == True,  # noqa: E712
               )
               .order_by(Contract.contract_id.desc())
               .first()
          )
          if latest is None:
               raise ForbiddenError("You do not have an active contract")
          if latest.status == ContractStatus.TERMINATED.value:
               raise ForbiddenError("Your contract has been terminated")

     logger.info("Tenant %s signed in", account.tenant_id)
     return account
