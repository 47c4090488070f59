# services/credential_service.py
"""
Credential Store - tenant portal logins.

Secrets are six-digit numbers handed to the tenant at move-in. They are
stored as passlib hashes; accounts migrated from the old system may still
hold the plaintext value, which is accepted once and then re-hashed.
"""
import hmac
import logging
import secrets
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from models import Tenant, UserAccount, CredentialEvent, CredentialAction

logger = logging.getLogger(__name__)

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_LENGTH = 6


def generate_password() -> str:
     """
     Generate a fresh tenant secret.

     Six decimal digits, first digit 1-9 so the value always has six
     characters, every digit drawn from a CSPRNG.
     """
     return str(100000 + secrets.randbelow(900000))


def hash_password(plain: str) -> str:
     return pwd_context.hash(plain)


def upsert_credential(
     db: Session,
     tenant: Tenant,
     plain_password: str,
     contract_id: Optional[int] = None,
     action: CredentialAction = CredentialAction.ISSUED,
) -> UserAccount:
     """
     Create or update the login of a tenant and record an audit event.

     The username of a new account is the tenant's phone number; an existing
     account keeps its username and only gets the new secret.

     Args:
          db: SQLAlchemy database session (caller owns the transaction)
          tenant: Tenant the secret belongs to
          plain_password: Secret to store (hashed before writing)
          contract_id: Contract that triggered the change, for the audit row
          action: ISSUED at contract creation, RESET when an operator changes it

     Returns:
          The UserAccount row
     """
     account = db.query(UserAccount).filter(UserAccount.tenant_id == tenant.tenant_id).first()
     if account is None:
          account = UserAccount(
               tenant_id=tenant.tenant_id,
               username=tenant.phone,
               password_hash=hash_password(plain_password),
               role="Tenant",
               is_active=True,
          )
          db.add(account)
          logger.info("Created portal account for tenant %s", tenant.tenant_id)
     else:
          account.password_hash = hash_password(plain_password)
          logger.info("Replaced portal secret for tenant %s", tenant.tenant_id)

     db.add(CredentialEvent(tenant_id=tenant.tenant_id, contract_id=contract_id, action=action.value))
     db.flush()
     return account


def verify_password(plain: str, stored: str) -> bool:
     """Check a secret against a stored hash, or against a legacy plaintext value."""
     if not stored:
          return False
     if pwd_context.identify(stored) is None:
          return hmac.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))
     return pwd_context.verify(plain, stored)


def authenticate_tenant(db: Session, username: str, plain_password: str) -> Optional[UserAccount]:
     """
     Exchange a username (phone) and secret for the tenant's account.

     Returns:
          The matching UserAccount, or None if the username is unknown or the
          secret is wrong. Legacy plaintext secrets are re-hashed on success.
     """
     account = db.query(UserAccount).filter(UserAccount.username == username).first()
     if account is None:
          return None
     if not verify_password(plain_password, account.password_hash):
          return None

     if pwd_context.identify(account.password_hash) is None:
          account.password_hash = hash_password(plain_password)
          db.flush()
          logger.info("Upgraded legacy plaintext secret for account %s", account.user_id)
     return account
