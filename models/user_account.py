# models/user_account.py
"""
Tenant portal credentials.

UserAccount holds one login per tenant (username = tenant phone). The
password_hash column stores a passlib hash; rows written
by the old system still hold plaintext and are upgraded on first login.

CredentialEvent is an append-only audit trail of issued/reset secrets. It
never stores the secret itself.
"""
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class CredentialAction(str, enum.Enum):
     ISSUED = "issued"
     RESET = "reset"


class UserAccount(TimestampMixin, Base):
     """
     Tenant login account.
     Maps to existing 'user_accounts' table in the database.
     """
     __tablename__ = "user_accounts"

     user_id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(
          Integer,
          ForeignKey("tenants.tenant_id", ondelete="CASCADE"),
          nullable=False,
          unique=True
     )
     username = Column(String(50), unique=True, nullable=False, index=True)
     password_hash = Column(String(255), nullable=False)
     role = Column(String(20), default="Tenant", nullable=False)
     is_active = Column(Boolean, default=True, nullable=False)

     # Relationships
     tenant = relationship("Tenant", back_populates="account")

     def __repr__(self):
          return f"<UserAccount(user_id={self.user_id}, username='{self.username}')>"


class CredentialEvent(Base):
     """Audit row written every time a tenant secret is issued or reset."""
     __tablename__ = "credential_events"

     event_id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False, index=True)
     contract_id = Column(Integer, ForeignKey("contracts.contract_id"), nullable=True, index=True)
     action = Column(String(20), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<CredentialEvent(event_id={self.event_id}, tenant_id={self.tenant_id}, action='{self.action}')>"
