# services/tenant_service.py
"""
Tenant Registry - tenant identity keyed by phone number.
"""
import logging
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Tenant

logger = logging.getLogger(__name__)


def placeholder_id_number() -> str:
     """ID number used until the tenant's real document number is captured."""
     return f"PENDING_{int(time.time() * 1000)}"


def upsert_tenant(
     db: Session,
     full_name: str,
     phone: str,
     email: Optional[str] = None,
     id_card_number: Optional[str] = None,
     id_card_photos: Optional[List[str]] = None,
) -> Tenant:
     """
     Find the tenant owning ``phone`` or register a new one.

     An existing tenant keeps its identity fields; only the ID photos are
     replaced, and only when new ones were uploaded.

     Args:
          db: SQLAlchemy database session (caller owns the transaction)
          full_name: Name used when the tenant is new
          phone: Natural key
          email: Optional e-mail for a new tenant, or to fill a missing one
          id_card_number: Document number; a placeholder is used if absent
          id_card_photos: Ordered stored paths of the ID images (front, back)

     Returns:
          The Tenant row (flushed, so tenant_id is set)
     """
     photos = list(id_card_photos or [])
     tenant = db.query(Tenant).filter(Tenant.phone == phone).first()

     if tenant is not None:
          if photos:
               tenant.id_card_photos = photos
          if email and not tenant.email:
               tenant.email = email
          db.flush()
          logger.info("Reusing tenant %s for phone ending %s", tenant.tenant_id, phone[-3:])
          return tenant

     tenant = Tenant(
          full_name=full_name,
          phone=phone,
          email=email,
          id_card_number=id_card_number or placeholder_id_number(),
          id_card_photos=photos,
     )
     db.add(tenant)
     db.flush()
     logger.info("Registered tenant %s", tenant.tenant_id)
     return tenant
