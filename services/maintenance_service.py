# services/maintenance_service.py
"""
Maintenance requests raised from the tenant portal.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from database import transaction
from exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from models import Contract, ContractStatus, MaintenanceRequest, MaintenanceStatus

logger = logging.getLogger(__name__)

CLOSED_STATES = {MaintenanceStatus.COMPLETED.value, MaintenanceStatus.CANCELLED.value}


def list_requests(db: Session, tenant_id: int, status: Optional[str] = None) -> List[MaintenanceRequest]:
     """A tenant's own requests, newest first. ``status`` of None or "all" lists every request."""
     query = db.query(MaintenanceRequest).filter(MaintenanceRequest.tenant_id == tenant_id)
     if status and status != "all":
          query = query.filter(MaintenanceRequest.status == status)
     return query.order_by(MaintenanceRequest.request_date.desc(), MaintenanceRequest.request_id.desc()).all()


def create_request(
     db: Session,
     tenant_id: int,
     room_id: int,
     title: str,
     description: Optional[str] = None,
) -> MaintenanceRequest:
     """
     Open a request for the room the tenant currently rents.

     Raises:
          ValidationError: Empty title
          ForbiddenError: The tenant has no Active current contract on the room
     """
     if not title or not title.strip():
          raise ValidationError("title is required")

     with transaction(db, "Create maintenance request"):
          lease = db.query(Contract).filter(
               Contract.tenant_id == tenant_id,
               Contract.room_id == room_id,
               Contract.status == ContractStatus.ACTIVE.value,
               Contract.is_current == True,  # noqa: E712
          ).first()
          if lease is None:
               raise ForbiddenError(
                    "You can only report issues for the room you currently rent",
                    cause={"room_id": room_id},
               )

          request = MaintenanceRequest(
               tenant_id=tenant_id,
               room_id=room_id,
               title=title.strip(),
               description=description,
               status=MaintenanceStatus.NEW.value,
          )
          db.add(request)
          db.flush()

     logger.info("Tenant %s opened maintenance request %s for room %s", tenant_id, request.request_id, room_id)
     return request


def cancel_request(
     db: Session,
     tenant_id: int,
     request_id: int,
     note: Optional[str] = None,
     now: Optional[datetime] = None,
) -> MaintenanceRequest:
     """
     Cancel one of the tenant's own open requests.

     Raises:
          NotFoundError: No such request for this tenant
          ConflictError: The request is already Completed or Cancelled
     """
     with transaction(db, "Cancel maintenance request"):
          request = db.query(MaintenanceRequest).filter(
               MaintenanceRequest.request_id == request_id,
               MaintenanceRequest.tenant_id == tenant_id,
          ).first()
          if request is None:
               raise NotFoundError(f"Maintenance request with ID {request_id} not found")
          if request.status in CLOSED_STATES:
               raise ConflictError(
                    f"Request is already {request.status}",
                    cause={"request_id": request_id, "status": request.status},
               )
          request.status = MaintenanceStatus.CANCELLED.value
          request.resolved_date = now or datetime.now(timezone.utc).replace(tzinfo=None)
          request.resolution_note = note or ""
          db.flush()

     logger.info("Tenant %s cancelled maintenance request %s", tenant_id, request_id)
     return request
