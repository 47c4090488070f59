# routers/tenant_portal.py
"""
Tenant self-service routes. The tenant is always the one named in the token;
another tenant's invoice or request is reported as not found.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from routers.invoices import _build_invoice_response
from schemas.invoice import InvoiceListResponse, InvoiceResponse
from schemas.maintenance import MaintenanceCancel, MaintenanceCreate, MaintenanceListResponse, MaintenanceResponse
from security import require_tenant
from services import maintenance_service
from services.invoice_service import InvoiceService

router = APIRouter(prefix="/api/tenant", tags=["tenant"])


@router.get("/invoices", response_model=InvoiceListResponse)
def list_my_invoices(
     db: Session = Depends(get_session),
     token: dict = Depends(require_tenant)
):
     invoices = InvoiceService.list_tenant_invoices(db, token["id"])
     return InvoiceListResponse(
          invoices=[_build_invoice_response(inv) for inv in invoices],
          total=len(invoices),
     )


@router.get("/invoices/{invoice_id}", response_model=InvoiceResponse)
def get_my_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_tenant)
):
     invoice = InvoiceService.get_invoice(db, invoice_id, tenant_id=token["id"])
     return _build_invoice_response(invoice)


@router.get("/maintenance", response_model=MaintenanceListResponse)
def list_my_requests(
     status_filter: Optional[str] = Query(None, alias="status", description="New, InProgress, Completed, Cancelled or all"),
     db: Session = Depends(get_session),
     token: dict = Depends(require_tenant)
):
     requests = maintenance_service.list_requests(db, token["id"], status_filter)
     return MaintenanceListResponse(
          requests=[MaintenanceResponse.model_validate(r) for r in requests],
          total=len(requests),
     )


@router.post("/maintenance", response_model=MaintenanceResponse, status_code=status.HTTP_201_CREATED)
def create_request(
     body: MaintenanceCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_tenant)
):
     """Only for the room the tenant currently rents."""
     request = maintenance_service.create_request(
          db,
          tenant_id=token["id"],
          room_id=body.room_id,
          title=body.title,
          description=body.description,
     )
     return MaintenanceResponse.model_validate(request)


@router.put("/maintenance/{request_id}/cancel", response_model=MaintenanceResponse)
def cancel_request(
     request_id: int,
     body: Optional[MaintenanceCancel] = None,
     db: Session = Depends(get_session),
     token: dict = Depends(require_tenant)
):
     """Completed or cancelled requests cannot be cancelled again."""
     request = maintenance_service.cancel_request(db, token["id"], request_id, note=body.note if body else None)
     return MaintenanceResponse.model_validate(request)
