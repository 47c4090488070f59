# routers/invoices.py
"""
Invoice API routes for the landlord dashboard.

Landlords bill a contract once per billing period, mark invoices paid or
unpaid and delete unpaid invoices. "Overdue" is computed on every read.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from models import Invoice
from schemas.invoice import InvoiceCreate, InvoiceResponse, InvoiceStatusUpdate
from security import require_landlord
from services.invoice_service import InvoiceService, compute_display_status, describe_line_items

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
     "",
     response_model=InvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new invoice"
)
def create_invoice(
     invoice_data: InvoiceCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """
     Bill a contract for one period.

     - **contract_id**: Contract being billed
     - **billing_period**: YYYY-MM (defaults to the due date's month, then the current month)
     - **items**: Line items; `old`/`new`/`price` are accepted as aliases
     - **total_amount**: Invoice total

     Returns 409 if the contract already has an invoice for the period.
     """
     items = [
          {
               "previous_reading": item.previous_reading,
               "current_reading": item.current_reading,
               "unit_price": item.unit_price,
               "amount": item.amount,
               "service_type": item.service_type.value if item.service_type else None,
          }
          for item in invoice_data.items
     ]
     invoice = InvoiceService.create_invoice(
          db,
          contract_id=invoice_data.contract_id,
          invoice_type=invoice_data.invoice_type,
          total_amount=invoice_data.total_amount,
          items=items,
          billing_period=invoice_data.billing_period,
          due_date=invoice_data.due_date,
          room_rent=invoice_data.room_rent,
          notes=invoice_data.notes,
     )
     return _build_invoice_response(invoice)


@router.get(
     "/{invoice_id}",
     response_model=InvoiceResponse,
     summary="Get invoice by ID"
)
def get_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """Invoice with tenant, room, named line items and display status."""
     invoice = InvoiceService.get_invoice(db, invoice_id)
     return _build_invoice_response(invoice)


@router.put(
     "/{invoice_id}/status",
     response_model=InvoiceResponse,
     summary="Set invoice payment status"
)
def update_invoice_status(
     invoice_id: int,
     body: InvoiceStatusUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """Paid stamps the payment date; Unpaid clears it."""
     invoice = InvoiceService.update_invoice_status(db, invoice_id, body.status)
     return _build_invoice_response(invoice)


@router.delete(
     "/{invoice_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete invoice"
)
def delete_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """
     Delete an unpaid invoice and its line items.

     Paid invoices are kept and the request is refused with 403.
     """
     InvoiceService.delete_invoice(db, invoice_id)
     return None


def _build_invoice_response(invoice: Invoice, today: Optional[date] = None) -> InvoiceResponse:
     """
     Helper function to build InvoiceResponse with related data.
     """
     display = compute_display_status(invoice.status, invoice.due_date, today)

     contract = invoice.contract
     tenant = contract.tenant if contract else None
     room = contract.room if contract else None
     house = room.house if room else None

     return InvoiceResponse(
          invoice_id=invoice.invoice_id,
          contract_id=invoice.contract_id,
          invoice_type=invoice.invoice_type,
          billing_period=invoice.billing_period,
          issue_date=invoice.issue_date,
          due_date=invoice.due_date,
          room_rent=invoice.room_rent,
          total_amount=invoice.total_amount,
          status=invoice.status,
          display_status=display.status,
          overdue_days=display.overdue_days,
          paid_date=invoice.paid_date,
          notes=invoice.notes,
          tenant_name=tenant.full_name if tenant else None,
          tenant_phone=tenant.phone if tenant else None,
          room_number=room.room_number if room else None,
          house_name=house.house_name if house else None,
          items=describe_line_items(invoice.details),
     )
