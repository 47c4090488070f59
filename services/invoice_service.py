# services/invoice_service.py
"""
Invoice Service - Business logic layer for invoice operations.

This service handles invoice creation, payment status, deletion and the
derived display status, separate from the API layer.
"""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, NamedTuple, Optional, Sequence

from sqlalchemy.orm import Session

from database import transaction
from exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from models import Contract, Invoice, InvoiceDetail, InvoiceStatus, ServiceType

logger = logging.getLogger(__name__)

SERVICE_NAMES = {
     ServiceType.ELECTRICITY.value: "Electricity",
     ServiceType.WATER.value: "Water",
}
METERED_LABEL = "Metered (kWh/m3)"


class DisplayStatus(NamedTuple):
     """Status shown to users: Paid, Overdue or Unpaid."""
     status: str
     overdue_days: int


def compute_display_status(
     status: str,
     due_date: Optional[date],
     today: Optional[date] = None,
) -> DisplayStatus:
     """
     Derive the display status of an invoice. Never persisted.

     Paid stays Paid whatever the due date; an Unpaid invoice whose due date
     has passed is Overdue, with overdue_days = today - due_date.
     """
     today = today or date.today()
     if status == InvoiceStatus.PAID:
          return DisplayStatus("Paid", 0)
     if due_date is not None and due_date < today:
          return DisplayStatus("Overdue", (today - due_date).days)
     return DisplayStatus("Unpaid", 0)


def resolve_billing_period(
     billing_period: Optional[str],
     due_date: Optional[date],
     today: Optional[date] = None,
) -> str:
     """
     Billing period (YYYY-MM) of a new invoice.

     Uses the supplied period, else the month of the due date, else the
     current month, so incidental invoices always get a period.
     """
     if billing_period:
          return billing_period
     if due_date is not None:
          return due_date.strftime("%Y-%m")
     return (today or date.today()).strftime("%Y-%m")


def describe_line_items(details: Sequence[InvoiceDetail]) -> List[dict]:
     """
     Line items with a display name.

     Rows carrying ``service_type`` are named from it. Rows written before the
     column existed are named by position: first electricity, second water,
     then "Service 1", "Service 2", ...
     """
     items = []
     other_count = 0
     for index, detail in enumerate(details):
          if detail.service_type:
               service_type = detail.service_type
          elif index == 0:
               service_type = ServiceType.ELECTRICITY.value
          elif index == 1:
               service_type = ServiceType.WATER.value
          else:
               service_type = ServiceType.OTHER.value

          if service_type in SERVICE_NAMES:
               service_name = SERVICE_NAMES[service_type]
          elif detail.service_type:
               other_count += 1
               service_name = f"Service {other_count}"
          else:
               service_name = f"Service {index - 1}"
          items.append({
               "usage_id": detail.usage_id,
               "service_type": service_type,
               "service_name": service_name,
               "unit_label": METERED_LABEL,
               "previous_reading": detail.previous_reading,
               "current_reading": detail.current_reading,
               "unit_price": detail.unit_price,
               "amount": detail.amount,
          })
     return items


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def get_invoice(db: Session, invoice_id: int, tenant_id: Optional[int] = None) -> Invoice:
          """
          Load an invoice, optionally restricted to a tenant's own contracts.

          Raises:
               NotFoundError: If the invoice doesn't exist (or isn't the tenant's)
          """
          query = db.query(Invoice).filter(Invoice.invoice_id == invoice_id)
          if tenant_id is not None:
               query = query.join(Contract, Invoice.contract_id == Contract.contract_id).filter(
                    Contract.tenant_id == tenant_id
               )
          invoice = query.first()
          if invoice is None:
               raise NotFoundError(f"Invoice with ID {invoice_id} not found")
          return invoice

     @staticmethod
     def list_tenant_invoices(db: Session, tenant_id: int) -> List[Invoice]:
          """All invoices of a tenant's contracts, newest first."""
          return (
               db.query(Invoice)
               .join(Contract, Invoice.contract_id == Contract.contract_id)
               .filter(Contract.tenant_id == tenant_id)
               .order_by(Invoice.issue_date.desc(), Invoice.invoice_id.desc())
               .all()
          )

     @staticmethod
     def create_invoice(
          db: Session,
          contract_id: int,
          invoice_type: Optional[str],
          total_amount: Decimal,
          items: Sequence[dict] = (),
          billing_period: Optional[str] = None,
          due_date: Optional[date] = None,
          room_rent: Optional[Decimal] = None,
          notes: Optional[str] = None,
          today: Optional[date] = None,
     ) -> Invoice:
          """
          Bill a contract for one period.

          Args:
               db: SQLAlchemy database session
               contract_id: Contract being billed
               invoice_type: Free label (e.g. "Monthly", "Incidental")
               total_amount: Invoice total
               items: Line items, each a dict with previous_reading,
                    current_reading, unit_price, amount and optional service_type
               billing_period: YYYY-MM; derived from due_date or today if omitted
               due_date: Payment due date
               room_rent: Rent portion of the total (0 if omitted)
               notes: Free text
               today: Issue date override (defaults to today)

          Returns:
               Created Invoice object with its line items

          Raises:
               NotFoundError: If the contract doesn't exist
               ConflictError: If the contract already has an invoice for the period
          """
          if total_amount is None:
               raise ValidationError("total_amount is required")
          today = today or date.today()
          period = resolve_billing_period(billing_period, due_date, today)

          with transaction(db, "Create invoice"):
               contract = db.query(Contract).filter(Contract.contract_id == contract_id).first()
               if contract is None:
                    raise NotFoundError(f"Contract with ID {contract_id} not found")

               duplicate = db.query(Invoice).filter(
                    Invoice.contract_id == contract_id,
                    Invoice.billing_period == period,
               ).first()
               if duplicate is not None:
                    raise ConflictError(
                         f"An invoice already exists for billing period {period}. Please choose another period.",
                         cause={"contract_id": contract_id, "billing_period": period, "invoice_id": duplicate.invoice_id},
                    )

               invoice = Invoice(
                    contract_id=contract_id,
                    invoice_type=invoice_type,
                    billing_period=period,
                    issue_date=today,
                    due_date=due_date,
                    room_rent=room_rent or Decimal("0"),
                    total_amount=total_amount,
                    status=InvoiceStatus.UNPAID.value,
                    notes=notes,
               )
               db.add(invoice)
               db.flush()  # Flush to get the ID without committing

               for item in items:
                    db.add(InvoiceDetail(
                         invoice_id=invoice.invoice_id,
                         service_type=item.get("service_type"),
                         previous_reading=item.get("previous_reading"),
                         current_reading=item.get("current_reading"),
                         unit_price=item.get("unit_price") or Decimal("0"),
                         amount=item["amount"],
                    ))
               db.flush()

          db.refresh(invoice)
          logger.info(
               "Created invoice %s for contract %s, period %s, %d line item(s)",
               invoice.invoice_id,
               contract_id,
               period,
               len(items),
          )
          return invoice

     @staticmethod
     def update_invoice_status(
          db: Session,
          invoice_id: int,
          status: str,
          now: Optional[datetime] = None,
     ) -> Invoice:
          """
          Set the payment status. Paid stamps paid_date, anything else clears it.

          Raises:
               ValidationError: Unknown status
               NotFoundError: Invoice doesn't exist
          """
          try:
               new_status = InvoiceStatus(status)
          except ValueError:
               raise ValidationError(
                    f"Unknown invoice status '{status}'",
                    cause={"allowed": [s.value for s in InvoiceStatus]},
               )

          with transaction(db, "Update invoice status"):
               invoice = InvoiceService.get_invoice(db, invoice_id)
               invoice.status = new_status.value
               if new_status == InvoiceStatus.PAID:
                    invoice.paid_date = now or datetime.now(timezone.utc).replace(tzinfo=None)
               else:
                    invoice.paid_date = None
               db.flush()

          logger.info("Invoice %s marked %s", invoice_id, new_status.value)
          return invoice

     @staticmethod
     def delete_invoice(db: Session, invoice_id: int) -> None:
          """
          Delete an unpaid invoice and its line items.

          Raises:
               NotFoundError: Invoice doesn't exist
               ForbiddenError: Invoice is Paid (left untouched)
          """
          with transaction(db, "Delete invoice"):
               invoice = InvoiceService.get_invoice(db, invoice_id)
               if invoice.is_paid:
                    raise ForbiddenError(
                         "Paid invoices cannot be deleted",
                         cause={"invoice_id": invoice_id, "status": invoice.status},
                    )
               db.query(InvoiceDetail).filter(InvoiceDetail.invoice_id == invoice_id).delete(
                    synchronize_session=False
               )
               db.delete(invoice)
               db.flush()

          logger.info("Deleted invoice %s", invoice_id)
