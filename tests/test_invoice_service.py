"""Tests for the invoice ledger."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from models import Invoice, InvoiceDetail
from services.invoice_service import (
    InvoiceService,
    compute_display_status,
    describe_line_items,
    resolve_billing_period,
)

ITEMS = [
    {
        "previous_reading": Decimal("120"),
        "current_reading": Decimal("180"),
        "unit_price": Decimal("3500"),
        "amount": Decimal("210000"),
        "service_type": "electricity",
    },
    {
        "previous_reading": Decimal("30"),
        "current_reading": Decimal("36"),
        "unit_price": Decimal("15000"),
        "amount": Decimal("90000"),
        "service_type": "water",
    },
]


@pytest.fixture
def contract(room, make_contract):
    return make_contract(room).contract


def _invoice(db, contract, **overrides) -> Invoice:
    params = {
        "contract_id": contract.contract_id,
        "invoice_type": "Monthly",
        "total_amount": Decimal("2800000"),
        "items": ITEMS,
        "billing_period": "2026-03",
        "due_date": date(2026, 3, 10),
        "room_rent": Decimal("2500000"),
    }
    params.update(overrides)
    return InvoiceService.create_invoice(db, **params)


class TestResolveBillingPeriod:
    def test_supplied_period_wins(self) -> None:
        assert resolve_billing_period("2026-02", date(2026, 5, 1), date(2026, 7, 1)) == "2026-02"

    def test_due_date_month(self) -> None:
        assert resolve_billing_period(None, date(2026, 5, 31), date(2026, 7, 1)) == "2026-05"

    def test_current_month(self) -> None:
        assert resolve_billing_period(None, None, date(2026, 7, 15)) == "2026-07"
        assert resolve_billing_period("", None, date(2026, 7, 15)) == "2026-07"


class TestComputeDisplayStatus:
    today = date(2026, 3, 20)

    def test_paid_stays_paid_after_due_date(self) -> None:
        assert compute_display_status("Paid", date(2026, 3, 10), self.today) == ("Paid", 0)

    def test_unpaid_past_due_is_overdue(self) -> None:
        display = compute_display_status("Unpaid", date(2026, 3, 10), self.today)
        assert display.status == "Overdue"
        assert display.overdue_days == 10

    def test_unpaid_due_today_is_not_overdue(self) -> None:
        assert compute_display_status("Unpaid", self.today, self.today) == ("Unpaid", 0)

    def test_unpaid_future_due_date(self) -> None:
        assert compute_display_status("Unpaid", date(2026, 4, 10), self.today) == ("Unpaid", 0)

    def test_no_due_date(self) -> None:
        assert compute_display_status("Unpaid", None, self.today) == ("Unpaid", 0)


class TestDescribeLineItems:
    def test_explicit_service_types(self) -> None:
        details = [
            InvoiceDetail(usage_id=1, service_type="water", unit_price=Decimal("1"), amount=Decimal("1")),
            InvoiceDetail(usage_id=2, service_type="other", unit_price=Decimal("1"), amount=Decimal("1")),
            InvoiceDetail(usage_id=3, service_type="electricity", unit_price=Decimal("1"), amount=Decimal("1")),
        ]
        names = [item["service_name"] for item in describe_line_items(details)]
        assert names == ["Water", "Service 1", "Electricity"]

    def test_legacy_rows_named_by_position(self) -> None:
        details = [
            InvoiceDetail(usage_id=i, unit_price=Decimal("1"), amount=Decimal("1"))
            for i in range(1, 5)
        ]
        items = describe_line_items(details)
        assert [item["service_name"] for item in items] == ["Electricity", "Water", "Service 1", "Service 2"]
        assert [item["service_type"] for item in items] == ["electricity", "water", "other", "other"]


class TestCreateInvoice:
    def test_creates_unpaid_invoice_with_items(self, db, contract) -> None:
        invoice = _invoice(db, contract, today=date(2026, 3, 1))

        assert invoice.status == "Unpaid"
        assert invoice.issue_date == date(2026, 3, 1)
        assert invoice.billing_period == "2026-03"
        assert invoice.paid_date is None
        assert [d.service_type for d in invoice.details] == ["electricity", "water"]
        assert invoice.details[0].amount == Decimal("210000")

    def test_period_derived_from_due_date(self, db, contract) -> None:
        invoice = _invoice(db, contract, billing_period=None, due_date=date(2026, 5, 10))
        assert invoice.billing_period == "2026-05"

    def test_period_defaults_to_current_month(self, db, contract) -> None:
        invoice = _invoice(db, contract, billing_period=None, due_date=None, today=date(2026, 8, 2))
        assert invoice.billing_period == "2026-08"

    def test_incidental_invoice_defaults(self, db, contract) -> None:
        invoice = InvoiceService.create_invoice(db, contract.contract_id, "Incidental", Decimal("50000"))
        assert invoice.issue_date == date.today()
        assert invoice.billing_period == date.today().strftime("%Y-%m")
        assert invoice.room_rent == Decimal("0")
        assert invoice.details == []

    def test_duplicate_period(self, db, contract) -> None:
        _invoice(db, contract)
        with pytest.raises(ConflictError):
            _invoice(db, contract)
        assert db.query(Invoice).count() == 1
        assert db.query(InvoiceDetail).count() == 2

    def test_missing_contract(self, db) -> None:
        with pytest.raises(NotFoundError):
            InvoiceService.create_invoice(db, contract_id=999, invoice_type="Monthly", total_amount=Decimal("1"))
        assert db.query(Invoice).count() == 0


class TestUpdateInvoiceStatus:
    def test_paid_stamps_payment_date(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        paid_at = datetime(2026, 3, 5, 9, 30)

        invoice = InvoiceService.update_invoice_status(db, invoice.invoice_id, "Paid", now=paid_at)

        assert invoice.status == "Paid"
        assert invoice.paid_date == paid_at

    def test_default_stamp_is_naive_utc(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        before = datetime.now(timezone.utc).replace(tzinfo=None)

        invoice = InvoiceService.update_invoice_status(db, invoice.invoice_id, "Paid")

        assert invoice.paid_date.tzinfo is None
        assert before <= invoice.paid_date <= datetime.now(timezone.utc).replace(tzinfo=None)

    def test_unpaid_clears_payment_date(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        InvoiceService.update_invoice_status(db, invoice.invoice_id, "Paid")

        invoice = InvoiceService.update_invoice_status(db, invoice.invoice_id, "Unpaid")

        assert invoice.status == "Unpaid"
        assert invoice.paid_date is None

    def test_unknown_status(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        with pytest.raises(ValidationError):
            InvoiceService.update_invoice_status(db, invoice.invoice_id, "Overdue")

    def test_missing_invoice(self, db) -> None:
        with pytest.raises(NotFoundError):
            InvoiceService.update_invoice_status(db, 999, "Paid")


class TestDeleteInvoice:
    def test_paid_invoice_is_kept(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        InvoiceService.update_invoice_status(db, invoice.invoice_id, "Paid")

        with pytest.raises(ForbiddenError):
            InvoiceService.delete_invoice(db, invoice.invoice_id)

        assert db.query(Invoice).count() == 1
        assert db.query(InvoiceDetail).count() == 2

    def test_unpaid_invoice_and_items_are_removed(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        InvoiceService.delete_invoice(db, invoice.invoice_id)

        assert db.query(Invoice).count() == 0
        assert db.query(InvoiceDetail).count() == 0

    def test_period_is_free_after_delete(self, db, contract) -> None:
        invoice = _invoice(db, contract)
        InvoiceService.delete_invoice(db, invoice.invoice_id)
        assert _invoice(db, contract).billing_period == "2026-03"

    def test_missing_invoice(self, db) -> None:
        with pytest.raises(NotFoundError):
            InvoiceService.delete_invoice(db, 999)


class TestTenantInvoices:
    def test_lists_only_own_invoices(self, db, room, other_room, make_contract) -> None:
        mine = make_contract(room, phone="0901111111").contract
        theirs = make_contract(other_room, phone="0902222222").contract
        _invoice(db, mine)
        _invoice(db, mine, billing_period="2026-04", due_date=date.today() + timedelta(days=3))
        other = _invoice(db, theirs)

        invoices = InvoiceService.list_tenant_invoices(db, mine.tenant_id)
        assert len(invoices) == 2
        assert all(inv.contract_id == mine.contract_id for inv in invoices)

        with pytest.raises(NotFoundError):
            InvoiceService.get_invoice(db, other.invoice_id, tenant_id=mine.tenant_id)
