"""Tests for tenant maintenance requests."""

import pytest

from exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from models import MaintenanceStatus
from services import maintenance_service
from services.contract_service import ContractService


@pytest.fixture
def lease(room, make_contract):
    return make_contract(room).contract


class TestCreateRequest:
    def test_for_rented_room(self, db, lease) -> None:
        request = maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Leaking tap", "Drips all night")
        assert request.status == MaintenanceStatus.NEW.value
        assert request.request_date is not None

    def test_for_another_room(self, db, lease, other_room) -> None:
        with pytest.raises(ForbiddenError):
            maintenance_service.create_request(db, lease.tenant_id, other_room.room_id, "Broken door")

    def test_after_termination(self, db, lease) -> None:
        ContractService.terminate_contract(db, lease.contract_id)
        with pytest.raises(ForbiddenError):
            maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Broken door")

    def test_title_required(self, db, lease) -> None:
        with pytest.raises(ValidationError):
            maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "  ")


class TestCancelRequest:
    def test_cancel_open_request(self, db, lease) -> None:
        request = maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Leaking tap")
        cancelled = maintenance_service.cancel_request(db, lease.tenant_id, request.request_id, note="Fixed it myself")
        assert cancelled.status == MaintenanceStatus.CANCELLED.value
        assert cancelled.resolved_date is not None
        assert cancelled.resolved_date.tzinfo is None
        assert cancelled.resolution_note == "Fixed it myself"

    @pytest.mark.parametrize("state", [MaintenanceStatus.COMPLETED, MaintenanceStatus.CANCELLED])
    def test_closed_request(self, db, lease, state) -> None:
        request = maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Leaking tap")
        request.status = state.value
        db.commit()

        with pytest.raises(ConflictError):
            maintenance_service.cancel_request(db, lease.tenant_id, request.request_id)

    def test_other_tenants_request(self, db, lease) -> None:
        request = maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Leaking tap")
        with pytest.raises(NotFoundError):
            maintenance_service.cancel_request(db, lease.tenant_id + 1, request.request_id)


class TestListRequests:
    def test_status_filter(self, db, lease) -> None:
        first = maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Leaking tap")
        maintenance_service.create_request(db, lease.tenant_id, lease.room_id, "Broken light")
        maintenance_service.cancel_request(db, lease.tenant_id, first.request_id)

        assert len(maintenance_service.list_requests(db, lease.tenant_id)) == 2
        assert len(maintenance_service.list_requests(db, lease.tenant_id, "all")) == 2
        cancelled = maintenance_service.list_requests(db, lease.tenant_id, "Cancelled")
        assert [r.request_id for r in cancelled] == [first.request_id]
