"""HTTP tests for the contract routes."""

import os
from decimal import Decimal

from models import Contract, Tenant

FORM = {
    "full_name": "Nguyen Van A",
    "phone": "0901234567",
    "email": "tenant@example.com",
    "start_date": "2026-01-01",
    "end_date": "2026-12-31",
    "deposit_amount": "3000000",
    "rent_amount": "2500000",
    "notes": "Includes parking",
}


def _create(client, headers, room, files=None, **overrides):
    data = dict(FORM, room_id=str(room.room_id))
    data.update(overrides)
    return client.post("/api/contracts", data=data, files=files, headers=headers)


class TestCreateContractRoute:
    def test_returns_generated_password_once(self, client, landlord_headers, room) -> None:
        response = _create(client, landlord_headers, room)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Active"
        assert body["is_current"] is True
        assert body["username"] == "0901234567"
        assert len(body["password"]) == 6 and body["password"].isdigit()
        assert body["notes"] == "Includes parking"
        assert body["room_number"] == "101"
        assert body["house_name"] == "Sunrise House"

    def test_uploads_are_stored(self, client, landlord_headers, room, blob_store) -> None:
        files = {
            "cccd_front": ("front.jpg", b"front-bytes", "image/jpeg"),
            "cccd_back": ("back.jpg", b"back-bytes", "image/jpeg"),
            "contract_pdf": ("lease.pdf", b"%PDF-1.4", "application/pdf"),
        }
        response = _create(client, landlord_headers, room, files=files)

        assert response.status_code == 201
        body = response.json()
        assert len(body["id_card_photos"]) == 2
        assert body["id_card_photos"][0].startswith("/uploads/id_cards/")
        assert body["contract_file_url"].startswith("/uploads/contracts/")
        assert body["contract_file_url"].endswith(".pdf")
        assert len(os.listdir(os.path.join(blob_store.root, "id_cards"))) == 2

    def test_uploads_are_removed_when_room_is_taken(self, client, landlord_headers, room, blob_store) -> None:
        assert _create(client, landlord_headers, room).status_code == 201

        files = {"cccd_front": ("front.jpg", b"front-bytes", "image/jpeg")}
        response = _create(client, landlord_headers, room, files=files, phone="0907777777")

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"
        assert os.listdir(os.path.join(blob_store.root, "id_cards")) == []

    def test_requires_landlord_token(self, client, room, tenant_headers) -> None:
        assert _create(client, {}, room).status_code == 401
        assert _create(client, tenant_headers(1), room).status_code == 403

    def test_missing_room(self, client, landlord_headers, room) -> None:
        data = dict(FORM, room_id="999")
        response = client.post("/api/contracts", data=data, headers=landlord_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_invalid_form(self, client, landlord_headers, room) -> None:
        response = _create(client, landlord_headers, room, start_date="not-a-date")

        assert response.status_code == 422
        assert response.json()["error"] == "validation"


class TestContractRoutes:
    def test_get_contract_reports_current_password(self, client, landlord_headers, room) -> None:
        created = _create(client, landlord_headers, room).json()

        response = client.get(f"/api/contracts/{created['contract_id']}", headers=landlord_headers)

        assert response.status_code == 200
        assert response.json()["password"] == created["password"]
        assert "PASSWORD" not in (response.json()["notes"] or "")

    def test_update_resets_password(self, client, landlord_headers, room) -> None:
        created = _create(client, landlord_headers, room).json()
        payload = {
            "start_date": "2026-01-01",
            "end_date": "2027-06-30",
            "deposit_amount": 3000000,
            "rent_amount": 2600000,
            "notes": "Extended",
            "password": "654321",
        }

        response = client.put(f"/api/contracts/{created['contract_id']}", json=payload, headers=landlord_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["password"] == "654321"
        assert body["notes"] == "Extended"
        assert body["end_date"] == "2027-06-30"

    def test_update_without_deposit_keeps_it(self, client, landlord_headers, room) -> None:
        created = _create(client, landlord_headers, room).json()
        payload = {
            "start_date": "2026-01-01",
            "end_date": "2026-12-31",
            "rent_amount": 2600000,
            "notes": "Rent raised",
        }

        response = client.put(f"/api/contracts/{created['contract_id']}", json=payload, headers=landlord_headers)

        assert response.status_code == 200
        assert Decimal(response.json()["deposit_amount"]) == Decimal("3000000")
        assert Decimal(response.json()["rent_amount"]) == Decimal("2600000")

    def test_update_to_expired_frees_room(self, client, db, landlord_headers, room) -> None:
        created = _create(client, landlord_headers, room).json()
        payload = {
            "start_date": "2026-01-01",
            "end_date": "2026-12-31",
            "rent_amount": 2500000,
            "status": "Expired",
        }

        response = client.put(f"/api/contracts/{created['contract_id']}", json=payload, headers=landlord_headers)

        assert response.status_code == 200
        assert response.json()["is_current"] is False
        db.refresh(room)
        assert room.status == "Vacant"

    def test_terminate_twice(self, client, db, landlord_headers, room) -> None:
        created = _create(client, landlord_headers, room).json()
        url = f"/api/contracts/{created['contract_id']}/terminate"

        first = client.put(url, headers=landlord_headers)
        second = client.put(url, headers=landlord_headers)

        assert first.status_code == second.status_code == 200
        assert second.json()["status"] == "Terminated"
        db.refresh(room)
        assert room.status == "Vacant"

    def test_terminate_missing_contract(self, client, landlord_headers) -> None:
        response = client.put("/api/contracts/999/terminate", headers=landlord_headers)
        assert response.status_code == 404
        assert response.json() == {
            "error": "not_found",
            "message": "Contract with ID 999 not found",
            "cause": None,
        }

    def test_same_phone_reuses_tenant(self, client, db, landlord_headers, room, other_room) -> None:
        _create(client, landlord_headers, room)
        _create(client, landlord_headers, other_room, full_name="Other Name")

        assert db.query(Tenant).count() == 1
        assert db.query(Contract).count() == 2
