# routers/contracts.py
"""
Contract API routes for the landlord dashboard.

Creating a contract uploads the tenant's ID photos and the signed lease,
registers (or reuses) the tenant, occupies the room and issues the tenant's
portal password, which is returned once in the response.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from models import Contract
from schemas.contract import ContractResponse, ContractUpdate
from security import require_landlord
from services.contract_notes import extract_password, strip_password
from services.contract_service import ContractService
from storage import discard, get_blob_store
from utils.email import notify_tenant_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


@router.post(
     "",
     response_model=ContractResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a contract"
)
def create_contract(
     room_id: int = Form(...),
     full_name: str = Form(...),
     phone: str = Form(...),
     start_date: date = Form(...),
     end_date: date = Form(...),
     rent_amount: Decimal = Form(...),
     deposit_amount: Decimal = Form(Decimal("0")),
     email: Optional[str] = Form(None),
     id_card_number: Optional[str] = Form(None),
     notes: Optional[str] = Form(None),
     cccd_front: Optional[UploadFile] = File(None),
     cccd_back: Optional[UploadFile] = File(None),
     contract_pdf: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord),
     store=Depends(get_blob_store),
):
     """
     Lease a Vacant room.

     Uploads are stored first; if the contract cannot be created they are
     deleted again. Returns 409 if the room is already occupied.
     """
     saved = []
     id_card_photos = []
     contract_file_url = None
     try:
          for upload in (cccd_front, cccd_back):
               if upload is not None and upload.filename:
                    path = store.save(upload, "id_cards")
                    saved.append(path)
                    id_card_photos.append(path)
          if contract_pdf is not None and contract_pdf.filename:
               contract_file_url = store.save(contract_pdf, "contracts")
               saved.append(contract_file_url)

          created = ContractService.create_contract(
               db,
               room_id=room_id,
               full_name=full_name,
               phone=phone,
               start_date=start_date,
               end_date=end_date,
               deposit_amount=deposit_amount,
               rent_amount=rent_amount,
               notes=notes,
               email=email,
               id_card_number=id_card_number,
               id_card_photos=id_card_photos,
               contract_file_url=contract_file_url,
          )
     except Exception:
          discard(store, saved)
          raise

     notify_tenant_credentials(
          created.tenant.email,
          created.tenant.full_name,
          created.tenant.phone,
          created.password,
     )
     return _build_contract_response(created.contract, password=created.password)


@router.get(
     "/{contract_id}",
     response_model=ContractResponse,
     summary="Get contract by ID"
)
def get_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     contract = ContractService.get_contract(db, contract_id)
     return _build_contract_response(contract)


@router.put(
     "/{contract_id}",
     response_model=ContractResponse,
     summary="Update contract"
)
def update_contract(
     contract_id: int,
     body: ContractUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """
     Edit terms and notes, reset the portal password, or change the state.

     - **password**: six or more digits replace the tenant's password; shorter values are ignored
     - **status**: Terminated / Expired / Unoccupied free the room, Active occupies it
     """
     contract = ContractService.update_contract(
          db,
          contract_id,
          start_date=body.start_date,
          end_date=body.end_date,
          deposit_amount=body.deposit_amount,
          rent_amount=body.rent_amount,
          notes=body.notes,
          status=body.status,
          password=body.password,
     )
     return _build_contract_response(contract)


@router.put(
     "/{contract_id}/terminate",
     response_model=ContractResponse,
     summary="Terminate contract"
)
def terminate_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     contract = ContractService.terminate_contract(db, contract_id)
     return _build_contract_response(contract)


def _build_contract_response(contract: Contract, password: Optional[str] = None) -> ContractResponse:
     """
     Helper function to build ContractResponse with related data.

     The PASSWORD line is removed from ``notes`` and reported separately.
     """
     tenant = contract.tenant
     room = contract.room
     house = room.house if room else None
     account = tenant.account if tenant else None

     return ContractResponse(
          contract_id=contract.contract_id,
          room_id=contract.room_id,
          tenant_id=contract.tenant_id,
          start_date=contract.start_date,
          end_date=contract.end_date,
          deposit_amount=contract.deposit_amount,
          rent_amount=contract.rent_amount,
          notes=strip_password(contract.notes) or None,
          contract_file_url=contract.contract_file_url,
          status=contract.status,
          is_current=contract.is_current,
          tenant_name=tenant.full_name if tenant else None,
          tenant_phone=tenant.phone if tenant else None,
          tenant_email=tenant.email if tenant else None,
          id_card_photos=list(tenant.id_card_photos or []) if tenant else [],
          room_number=room.room_number if room else None,
          house_name=house.house_name if house else None,
          username=account.username if account else None,
          password=password or extract_password(contract.notes),
     )
