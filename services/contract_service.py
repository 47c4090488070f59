# services/contract_service.py
"""
Contract Service - lease lifecycle.

Creating, editing and terminating a contract touches the tenant registry,
the room ledger and the credential store. Each operation runs in a single
transaction so a failure never leaves a half-created tenant, a room marked
Occupied without a current contract, or a secret that nobody was told.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from database import transaction
from exceptions import ConflictError, NotFoundError, ValidationError
from models import Contract, ContractStatus, CredentialAction, Tenant
from services import room_service
from services.contract_notes import append_password, notes_keeping_password, notes_with_new_password
from services.credential_service import PASSWORD_LENGTH, generate_password, upsert_credential
from services.tenant_service import upsert_tenant

logger = logging.getLogger(__name__)

# Requested states that free the room. "Unoccupied" is accepted from old
# clients and stored as Terminated.
RELEASING_STATES = {"Terminated", "Expired", "Unoccupied"}
STATE_ALIASES = {"Unoccupied": ContractStatus.TERMINATED}


@dataclass
class ContractCreated:
     """Result of create_contract. ``password`` is the only copy of the plaintext secret."""
     contract: Contract
     tenant: Tenant
     password: str


def _validate_terms(
     start_date: date,
     end_date: date,
     deposit_amount: Decimal,
     rent_amount: Decimal,
) -> None:
     if start_date is None or end_date is None:
          raise ValidationError("start_date and end_date are required")
     if end_date < start_date:
          raise ValidationError(
               "end_date must not be before start_date",
               cause={"start_date": str(start_date), "end_date": str(end_date)},
          )
     if rent_amount is None or rent_amount < 0:
          raise ValidationError("rent_amount must be zero or positive")
     if deposit_amount is not None and deposit_amount < 0:
          raise ValidationError("deposit_amount must be zero or positive")


def _resolve_state(state: str) -> ContractStatus:
     if state in STATE_ALIASES:
          return STATE_ALIASES[state]
     try:
          return ContractStatus(state)
     except ValueError:
          raise ValidationError(
               f"Unknown contract status '{state}'",
               cause={"allowed": [s.value for s in ContractStatus] + list(STATE_ALIASES)},
          )


class ContractService:
     """Service class for the contract lifecycle."""

     @staticmethod
     def get_contract(db: Session, contract_id: int) -> Contract:
          contract = db.query(Contract).filter(Contract.contract_id == contract_id).first()
          if contract is None:
               raise NotFoundError(f"Contract with ID {contract_id} not found")
          return contract

     @staticmethod
     def create_contract(
          db: Session,
          room_id: int,
          full_name: str,
          phone: str,
          start_date: date,
          end_date: date,
          deposit_amount: Decimal,
          rent_amount: Decimal,
          notes: Optional[str] = None,
          email: Optional[str] = None,
          id_card_number: Optional[str] = None,
          id_card_photos: Optional[List[str]] = None,
          contract_file_url: Optional[str] = None,
     ) -> ContractCreated:
          """
          Lease a room to a tenant.

          Steps (all-or-nothing):
               1. Register the tenant by phone, or reuse the existing one
               2. Insert an Active, current contract
               3. Claim the room (Vacant -> Occupied, conditional update)
               4. Generate a six-digit secret and store it on the tenant's account
               5. Append the PASSWORD marker to the contract notes

          Args:
               db: SQLAlchemy database session
               room_id: Room being leased
               full_name: Tenant name (used only for a new tenant)
               phone: Tenant phone, also the portal username
               start_date: Lease start
               end_date: Lease end
               deposit_amount: Deposit paid at move-in
               rent_amount: Monthly rent
               notes: Free-text notes from the operator
               email: Optional tenant e-mail
               id_card_number: Optional ID document number
               id_card_photos: Stored paths of the ID images, front first
               contract_file_url: Stored path of the signed lease document

          Returns:
               ContractCreated with the new contract and the plaintext secret

          Raises:
               ValidationError: Missing tenant identity or inconsistent terms
               NotFoundError: Room doesn't exist
               ConflictError: Room is already leased
          """
          if not full_name or not full_name.strip():
               raise ValidationError("full_name is required")
          if not phone or not phone.strip():
               raise ValidationError("phone is required")
          _validate_terms(start_date, end_date, deposit_amount, rent_amount)
          phone = phone.strip()

          with transaction(db, "Create contract"):
               room_service.get_room(db, room_id)
               current = room_service.current_contract_for_room(db, room_id)
               if current is not None:
                    raise ConflictError(
                         f"Room {room_id} already has a current contract",
                         cause={"room_id": room_id, "contract_id": current.contract_id},
                    )

               tenant = upsert_tenant(
                    db,
                    full_name=full_name.strip(),
                    phone=phone,
                    email=email,
                    id_card_number=id_card_number,
                    id_card_photos=id_card_photos,
               )

               contract = Contract(
                    room_id=room_id,
                    tenant_id=tenant.tenant_id,
                    start_date=start_date,
                    end_date=end_date,
                    deposit_amount=deposit_amount or Decimal("0"),
                    rent_amount=rent_amount,
                    notes=notes,
                    contract_file_url=contract_file_url,
                    status=ContractStatus.ACTIVE.value,
                    is_current=True,
               )
               db.add(contract)
               db.flush()

               room_service.claim_room(db, room_id)

               password = generate_password()
               upsert_credential(db, tenant, password, contract_id=contract.contract_id, action=CredentialAction.ISSUED)

               contract.notes = append_password(notes, password)
               db.flush()

          logger.info(
               "Created contract %s for tenant %s in room %s",
               contract.contract_id,
               tenant.tenant_id,
               room_id,
          )
          return ContractCreated(contract=contract, tenant=tenant, password=password)

     @staticmethod
     def update_contract(
          db: Session,
          contract_id: int,
          start_date: date,
          end_date: date,
          deposit_amount: Optional[Decimal],
          rent_amount: Decimal,
          notes: Optional[str] = None,
          status: Optional[str] = None,
          password: Optional[str] = None,
     ) -> Contract:
          """
          Edit a contract, optionally resetting the tenant secret or moving its state.

          A password of six or more characters (after trimming) replaces the
          tenant's secret and the PASSWORD marker; anything shorter is treated
          as "not supplied" and the existing marker is carried over.
          A deposit_amount of None keeps the stored deposit.

          Resulting state:
               - Terminated / Expired / Unoccupied: no longer current, room Vacant
               - Active: current, room Occupied (refused if another contract
                 is current for the room)
               - omitted: state and occupancy unchanged

          Raises:
               NotFoundError: Contract doesn't exist
               ValidationError: Bad terms, unknown status, non-numeric password
               ConflictError: Reactivation while another contract holds the room
          """
          _validate_terms(start_date, end_date, deposit_amount, rent_amount)
          target = _resolve_state(status) if status else None
          new_password = (password or "").strip()
          resetting = len(new_password) >= PASSWORD_LENGTH
          if resetting and not (new_password.isascii() and new_password.isdigit()):
               raise ValidationError("password must contain digits only")

          with transaction(db, "Update contract"):
               contract = ContractService.get_contract(db, contract_id)

               if resetting:
                    upsert_credential(
                         db,
                         contract.tenant,
                         new_password,
                         contract_id=contract.contract_id,
                         action=CredentialAction.RESET,
                    )
                    contract.notes = notes_with_new_password(contract.notes, notes, new_password)
               else:
                    contract.notes = notes_keeping_password(contract.notes, notes)

               contract.start_date = start_date
               contract.end_date = end_date
               if deposit_amount is not None:
                    contract.deposit_amount = deposit_amount
               contract.rent_amount = rent_amount

               if target is not None and status in RELEASING_STATES:
                    contract.status = target.value
                    contract.is_current = False
                    db.flush()
                    room_service.release_room(db, contract.room_id, except_contract_id=contract.contract_id)
               elif target == ContractStatus.ACTIVE:
                    if not contract.is_current:
                         other = room_service.current_contract_for_room(
                              db, contract.room_id, exclude_contract_id=contract.contract_id
                         )
                         if other is not None:
                              raise ConflictError(
                                   f"Room {contract.room_id} is held by contract {other.contract_id}",
                                   cause={"room_id": contract.room_id, "contract_id": other.contract_id},
                              )
                    contract.status = ContractStatus.ACTIVE.value
                    contract.is_current = True
                    db.flush()
                    room_service.occupy_room(db, contract.room_id)

               db.flush()

          logger.info(
               "Updated contract %s (status=%s, secret reset=%s)",
               contract.contract_id,
               contract.status,
               resetting,
          )
          return contract

     @staticmethod
     def terminate_contract(db: Session, contract_id: int) -> Contract:
          """
          End a lease: state Terminated, no longer current, room Vacant.

          Calling it again on a terminated contract leaves the same end state.
          """
          with transaction(db, "Terminate contract"):
               contract = ContractService.get_contract(db, contract_id)
               contract.status = ContractStatus.TERMINATED.value
               contract.is_current = False
               db.flush()
               room_service.release_room(db, contract.room_id, except_contract_id=contract.contract_id)

          logger.info("Terminated contract %s, room %s released", contract.contract_id, contract.room_id)
          return contract
