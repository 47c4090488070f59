# services/room_service.py
"""
Room Ledger - houses, rooms and room occupancy.

Occupancy is written only through claim_room / occupy_room / release_room,
which the contract lifecycle calls inside its own transaction. The room edit
path (update_room) never touches it.
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from database import transaction
from exceptions import ConflictError, NotFoundError
from models import BoardingHouse, Contract, Room, RoomStatus

logger = logging.getLogger(__name__)


def get_room(db: Session, room_id: int) -> Room:
     room = db.query(Room).filter(Room.room_id == room_id).first()
     if room is None:
          raise NotFoundError(f"Room with ID {room_id} not found")
     return room


def create_house(
     db: Session,
     house_name: str,
     address: Optional[str] = None,
     description: Optional[str] = None,
     landlord_id: Optional[int] = None,
) -> BoardingHouse:
     """Register a boarding house with no rooms yet."""
     with transaction(db, "Create house"):
          house = BoardingHouse(
               landlord_id=landlord_id,
               house_name=house_name,
               address=address,
               description=description,
               total_rooms=0,
          )
          db.add(house)
          db.flush()
     logger.info("Created house %s", house.house_id)
     return house


def create_room(
     db: Session,
     house_id: int,
     room_number: str,
     floor: Optional[int] = None,
     area_m2: Optional[Decimal] = None,
     base_rent: Optional[Decimal] = None,
     facilities: Optional[str] = None,
) -> Room:
     """
     Add a Vacant room to a house and bump the house's room count.

     Raises:
          NotFoundError: If the house doesn't exist
          ConflictError: If the house already has a room with that number
     """
     with transaction(db, "Create room"):
          house = db.query(BoardingHouse).filter(BoardingHouse.house_id == house_id).first()
          if house is None:
               raise NotFoundError(f"House with ID {house_id} not found")

          room = Room(
               house_id=house_id,
               room_number=room_number,
               floor=floor,
               area_m2=area_m2,
               base_rent=base_rent,
               facilities=facilities,
               status=RoomStatus.VACANT.value,
          )
          db.add(room)
          db.query(BoardingHouse).filter(BoardingHouse.house_id == house_id).update(
               {BoardingHouse.total_rooms: BoardingHouse.total_rooms + 1},
               synchronize_session=False,
          )
          db.flush()
     db.refresh(house)
     logger.info("Created room %s in house %s", room.room_id, house_id)
     return room


def update_room(db: Session, room_id: int, changes: dict) -> Room:
     """
     Edit the descriptive fields of a room.

     ``status`` is ignored if present: occupancy belongs to the contract
     lifecycle.
     """
     editable = {"room_number", "floor", "area_m2", "base_rent", "facilities"}
     with transaction(db, "Update room"):
          room = get_room(db, room_id)
          for field, value in changes.items():
               if field in editable:
                    setattr(room, field, value)
          db.flush()
     return room


# ---------------------------------------------------------------------------
# Occupancy (contract lifecycle only)
# ---------------------------------------------------------------------------

def claim_room(db: Session, room_id: int) -> None:
     """
     Flip a Vacant room to Occupied in a single conditional update.

     Raises:
          ConflictError: If the room is not Vacant (already leased, or a
               concurrent request claimed it first)
     """
     claimed = (
          db.query(Room)
          .filter(Room.room_id == room_id, Room.status == RoomStatus.VACANT.value)
          .update({Room.status: RoomStatus.OCCUPIED.value}, synchronize_session="fetch")
     )
     if claimed == 0:
          raise ConflictError(
               f"Room {room_id} is already occupied",
               cause={"room_id": room_id},
          )


def occupy_room(db: Session, room_id: int) -> None:
     """Mark a room Occupied regardless of its previous state."""
     db.query(Room).filter(Room.room_id == room_id).update(
          {Room.status: RoomStatus.OCCUPIED.value}, synchronize_session="fetch"
     )


def release_room(db: Session, room_id: int, except_contract_id: Optional[int] = None) -> bool:
     """
     Mark a room Vacant unless another contract is still current for it.

     Returns:
          True if the room was set Vacant
     """
     other_current = current_contract_for_room(db, room_id, exclude_contract_id=except_contract_id)
     if other_current is not None:
          logger.warning(
               "Room %s stays occupied: contract %s is still current",
               room_id,
               other_current.contract_id,
          )
          return False
     db.query(Room).filter(Room.room_id == room_id).update(
          {Room.status: RoomStatus.VACANT.value}, synchronize_session="fetch"
     )
     return True


def current_contract_for_room(
     db: Session,
     room_id: int,
     exclude_contract_id: Optional[int] = None,
) -> Optional[Contract]:
     query = db.query(Contract).filter(Contract.room_id == room_id, Contract.is_current == True)  # noqa: E712
     if exclude_contract_id is not None:
          query = query.filter(Contract.contract_id != exclude_contract_id)
     return query.first()
