# routers/rooms.py
"""
House and room routes. Room occupancy is read-only here.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.room import HouseCreate, HouseResponse, RoomCreate, RoomResponse, RoomUpdate
from security import require_landlord
from services import room_service

router = APIRouter(prefix="/api", tags=["rooms"])


@router.post("/houses", response_model=HouseResponse, status_code=status.HTTP_201_CREATED)
def create_house(
     body: HouseCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     house = room_service.create_house(
          db,
          house_name=body.house_name,
          address=body.address,
          description=body.description,
          landlord_id=token.get("id"),
     )
     return HouseResponse.model_validate(house)


@router.post("/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
     body: RoomCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     """New rooms start Vacant. Returns 409 if the house already has that room number."""
     room = room_service.create_room(
          db,
          house_id=body.house_id,
          room_number=body.room_number,
          floor=body.floor,
          area_m2=body.area_m2,
          base_rent=body.base_rent,
          facilities=body.facilities,
     )
     return RoomResponse.model_validate(room)


@router.put("/rooms/{room_id}", response_model=RoomResponse)
def update_room(
     room_id: int,
     body: RoomUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_landlord)
):
     room = room_service.update_room(db, room_id, body.model_dump(exclude_unset=True))
     return RoomResponse.model_validate(room)
