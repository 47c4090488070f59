# schemas/__init__.py
from .invoice import (
     InvoiceItemCreate,
     InvoiceCreate,
     InvoiceStatusUpdate,
     InvoiceItemResponse,
     InvoiceResponse,
     InvoiceListResponse,
)
from .contract import ContractUpdate, ContractResponse
from .room import HouseCreate, HouseResponse, RoomCreate, RoomUpdate, RoomResponse
from .auth import LandlordRegister, LandlordLogin, TenantLogin, TokenResponse
from .maintenance import MaintenanceCreate, MaintenanceCancel, MaintenanceResponse, MaintenanceListResponse

__all__ = [
     "InvoiceItemCreate",
     "InvoiceCreate",
     "InvoiceStatusUpdate",
     "InvoiceItemResponse",
     "InvoiceResponse",
     "InvoiceListResponse",
     "ContractUpdate",
     "ContractResponse",
     "HouseCreate",
     "HouseResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "LandlordRegister",
     "LandlordLogin",
     "TenantLogin",
     "TokenResponse",
     "MaintenanceCreate",
     "MaintenanceCancel",
     "MaintenanceResponse",
     "MaintenanceListResponse",
]
