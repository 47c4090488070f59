# models/__init__.py
from .base import Base
from .landlord import Landlord
from .boarding_house import BoardingHouse
from .room import Room, RoomStatus
from .tenant import Tenant
from .contract import Contract, ContractStatus
from .user_account import UserAccount, CredentialEvent, CredentialAction
from .invoice import Invoice, InvoiceDetail, InvoiceStatus, ServiceType
from .maintenance_request import MaintenanceRequest, MaintenanceStatus

__all__ = [
     "Base",
     "Landlord",
     "BoardingHouse",
     "Room",
     "RoomStatus",
     "Tenant",
     "Contract",
     "ContractStatus",
     "UserAccount",
     "CredentialEvent",
     "CredentialAction",
     "Invoice",
     "InvoiceDetail",
     "InvoiceStatus",
     "ServiceType",
     "MaintenanceRequest",
     "MaintenanceStatus",
]
