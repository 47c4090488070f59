# routers/__init__.py
from .auth import router as auth_router
from .rooms import router as rooms_router
from .contracts import router as contracts_router
from .invoices import router as invoices_router
from .tenant_portal import router as tenant_portal_router

__all__ = [
     "auth_router",
     "rooms_router",
     "contracts_router",
     "invoices_router",
     "tenant_portal_router",
]
