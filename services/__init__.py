# services/__init__.py
from .invoice_service import InvoiceService, compute_display_status, describe_line_items, resolve_billing_period
from .contract_service import ContractService, ContractCreated

__all__ = [
     "InvoiceService",
     "ContractService",
     "ContractCreated",
     "compute_display_status",
     "describe_line_items",
     "resolve_billing_period",
]
