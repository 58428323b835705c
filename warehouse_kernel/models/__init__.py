"""Domain models for the warehouse kernel."""

from warehouse_kernel.models.item import Item, UnitType
from warehouse_kernel.models.location import (
    InventoryLocation,
    Location,
    LocationThreshold,
)
from warehouse_kernel.models.order import Order, OrderLine, OrderStatusHistory
from warehouse_kernel.models.transaction import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    Transaction,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "Item",
    "UnitType",
    "Location",
    "LocationThreshold",
    "InventoryLocation",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "CREDIT_TYPES",
    "DEBIT_TYPES",
    "Order",
    "OrderLine",
    "OrderStatusHistory",
]
