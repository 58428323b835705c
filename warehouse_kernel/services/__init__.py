"""Write-side kernel services.  All of them flush; the caller commits."""

from warehouse_kernel.services.base import BaseService
from warehouse_kernel.services.item_service import ItemService
from warehouse_kernel.services.location_capacity_service import (
    LocationCapacityService,
)
from warehouse_kernel.services.location_service import LocationService
from warehouse_kernel.services.order_service import OrderLineRequest, OrderService
from warehouse_kernel.services.transaction_ledger import TransactionLedger

__all__ = [
    "BaseService",
    "ItemService",
    "LocationCapacityService",
    "LocationService",
    "OrderLineRequest",
    "OrderService",
    "TransactionLedger",
]
