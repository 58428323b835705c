"""Read-only query selectors."""

from warehouse_kernel.selectors.base import BaseSelector
from warehouse_kernel.selectors.location_selector import LocationSelector
from warehouse_kernel.selectors.order_selector import OrderSelector
from warehouse_kernel.selectors.transaction_selector import (
    ISSUE_TYPES,
    TransactionSelector,
)

__all__ = [
    "BaseSelector",
    "LocationSelector",
    "OrderSelector",
    "TransactionSelector",
    "ISSUE_TYPES",
]
