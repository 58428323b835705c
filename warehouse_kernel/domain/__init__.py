"""Pure domain logic: time abstraction and stock arithmetic."""

from warehouse_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from warehouse_kernel.domain.stock import (
    apply_delta,
    is_debit,
    occupancy_percentage,
    parse_status,
    parse_transaction_type,
    quantity_delta,
    require_positive_quantity,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "apply_delta",
    "is_debit",
    "occupancy_percentage",
    "parse_status",
    "parse_transaction_type",
    "quantity_delta",
    "require_positive_quantity",
]
