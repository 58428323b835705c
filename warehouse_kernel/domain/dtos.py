"""
DTOs -- Immutable read models returned by services and selectors.

Responsibility:
    Defines the frozen dataclasses that cross the kernel boundary:
    ItemInfo, LocationInfo, ThresholdInfo, TransactionInfo, LocationOccupancy,
    OrderInfo / OrderLineInfo, OrderStatusHistoryInfo, and the generic Page
    wrapper for paginated listings.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.
    from_model() class methods are boundary converters invoked only from the
    service and selector layers.

Invariants enforced:
    - Callers never receive live ORM instances, so nothing outside a service
      can mutate a ledger row or an item quantity by accident.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Generic, TypeVar
from uuid import UUID

from warehouse_kernel.models.item import UnitType
from warehouse_kernel.models.transaction import TransactionStatus, TransactionType

if TYPE_CHECKING:
    from warehouse_kernel.models.item import Item
    from warehouse_kernel.models.location import (
        InventoryLocation,
        Location,
        LocationThreshold,
    )
    from warehouse_kernel.models.order import Order, OrderLine, OrderStatusHistory
    from warehouse_kernel.models.transaction import Transaction

T = TypeVar("T")


def _status(value) -> TransactionStatus | None:
    if value is None:
        return None
    return TransactionStatus(value)


@dataclass(frozen=True)
class ItemInfo:
    """Snapshot of an item and its live quantity."""

    id: UUID
    name: str
    description: str | None
    unit: UnitType
    current_quantity: int
    qr_code: str
    version: int

    @classmethod
    def from_model(cls, model: Item) -> ItemInfo:
        return cls(
            id=model.id,
            name=model.name,
            description=model.description,
            unit=UnitType(model.unit),
            current_quantity=model.current_quantity,
            qr_code=model.qr_code,
            version=model.version,
        )


@dataclass(frozen=True)
class LocationInfo:
    id: UUID
    code: str
    name: str | None
    description: str | None
    location_type: str | None
    is_active: bool

    @classmethod
    def from_model(cls, model: Location) -> LocationInfo:
        return cls(
            id=model.id,
            code=model.code,
            name=model.name,
            description=model.description,
            location_type=model.location_type,
            is_active=model.is_active,
        )


@dataclass(frozen=True)
class ThresholdInfo:
    id: UUID
    location_id: UUID
    min_threshold: int
    max_threshold: int

    @classmethod
    def from_model(cls, model: LocationThreshold) -> ThresholdInfo:
        return cls(
            id=model.id,
            location_id=model.location_id,
            min_threshold=model.min_threshold,
            max_threshold=model.max_threshold,
        )


@dataclass(frozen=True)
class InventoryLocationInfo:
    """An item's assignment to a location."""

    id: UUID
    item_id: UUID
    location_id: UUID
    assigned_by_id: UUID
    assigned_at: datetime

    @classmethod
    def from_model(cls, model: InventoryLocation) -> InventoryLocationInfo:
        return cls(
            id=model.id,
            item_id=model.item_id,
            location_id=model.location_id,
            assigned_by_id=model.created_by_id,
            assigned_at=model.created_at,
        )


@dataclass(frozen=True)
class TransactionInfo:
    """
    Snapshot of one ledger entry.

    quantity is always positive; ``signed_quantity`` carries the direction.
    """

    id: UUID
    transaction_type: TransactionType
    item_id: UUID
    location_id: UUID
    quantity: int
    user_id: UUID
    status: TransactionStatus | None
    description: str | None
    created_at: datetime

    @property
    def signed_quantity(self) -> int:
        if self.transaction_type in (TransactionType.RECEIPT, TransactionType.RETURN):
            return self.quantity
        return -self.quantity

    @classmethod
    def from_model(cls, model: Transaction) -> TransactionInfo:
        return cls(
            id=model.id,
            transaction_type=TransactionType(model.transaction_type),
            item_id=model.item_id,
            location_id=model.location_id,
            quantity=model.quantity,
            user_id=model.user_id,
            status=_status(model.status),
            description=model.description,
            created_at=model.created_at,
        )


@dataclass(frozen=True)
class LocationOccupancy:
    """
    Capacity projection for one location.

    Contract:
        current_occupancy is the cumulative ledger quantity posted against the
        location.  Thresholds are 0 when the location has none configured.
    """

    location_id: UUID
    location_code: str
    location_name: str | None
    max_capacity: int
    min_threshold: int
    current_occupancy: int
    occupancy_percentage: float
    item_count: int
    is_above_threshold: bool
    is_active: bool


@dataclass(frozen=True)
class OrderLineInfo:
    id: UUID
    item_id: UUID
    quantity: int
    line_no: int
    transaction_id: UUID | None

    @classmethod
    def from_model(cls, model: OrderLine) -> OrderLineInfo:
        return cls(
            id=model.id,
            item_id=model.item_id,
            quantity=model.quantity,
            line_no=model.line_no,
            transaction_id=model.transaction_id,
        )


@dataclass(frozen=True)
class OrderInfo:
    """Snapshot of an order with its lines in line order."""

    id: UUID
    order_number: str
    status: TransactionStatus
    description: str | None
    created_by_id: UUID
    created_at: datetime
    updated_at: datetime | None
    lines: tuple[OrderLineInfo, ...]

    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    @classmethod
    def from_model(cls, model: Order) -> OrderInfo:
        return cls(
            id=model.id,
            order_number=model.order_number,
            status=TransactionStatus(model.status),
            description=model.description,
            created_by_id=model.created_by_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            lines=tuple(OrderLineInfo.from_model(line) for line in model.lines),
        )


@dataclass(frozen=True)
class OrderStatusHistoryInfo:
    id: UUID
    order_id: UUID
    sequence: int
    old_status: TransactionStatus
    new_status: TransactionStatus
    changed_by_id: UUID
    reason: str | None
    changed_at: datetime

    @classmethod
    def from_model(cls, model: OrderStatusHistory) -> OrderStatusHistoryInfo:
        return cls(
            id=model.id,
            order_id=model.order_id,
            sequence=model.sequence,
            old_status=TransactionStatus(model.old_status),
            new_status=TransactionStatus(model.new_status),
            changed_by_id=model.created_by_id,
            reason=model.reason,
            changed_at=model.created_at,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing.  ``page`` is zero-based."""

    items: tuple[T, ...]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
