"""
Module: warehouse_kernel.selectors.location_selector
Responsibility: Read-only queries over locations, thresholds and item
    assignments, including the ledger sums the capacity engine relies on.
Architecture position: Kernel > Selectors.

Occupancy here is throughput: the sum of every ledger quantity ever posted
against a location, regardless of transaction type.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.dtos import ItemInfo, LocationInfo, ThresholdInfo
from warehouse_kernel.models.item import Item
from warehouse_kernel.models.location import (
    InventoryLocation,
    Location,
    LocationThreshold,
)
from warehouse_kernel.models.transaction import Transaction
from warehouse_kernel.selectors.base import BaseSelector


class LocationSelector(BaseSelector[Location]):
    """Selector for location, threshold and assignment queries."""

    def __init__(self, session: Session):
        super().__init__(session)

    def get(self, location_id: UUID) -> LocationInfo | None:
        location = self.session.get(Location, location_id)
        if location is None:
            return None
        return LocationInfo.from_model(location)

    def get_by_code(self, code: str) -> LocationInfo | None:
        location = self.session.execute(
            select(Location).where(Location.code == code)
        ).scalar_one_or_none()
        if location is None:
            return None
        return LocationInfo.from_model(location)

    def active_locations(self) -> list[LocationInfo]:
        rows = self.session.execute(
            select(Location).where(Location.is_active.is_(True)).order_by(Location.code)
        ).scalars().all()
        return [LocationInfo.from_model(loc) for loc in rows]

    def get_threshold(self, location_id: UUID) -> ThresholdInfo | None:
        threshold = self.session.execute(
            select(LocationThreshold).where(LocationThreshold.location_id == location_id)
        ).scalar_one_or_none()
        if threshold is None:
            return None
        return ThresholdInfo.from_model(threshold)

    def occupancy(self, location_id: UUID) -> int:
        """Cumulative ledger quantity posted against the location."""
        return self.session.execute(
            select(func.coalesce(func.sum(Transaction.quantity), 0)).where(
                Transaction.location_id == location_id
            )
        ).scalar_one()

    def item_quantity_in_location(self, location_id: UUID, item_id: UUID) -> int:
        """Cumulative ledger quantity posted for one item at one location."""
        return self.session.execute(
            select(func.coalesce(func.sum(Transaction.quantity), 0)).where(
                Transaction.location_id == location_id,
                Transaction.item_id == item_id,
            )
        ).scalar_one()

    def item_count_in_location(self, location_id: UUID) -> int:
        """Number of distinct items assigned to the location."""
        return self.session.execute(
            select(func.count(InventoryLocation.id)).where(
                InventoryLocation.location_id == location_id
            )
        ).scalar_one()

    def items_in_location(self, location_id: UUID) -> list[ItemInfo]:
        rows = self.session.execute(
            select(Item)
            .join(InventoryLocation, InventoryLocation.item_id == Item.id)
            .where(InventoryLocation.location_id == location_id)
            .order_by(Item.name, Item.id)
        ).scalars().all()
        return [ItemInfo.from_model(item) for item in rows]

    def is_assigned(self, location_id: UUID, item_id: UUID) -> bool:
        return (
            self.session.execute(
                select(InventoryLocation.id).where(
                    InventoryLocation.location_id == location_id,
                    InventoryLocation.item_id == item_id,
                )
            ).first()
            is not None
        )

    def locations_for_item(self, item_id: UUID) -> list[LocationInfo]:
        """
        Locations the item is assigned to, in fulfillment order.

        Earliest assignment first; ties broken by lowest location code.
        """
        rows = self.session.execute(
            select(Location)
            .join(InventoryLocation, InventoryLocation.location_id == Location.id)
            .where(InventoryLocation.item_id == item_id)
            .order_by(InventoryLocation.created_at, Location.code)
        ).scalars().all()
        return [LocationInfo.from_model(loc) for loc in rows]
