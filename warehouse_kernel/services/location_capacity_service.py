"""
LocationCapacityService -- occupancy thresholds and item/location assignment.

Responsibility:
    Decides whether a location can take another item, reports how full a
    location is, and creates/destroys InventoryLocation rows.  Assigning an
    item to a location posts a RECEIPT through the TransactionLedger.

Architecture position:
    Kernel > Services -- imperative shell.
    Reads sums through LocationSelector; writes stock only via
    TransactionLedger.

Invariants enforced:
    - An (item, location) pair is assigned at most once.
    - can_add_item is true exactly while occupancy + 1 <= max_threshold.
    - Assignment and its RECEIPT share one savepoint.

Failure modes:
    - LocationNotFoundError / ItemNotFoundError: ids do not resolve.
    - LocationThresholdNotFoundError: capacity asked of a location that has
      no threshold.
    - DuplicateInventoryLocationError: pair already assigned.
    - CapacityExceededError: location is at its max threshold.
    - InventoryLocationNotFoundError: removing a pair that is not assigned.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.dtos import (
    InventoryLocationInfo,
    LocationOccupancy,
    ThresholdInfo,
)
from warehouse_kernel.domain.stock import occupancy_percentage
from warehouse_kernel.exceptions import (
    CapacityExceededError,
    DuplicateInventoryLocationError,
    InventoryLocationNotFoundError,
    ItemNotFoundError,
    LocationNotFoundError,
    LocationThresholdNotFoundError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.models.item import Item
from warehouse_kernel.models.location import InventoryLocation, Location
from warehouse_kernel.models.transaction import TransactionType
from warehouse_kernel.selectors.location_selector import LocationSelector
from warehouse_kernel.services.base import BaseService
from warehouse_kernel.services.transaction_ledger import TransactionLedger

logger = get_logger("services.location_capacity")


class LocationCapacityService(BaseService[InventoryLocation]):
    """
    Capacity engine for storage locations.

    Contract:
        Occupancy is the cumulative quantity of every ledger entry posted
        against the location.  Adding an item counts as one unit against the
        max threshold.

    Non-goals:
        - Does NOT move stock between locations.
        - Does NOT block ledger postings on capacity; only assignment is
          gated.
    """

    def __init__(
        self,
        session: Session,
        ledger: TransactionLedger | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(session, clock)
        self._ledger = ledger or TransactionLedger(session, self._clock)
        self._locations = LocationSelector(session)

    def occupancy(self, location_id: UUID) -> int:
        self._get_location(location_id)
        return self._locations.occupancy(location_id)

    def can_add_item(self, location_id: UUID, item_id: UUID) -> bool:
        """
        True while one more unit fits under the location's max threshold.

        item_id is accepted for symmetry with is_below_min_threshold; the
        check counts a flat unit of one regardless of the item.
        """
        self._get_location(location_id)
        threshold = self._require_threshold(location_id)
        return self._locations.occupancy(location_id) + 1 <= threshold.max_threshold

    def is_below_min_threshold(self, location_id: UUID, item_id: UUID) -> bool:
        """True if the item's cumulative quantity here is under the minimum."""
        self._get_location(location_id)
        threshold = self._require_threshold(location_id)
        quantity = self._locations.item_quantity_in_location(location_id, item_id)
        return quantity < threshold.min_threshold

    def add_item_to_location(
        self,
        location_id: UUID,
        item_id: UUID,
        actor_id: UUID,
    ) -> InventoryLocationInfo:
        """
        Assign an item to a location and post its opening RECEIPT.

        The RECEIPT carries the item's current quantity.  An item with zero
        stock is assigned without a ledger entry.

        Returns:
            The new assignment.

        Raises:
            DuplicateInventoryLocationError: Pair already assigned.
            CapacityExceededError: Location is full.
        """
        self._require_actor(actor_id)
        location = self._get_location(location_id)
        item = self.session.get(Item, item_id)
        if item is None:
            raise ItemNotFoundError(str(item_id))

        if self._locations.is_assigned(location_id, item_id):
            raise DuplicateInventoryLocationError(str(item_id), str(location_id))

        if not self.can_add_item(location_id, item_id):
            threshold = self._require_threshold(location_id)
            occupancy = self._locations.occupancy(location_id)
            logger.warning(
                "capacity_exceeded",
                extra={
                    "location_id": str(location_id),
                    "item_id": str(item_id),
                    "occupancy": occupancy,
                    "max_threshold": threshold.max_threshold,
                },
            )
            raise CapacityExceededError(
                str(location_id), str(item_id), occupancy, threshold.max_threshold
            )

        now = self._clock.now()
        with self.session.begin_nested():
            assignment = InventoryLocation(
                item_id=item_id,
                location_id=location_id,
                created_at=now,
                updated_at=now,
                created_by_id=actor_id,
            )
            self.session.add(assignment)
            self.session.flush()

            seeded_quantity = item.current_quantity
            if seeded_quantity > 0:
                self._ledger.create_transaction(
                    TransactionType.RECEIPT,
                    item_id=item_id,
                    location_id=location_id,
                    quantity=seeded_quantity,
                    actor_id=actor_id,
                    description=f"Item {item.name} added to location {location.code}",
                )

        logger.info(
            "item_added_to_location",
            extra={
                "location_id": str(location_id),
                "item_id": str(item_id),
                "seeded_quantity": seeded_quantity,
                "actor_id": str(actor_id),
            },
        )
        return InventoryLocationInfo.from_model(assignment)

    def remove_item_from_location(
        self,
        location_id: UUID,
        item_id: UUID,
        actor_id: UUID,
    ) -> None:
        """Drop the assignment.  Ledger entries at the location are kept."""
        self._require_actor(actor_id)
        assignment = self.session.execute(
            select(InventoryLocation).where(
                InventoryLocation.location_id == location_id,
                InventoryLocation.item_id == item_id,
            )
        ).scalar_one_or_none()
        if assignment is None:
            raise InventoryLocationNotFoundError(str(item_id), str(location_id))

        self.session.delete(assignment)
        self.session.flush()

        logger.info(
            "item_removed_from_location",
            extra={
                "location_id": str(location_id),
                "item_id": str(item_id),
                "actor_id": str(actor_id),
            },
        )

    def get_location_occupancy(self, location_id: UUID) -> LocationOccupancy:
        location = self._get_location(location_id)
        threshold = self._locations.get_threshold(location_id)
        max_capacity = threshold.max_threshold if threshold else 0
        min_threshold = threshold.min_threshold if threshold else 0
        occupancy = self._locations.occupancy(location_id)

        return LocationOccupancy(
            location_id=location.id,
            location_code=location.code,
            location_name=location.name,
            max_capacity=max_capacity,
            min_threshold=min_threshold,
            current_occupancy=occupancy,
            occupancy_percentage=occupancy_percentage(occupancy, max_capacity),
            item_count=self._locations.item_count_in_location(location_id),
            is_above_threshold=occupancy >= min_threshold,
            is_active=location.is_active,
        )

    def _get_location(self, location_id: UUID) -> Location:
        location = self.session.get(Location, location_id)
        if location is None:
            raise LocationNotFoundError(str(location_id))
        return location

    def _require_threshold(self, location_id: UUID) -> ThresholdInfo:
        threshold = self._locations.get_threshold(location_id)
        if threshold is None:
            raise LocationThresholdNotFoundError(str(location_id))
        return threshold
