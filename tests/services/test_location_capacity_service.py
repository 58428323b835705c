"""
Tests for LocationCapacityService.

Covers:
- can_add_item bound (occupancy + 1 <= max)
- Minimum threshold checks
- Item assignment: duplicate conflict, capacity refusal, opening RECEIPT
- Assignment removal
- Occupancy projection
"""

from uuid import uuid4

import pytest

from warehouse_kernel.exceptions import (
    CapacityExceededError,
    ConflictError,
    DuplicateInventoryLocationError,
    InventoryLocationNotFoundError,
    ItemNotFoundError,
    LocationNotFoundError,
    LocationThresholdNotFoundError,
)
from warehouse_kernel.models.transaction import TransactionType


class TestCanAddItem:
    def test_true_below_max_false_at_max(
        self, capacity_service, ledger, make_location, stocked_item, make_item, test_actor_id
    ):
        """max 50: occupancy 49 still fits one more, 50 does not."""
        loc = make_location(max_threshold=50)
        item = stocked_item(loc.id, 49)
        probe = make_item(name="Probe")

        assert capacity_service.occupancy(loc.id) == 49
        assert capacity_service.can_add_item(loc.id, probe.id) is True

        ledger.create_transaction(TransactionType.RECEIPT, item.id, loc.id, 1, test_actor_id)

        assert capacity_service.occupancy(loc.id) == 50
        assert capacity_service.can_add_item(loc.id, probe.id) is False

    def test_occupancy_counts_debits_too(self, capacity_service, ledger, make_location, stocked_item, test_actor_id):
        """Occupancy is throughput: issues add to it as well."""
        loc = make_location(max_threshold=100)
        item = stocked_item(loc.id, 10)

        ledger.create_transaction(TransactionType.ISSUE_TO_SALES, item.id, loc.id, 4, test_actor_id)

        assert capacity_service.occupancy(loc.id) == 14

    def test_requires_threshold(self, capacity_service, make_location, make_item):
        loc = make_location(max_threshold=None)
        item = make_item()

        with pytest.raises(LocationThresholdNotFoundError):
            capacity_service.can_add_item(loc.id, item.id)

    def test_unknown_location(self, capacity_service, make_item):
        with pytest.raises(LocationNotFoundError):
            capacity_service.can_add_item(uuid4(), make_item().id)


class TestMinThreshold:
    def test_below_until_item_quantity_reaches_min(
        self, capacity_service, ledger, make_location, stocked_item, test_actor_id
    ):
        loc = make_location(min_threshold=10, max_threshold=100)
        item = stocked_item(loc.id, 5)

        assert capacity_service.is_below_min_threshold(loc.id, item.id) is True

        ledger.create_transaction(TransactionType.RECEIPT, item.id, loc.id, 5, test_actor_id)

        assert capacity_service.is_below_min_threshold(loc.id, item.id) is False

    def test_counts_only_the_given_item(self, capacity_service, make_location, stocked_item):
        loc = make_location(min_threshold=10, max_threshold=100)
        stocked_item(loc.id, 50, name="Bolt")
        nut = stocked_item(loc.id, 3, name="Nut")

        assert capacity_service.is_below_min_threshold(loc.id, nut.id) is True


class TestAddItemToLocation:
    def test_assigns_empty_item_without_ledger_entry(
        self, capacity_service, location, make_item, location_selector, transaction_selector, test_actor_id, clock
    ):
        item = make_item()

        assignment = capacity_service.add_item_to_location(location.id, item.id, test_actor_id)

        assert location_selector.is_assigned(location.id, item.id)
        assert assignment.location_id == location.id
        assert assignment.assigned_at == clock.now()
        assert transaction_selector.by_item(item.id) == []

    def test_assignment_posts_receipt_of_current_quantity(
        self, capacity_service, make_location, stocked_item, item_service, transaction_selector, test_actor_id
    ):
        """The opening RECEIPT carries the quantity the item holds right now."""
        first = make_location(code="A1")
        second = make_location(code="B1")
        item = stocked_item(first.id, 30)

        assignment = capacity_service.add_item_to_location(second.id, item.id, test_actor_id)

        assert assignment.item_id == item.id
        assert assignment.location_id == second.id
        assert assignment.assigned_by_id == test_actor_id
        receipts = [t for t in transaction_selector.by_location(second.id)]
        assert len(receipts) == 1
        assert receipts[0].transaction_type == TransactionType.RECEIPT
        assert receipts[0].quantity == 30
        assert receipts[0].user_id == test_actor_id
        assert "B1" in receipts[0].description
        assert capacity_service.occupancy(second.id) == 30
        # The receipt goes through the ledger like any other credit.
        assert item_service.get_item(item.id).current_quantity == 60

    def test_duplicate_pair_conflicts_and_keeps_first(
        self, capacity_service, location, make_item, location_selector, test_actor_id
    ):
        item = make_item()
        capacity_service.add_item_to_location(location.id, item.id, test_actor_id)

        with pytest.raises(DuplicateInventoryLocationError) as exc_info:
            capacity_service.add_item_to_location(location.id, item.id, test_actor_id)

        assert isinstance(exc_info.value, ConflictError)
        assert location_selector.is_assigned(location.id, item.id)
        assert location_selector.item_count_in_location(location.id) == 1

    def test_full_location_refuses_assignment(
        self, capacity_service, make_location, stocked_item, make_item, location_selector, test_actor_id
    ):
        loc = make_location(max_threshold=5)
        stocked_item(loc.id, 5)
        newcomer = make_item(name="Newcomer")

        with pytest.raises(CapacityExceededError) as exc_info:
            capacity_service.add_item_to_location(loc.id, newcomer.id, test_actor_id)

        assert exc_info.value.occupancy == 5
        assert exc_info.value.max_threshold == 5
        assert not location_selector.is_assigned(loc.id, newcomer.id)

    def test_unknown_item(self, capacity_service, location, test_actor_id):
        with pytest.raises(ItemNotFoundError):
            capacity_service.add_item_to_location(location.id, uuid4(), test_actor_id)

    def test_location_without_threshold(self, capacity_service, make_location, make_item, test_actor_id):
        loc = make_location(max_threshold=None)

        with pytest.raises(LocationThresholdNotFoundError):
            capacity_service.add_item_to_location(loc.id, make_item().id, test_actor_id)

    def test_assignment_is_logged(self, capacity_service, location, make_item, captured_logs, test_actor_id):
        item = make_item()

        capacity_service.add_item_to_location(location.id, item.id, test_actor_id)

        records = [r for r in captured_logs() if r["message"] == "item_added_to_location"]
        assert records[0]["item_id"] == str(item.id)
        assert records[0]["seeded_quantity"] == 0


class TestRemoveItemFromLocation:
    def test_remove_keeps_ledger_entries(
        self, capacity_service, location, stocked_item, location_selector, transaction_selector, test_actor_id
    ):
        item = stocked_item(location.id, 12)

        capacity_service.remove_item_from_location(location.id, item.id, test_actor_id)

        assert not location_selector.is_assigned(location.id, item.id)
        assert len(transaction_selector.by_item(item.id)) == 1
        assert capacity_service.occupancy(location.id) == 12

    def test_remove_unassigned_pair(self, capacity_service, location, make_item, test_actor_id):
        item = make_item()

        with pytest.raises(InventoryLocationNotFoundError):
            capacity_service.remove_item_from_location(location.id, item.id, test_actor_id)

    def test_item_can_be_reassigned_after_removal(self, capacity_service, location, make_item, test_actor_id):
        item = make_item()
        capacity_service.add_item_to_location(location.id, item.id, test_actor_id)
        capacity_service.remove_item_from_location(location.id, item.id, test_actor_id)

        capacity_service.add_item_to_location(location.id, item.id, test_actor_id)


class TestLocationOccupancy:
    def test_projection(self, capacity_service, make_location, stocked_item):
        loc = make_location(code="C3", name="Cold room", min_threshold=10, max_threshold=200)
        stocked_item(loc.id, 30, name="Milk")
        stocked_item(loc.id, 20, name="Butter")

        occupancy = capacity_service.get_location_occupancy(loc.id)

        assert occupancy.location_id == loc.id
        assert occupancy.location_code == "C3"
        assert occupancy.location_name == "Cold room"
        assert occupancy.max_capacity == 200
        assert occupancy.min_threshold == 10
        assert occupancy.current_occupancy == 50
        assert occupancy.occupancy_percentage == 25.0
        assert occupancy.item_count == 2
        assert occupancy.is_above_threshold is True
        assert occupancy.is_active is True

    def test_projection_without_threshold(self, capacity_service, make_location):
        loc = make_location(max_threshold=None)

        occupancy = capacity_service.get_location_occupancy(loc.id)

        assert occupancy.max_capacity == 0
        assert occupancy.occupancy_percentage == 0.0
        assert occupancy.item_count == 0

    def test_unknown_location(self, capacity_service):
        with pytest.raises(LocationNotFoundError):
            capacity_service.get_location_occupancy(uuid4())
