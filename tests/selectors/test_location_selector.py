"""Tests for LocationSelector."""

from uuid import uuid4

from warehouse_kernel.models.transaction import TransactionType


class TestLocationSelector:
    def test_lookup(self, location_selector, location):
        assert location_selector.get(location.id) == location
        assert location_selector.get_by_code("A1-S1") == location
        assert location_selector.get(uuid4()) is None
        assert location_selector.get_by_code("NOPE") is None

    def test_threshold(self, location_selector, location, make_location):
        bare = make_location(max_threshold=None)

        assert location_selector.get_threshold(location.id).max_threshold == 1000
        assert location_selector.get_threshold(bare.id) is None

    def test_items_and_sums(self, location_selector, location, stocked_item, ledger, test_actor_id):
        bolt = stocked_item(location.id, 10, name="Bolt")
        nut = stocked_item(location.id, 4, name="Nut")
        ledger.create_transaction(TransactionType.ISSUE_TO_SALES, bolt.id, location.id, 3, test_actor_id)

        assert [i.name for i in location_selector.items_in_location(location.id)] == ["Bolt", "Nut"]
        assert location_selector.item_count_in_location(location.id) == 2
        assert location_selector.item_quantity_in_location(location.id, bolt.id) == 13
        assert location_selector.item_quantity_in_location(location.id, nut.id) == 4
        assert location_selector.occupancy(location.id) == 17

    def test_empty_location_sums_to_zero(self, location_selector, location):
        assert location_selector.occupancy(location.id) == 0
        assert location_selector.items_in_location(location.id) == []

    def test_active_locations_sorted_by_code(self, location_selector, make_location, location_service, test_actor_id):
        b = make_location(code="B")
        a = make_location(code="A")
        gone = make_location(code="C")
        location_service.deactivate_location(gone.id, test_actor_id)

        assert [loc.code for loc in location_selector.active_locations()] == ["A", "B"]
        assert {a.id, b.id} == {loc.id for loc in location_selector.active_locations()}
