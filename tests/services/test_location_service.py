"""Tests for LocationService: locations and capacity thresholds."""

from uuid import uuid4

import pytest

from warehouse_kernel.exceptions import (
    DuplicateLocationCodeError,
    InvalidThresholdError,
    LocationNotFoundError,
    LocationThresholdNotFoundError,
    ThresholdAlreadyExistsError,
    ValidationError,
)


class TestLocations:
    def test_create_location(self, location_service, test_actor_id):
        location = location_service.create_location(
            "A1-S2-R3", test_actor_id, name="Aisle 1 shelf 2", location_type="SHELF"
        )

        assert location.code == "A1-S2-R3"
        assert location.location_type == "SHELF"
        assert location.is_active is True

    def test_duplicate_code(self, location_service, test_actor_id):
        location_service.create_location("DOCK-1", test_actor_id)

        with pytest.raises(DuplicateLocationCodeError):
            location_service.create_location("DOCK-1", test_actor_id)

    def test_blank_code(self, location_service, test_actor_id):
        with pytest.raises(ValidationError):
            location_service.create_location(" ", test_actor_id)

    def test_update_only_given_fields(self, location_service, test_actor_id):
        location = location_service.create_location(
            "BIN-7", test_actor_id, name="Bin 7", location_type="BIN"
        )

        updated = location_service.update_location(
            location.id, test_actor_id, description="near dock"
        )

        assert updated.name == "Bin 7"
        assert updated.location_type == "BIN"
        assert updated.description == "near dock"

    def test_deactivate(self, location_service, location_selector, test_actor_id):
        location = location_service.create_location("OLD-1", test_actor_id)

        info = location_service.deactivate_location(location.id, test_actor_id)

        assert info.is_active is False
        assert location.id not in {loc.id for loc in location_selector.active_locations()}

    def test_unknown_location(self, location_service, test_actor_id):
        with pytest.raises(LocationNotFoundError):
            location_service.update_location(uuid4(), test_actor_id, name="x")


class TestThresholds:
    @pytest.fixture
    def bare_location(self, make_location):
        return make_location(max_threshold=None)

    def test_create_and_get(self, location_service, bare_location, test_actor_id):
        created = location_service.create_threshold(bare_location.id, 5, 50, test_actor_id)

        assert created.min_threshold == 5
        assert created.max_threshold == 50
        assert location_service.get_threshold(bare_location.id) == created

    def test_only_one_per_location(self, location_service, bare_location, test_actor_id):
        location_service.create_threshold(bare_location.id, 0, 10, test_actor_id)

        with pytest.raises(ThresholdAlreadyExistsError):
            location_service.create_threshold(bare_location.id, 1, 20, test_actor_id)

    @pytest.mark.parametrize("bounds", [(10, 10), (20, 10), (-1, 10), (0, -5)])
    def test_invalid_bounds(self, location_service, bare_location, bounds, test_actor_id):
        with pytest.raises(InvalidThresholdError):
            location_service.create_threshold(bare_location.id, *bounds, test_actor_id)

    def test_update(self, location_service, bare_location, test_actor_id):
        location_service.create_threshold(bare_location.id, 0, 10, test_actor_id)

        updated = location_service.update_threshold(bare_location.id, 2, 40, test_actor_id)

        assert (updated.min_threshold, updated.max_threshold) == (2, 40)

    def test_update_validates_bounds(self, location_service, bare_location, test_actor_id):
        location_service.create_threshold(bare_location.id, 0, 10, test_actor_id)

        with pytest.raises(InvalidThresholdError):
            location_service.update_threshold(bare_location.id, 10, 5, test_actor_id)

    def test_delete(self, location_service, bare_location, test_actor_id):
        location_service.create_threshold(bare_location.id, 0, 10, test_actor_id)

        location_service.delete_threshold(bare_location.id, test_actor_id)

        with pytest.raises(LocationThresholdNotFoundError):
            location_service.get_threshold(bare_location.id)

    def test_threshold_for_unknown_location(self, location_service, test_actor_id):
        with pytest.raises(LocationNotFoundError):
            location_service.create_threshold(uuid4(), 0, 10, test_actor_id)
