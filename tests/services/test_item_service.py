"""Tests for ItemService."""

from uuid import uuid4

import pytest

from warehouse_kernel.exceptions import (
    DuplicateQrCodeError,
    ItemNotFoundError,
    ValidationError,
)
from warehouse_kernel.models.item import UnitType


class TestItemService:
    """Item registration and lookup."""

    def test_create_item_starts_empty(self, item_service, test_actor_id):
        """New items hold no stock."""
        item = item_service.create_item(
            name="Hex bolt M8",
            qr_code="QR-HEX-M8",
            actor_id=test_actor_id,
            unit="BOX",
            description="zinc plated",
        )

        assert item.current_quantity == 0
        assert item.unit == UnitType.BOX
        assert item.description == "zinc plated"
        assert item.version == 1

    def test_duplicate_qr_code(self, item_service, test_actor_id):
        item_service.create_item("First", "QR-1", test_actor_id)

        with pytest.raises(DuplicateQrCodeError) as exc_info:
            item_service.create_item("Second", "QR-1", test_actor_id)

        assert exc_info.value.qr_code == "QR-1"

    @pytest.mark.parametrize("name,qr_code", [("", "QR-2"), ("  ", "QR-2"), ("Bolt", "")])
    def test_blank_fields_rejected(self, item_service, name, qr_code, test_actor_id):
        with pytest.raises(ValidationError):
            item_service.create_item(name, qr_code, test_actor_id)

    def test_unknown_unit_rejected(self, item_service, test_actor_id):
        with pytest.raises(ValidationError) as exc_info:
            item_service.create_item("Bolt", "QR-3", test_actor_id, unit="GALLON")

        assert exc_info.value.field == "unit"

    def test_actor_required(self, item_service):
        with pytest.raises(ValidationError) as exc_info:
            item_service.create_item("Bolt", "QR-4", None)

        assert exc_info.value.field == "actor_id"

    def test_get_and_find(self, item_service, test_actor_id):
        created = item_service.create_item("Washer", "QR-WASHER", test_actor_id)

        assert item_service.get_item(created.id) == created
        assert item_service.find_by_qr_code("QR-WASHER") == created
        assert item_service.find_by_qr_code("QR-MISSING") is None

    def test_get_unknown_item(self, item_service):
        with pytest.raises(ItemNotFoundError):
            item_service.get_item(uuid4())
