"""
ItemService -- registration and lookup of stock-keeping items.

Items are created with zero stock.  Their quantity only moves through
TransactionLedger afterwards, so this service never writes current_quantity
after INSERT.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.dtos import ItemInfo
from warehouse_kernel.exceptions import (
    DuplicateQrCodeError,
    ItemNotFoundError,
    ValidationError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.models.item import Item, UnitType
from warehouse_kernel.services.base import BaseService

logger = get_logger("services.item")


class ItemService(BaseService[Item]):
    """
    Service for managing items.

    Non-goals:
        - Does NOT change stock; use TransactionLedger.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session, clock)

    def create_item(
        self,
        name: str,
        qr_code: str,
        actor_id: UUID,
        unit: UnitType | str = UnitType.PIECE,
        description: str | None = None,
    ) -> ItemInfo:
        """
        Register a new item with zero stock.

        Raises:
            ValidationError: Blank name or QR code, unknown unit.
            DuplicateQrCodeError: QR code already used by another item.
        """
        self._require_actor(actor_id)
        if not name or not name.strip():
            raise ValidationError("name", "is required")
        if not qr_code or not qr_code.strip():
            raise ValidationError("qr_code", "is required")
        try:
            unit = UnitType(unit)
        except ValueError:
            raise ValidationError("unit", f"unrecognized unit '{unit}'") from None

        if self._find(qr_code) is not None:
            raise DuplicateQrCodeError(qr_code)

        now = self._clock.now()
        item = Item(
            name=name.strip(),
            qr_code=qr_code,
            unit=unit.value,
            description=description,
            current_quantity=0,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
        )
        self.session.add(item)
        self.session.flush()

        logger.info(
            "item_created",
            extra={"item_id": str(item.id), "qr_code": qr_code, "unit": unit.value},
        )
        return ItemInfo.from_model(item)

    def get_item(self, item_id: UUID) -> ItemInfo:
        item = self.session.get(Item, item_id)
        if item is None:
            raise ItemNotFoundError(str(item_id))
        return ItemInfo.from_model(item)

    def find_by_qr_code(self, qr_code: str) -> ItemInfo | None:
        item = self._find(qr_code)
        return ItemInfo.from_model(item) if item is not None else None

    def _find(self, qr_code: str) -> Item | None:
        return self.session.execute(
            select(Item).where(Item.qr_code == qr_code)
        ).scalar_one_or_none()
