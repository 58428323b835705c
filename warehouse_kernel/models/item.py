"""
Module: warehouse_kernel.models.item
Responsibility: ORM persistence for stock-keeping items.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - current_quantity >= 0 (CHECK constraint; the ledger refuses debits
      that would break it).
    - qr_code is unique.
    - version is an optimistic-lock counter bumped on every UPDATE, so a
      concurrent stale write fails instead of silently losing stock.

Audit relevance:
    current_quantity is a cached projection of the item's ledger rows.  It
    is mutated ONLY by TransactionLedger.create_transaction.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warehouse_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from warehouse_kernel.models.location import InventoryLocation
    from warehouse_kernel.models.transaction import Transaction


class UnitType(str, Enum):
    """Unit of measure for an item's quantity."""

    PIECE = "PIECE"
    KG = "KG"
    LITER = "LITER"
    METER = "METER"
    BOX = "BOX"
    PALLET = "PALLET"


class Item(TrackedBase):
    """
    A stock-keeping unit with a live quantity.

    Contract:
        current_quantity always equals the signed sum of the item's ledger
        transactions, floored at zero.  Nothing outside the ledger writes it.

    Non-goals:
        - Category and keyword tagging live outside the kernel.
    """

    __tablename__ = "items"

    __table_args__ = (
        UniqueConstraint("qr_code", name="uq_item_qr_code"),
        CheckConstraint("current_quantity >= 0", name="ck_item_quantity_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    unit: Mapped[UnitType] = mapped_column(
        String(20),
        default=UnitType.PIECE,
        nullable=False,
    )

    current_quantity: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    qr_code: Mapped[str] = mapped_column(String(100), nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    locations: Mapped[list["InventoryLocation"]] = relationship(
        back_populates="item",
    )

    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Item {self.name} qty={self.current_quantity}>"
