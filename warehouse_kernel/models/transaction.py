"""
Module: warehouse_kernel.models.transaction
Responsibility: ORM persistence for ledger transactions -- the only record of
    why an item's quantity changed.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - quantity > 0 (CHECK constraint); transaction_type decides the sign.
    - Append-only: after INSERT only status (and audit metadata) may change,
      and rows are deleted only together with their item
      (ORM listeners in db/immutability.py).

Audit relevance:
    For every item, current_quantity == sum(RECEIPT, RETURN) -
    sum(ORDER, ISSUE_TO_PRODUCTION, ISSUE_TO_SALES), floored at zero.
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warehouse_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from warehouse_kernel.models.item import Item
    from warehouse_kernel.models.location import Location


class TransactionType(str, Enum):
    """Kind of stock movement recorded by a ledger transaction."""

    RECEIPT = "RECEIPT"
    ISSUE_TO_PRODUCTION = "ISSUE_TO_PRODUCTION"
    ISSUE_TO_SALES = "ISSUE_TO_SALES"
    ORDER = "ORDER"
    RETURN = "RETURN"


class TransactionStatus(str, Enum):
    """Lifecycle status shared by ledger transactions and orders.

    Contract: any status may move to any other; only membership is checked.
    """

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Types that add stock; every other type removes it.
CREDIT_TYPES: frozenset[TransactionType] = frozenset(
    {TransactionType.RECEIPT, TransactionType.RETURN}
)

DEBIT_TYPES: frozenset[TransactionType] = frozenset(
    {
        TransactionType.ORDER,
        TransactionType.ISSUE_TO_PRODUCTION,
        TransactionType.ISSUE_TO_SALES,
    }
)


class Transaction(TrackedBase):
    """
    Immutable ledger entry against one item at one location.

    Contract:
        Created once by TransactionLedger.  created_at is the transaction
        timestamp and user_id the acting user.

    Non-goals:
        - The row does not store the resulting item quantity; that lives on
          Item.current_quantity.
    """

    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transaction_quantity_positive"),
        Index("idx_transactions_item", "item_id"),
        Index("idx_transactions_user", "user_id"),
        Index("idx_transactions_location", "location_id"),
        Index("idx_transactions_created_at", "created_at"),
    )

    transaction_type: Mapped[TransactionType] = mapped_column(
        String(50),
        nullable=False,
    )

    item_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("items.id"),
        nullable=False,
    )

    location_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("locations.id"),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    user_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    status: Mapped[TransactionStatus | None] = mapped_column(
        String(50),
        nullable=True,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    item: Mapped["Item"] = relationship(back_populates="transactions")

    location: Mapped["Location"] = relationship()

    def __repr__(self) -> str:
        return f"<Transaction {self.transaction_type} {self.quantity}>"

    @property
    def is_debit(self) -> bool:
        return TransactionType(self.transaction_type) in DEBIT_TYPES

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign the transaction applies to stock."""
        if self.is_debit:
            return -self.quantity
        return self.quantity
