"""
Module: warehouse_kernel.models.order
Responsibility: ORM persistence for multi-line orders, their lines, and the
    append-only status history.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - order_number is unique.
    - Every OrderLine belongs to exactly one Order and, once fulfilled,
      references the ledger Transaction that realized it.
    - OrderStatusHistory rows are append-only and deleted only together with
      their Order (cascade; ORM listeners in db/immutability.py).

Audit relevance:
    Deleting an order removes its lines and history but NOT its ledger
    transactions: the stock decrements stay recorded.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warehouse_kernel.db.base import TrackedBase, UUIDString
from warehouse_kernel.models.transaction import TransactionStatus

if TYPE_CHECKING:
    from warehouse_kernel.models.item import Item
    from warehouse_kernel.models.transaction import Transaction


class Order(TrackedBase):
    """
    Multi-item stock request.

    created_by_id is the creating user.  item_count and total_quantity are
    computed from the lines, never stored.
    """

    __tablename__ = "orders"

    __table_args__ = (
        UniqueConstraint("order_number", name="uq_order_number"),
        Index("idx_orders_user", "created_by_id"),
        Index("idx_orders_status", "status"),
        Index("idx_orders_created_at", "created_at"),
    )

    order_number: Mapped[str] = mapped_column(String(50), nullable=False)

    status: Mapped[TransactionStatus] = mapped_column(
        String(50),
        default=TransactionStatus.PENDING,
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.line_no",
        lazy="selectin",
    )

    status_history: Mapped[list["OrderStatusHistory"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.sequence",
    )

    def __repr__(self) -> str:
        return f"<Order {self.order_number} status={self.status}>"

    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


class OrderLine(TrackedBase):
    """One item/quantity pair of an order, realized by one ORDER transaction."""

    __tablename__ = "order_lines"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_line_quantity_positive"),
        Index("idx_order_lines_order", "order_id"),
    )

    order_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("orders.id"),
        nullable=False,
    )

    item_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("items.id"),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # Position within the order (deterministic ordering)
    line_no: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    transaction_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("transactions.id"),
        nullable=True,
    )

    order: Mapped["Order"] = relationship(back_populates="lines")

    item: Mapped["Item"] = relationship()

    transaction: Mapped["Transaction | None"] = relationship()

    def __repr__(self) -> str:
        return f"<OrderLine {self.line_no} qty={self.quantity}>"


class OrderStatusHistory(TrackedBase):
    """
    Append-only audit row for one order status change.

    The first row of every order records the initial status as both old and
    new.  created_by_id is the acting user and created_at the change time.
    """

    __tablename__ = "order_status_history"

    __table_args__ = (
        UniqueConstraint("order_id", "sequence", name="uq_order_status_history_sequence"),
        Index("idx_order_status_history_order", "order_id"),
    )

    order_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("orders.id"),
        nullable=False,
    )

    # 1 for the creation row, then +1 per change within the order.
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    old_status: Mapped[TransactionStatus] = mapped_column(String(50), nullable=False)

    new_status: Mapped[TransactionStatus] = mapped_column(String(50), nullable=False)

    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    order: Mapped["Order"] = relationship(back_populates="status_history")

    def __repr__(self) -> str:
        return f"<OrderStatusHistory {self.old_status} -> {self.new_status}>"

    @property
    def changed_by_id(self) -> UUID:
        return self.created_by_id

    @property
    def changed_at(self) -> datetime:
        return self.created_at
