"""
Module: warehouse_kernel.selectors.order_selector
Responsibility: Read-only queries over orders and their status history.
Architecture position: Kernel > Selectors.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.dtos import OrderInfo, OrderStatusHistoryInfo, Page
from warehouse_kernel.domain.stock import parse_status
from warehouse_kernel.models.order import Order, OrderStatusHistory
from warehouse_kernel.models.transaction import TransactionStatus
from warehouse_kernel.selectors.base import BaseSelector


class OrderSelector(BaseSelector[Order]):
    """
    Selector for order queries.

    Guarantees:
        - Lines inside each OrderInfo are in line_no order.
        - Listings are ordered most recent first.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    @staticmethod
    def _newest_first(stmt: Select) -> Select:
        return stmt.order_by(Order.created_at.desc(), Order.order_number)

    def _list(self, stmt: Select) -> list[OrderInfo]:
        rows = self.session.execute(self._newest_first(stmt)).scalars().all()
        return [OrderInfo.from_model(order) for order in rows]

    def get(self, order_id: UUID) -> OrderInfo | None:
        order = self.session.get(Order, order_id)
        if order is None:
            return None
        return OrderInfo.from_model(order)

    def get_by_number(self, order_number: str) -> OrderInfo | None:
        order = self.session.execute(
            select(Order).where(Order.order_number == order_number)
        ).scalar_one_or_none()
        if order is None:
            return None
        return OrderInfo.from_model(order)

    def by_status(self, status: TransactionStatus | str) -> list[OrderInfo]:
        value = parse_status(status).value
        return self._list(select(Order).where(Order.status == value))

    def by_user(self, user_id: UUID) -> list[OrderInfo]:
        return self._list(select(Order).where(Order.created_by_id == user_id))

    def count(self) -> int:
        return self._count(select(Order))

    def list_orders(self, page: int = 0, size: int = 20) -> Page[OrderInfo]:
        self._check_page(page, size)
        stmt = select(Order)
        total = self._count(stmt)
        rows = self.session.execute(
            self._newest_first(stmt).limit(size).offset(page * size)
        ).scalars().all()
        return Page(
            items=tuple(OrderInfo.from_model(order) for order in rows),
            total=total,
            page=page,
            size=size,
        )

    def status_history(self, order_id: UUID) -> list[OrderStatusHistoryInfo]:
        """History rows for the order, most recent first."""
        rows = self.session.execute(
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(
                OrderStatusHistory.created_at.desc(),
                OrderStatusHistory.sequence.desc(),
            )
        ).scalars().all()
        return [OrderStatusHistoryInfo.from_model(row) for row in rows]
