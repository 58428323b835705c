"""
OrderService -- multi-line orders and their status audit trail.

Responsibility:
    Turns a list of (item, quantity) lines into an Order whose every line is
    realized by one ORDER transaction in the ledger, and records each status
    change of the order as an append-only OrderStatusHistory row.

Architecture position:
    Kernel > Services -- imperative shell.
    Posts stock movements only through TransactionLedger.

Invariants enforced:
    - All-or-nothing: every line is validated before any write, and the whole
      order (order row, lines, ledger entries, first history row) is flushed
      inside one SAVEPOINT.  A failure on any line leaves no trace.
    - The first history row records PENDING -> PENDING.
    - History rows are never modified; they go only with their order.

Failure modes:
    - EmptyOrderError: no lines.
    - ValidationError: non-positive line quantity, missing actor.
    - ItemNotFoundError: a line references an unknown item.
    - ItemHasNoLocationError: a line's item is assigned to no location.
    - DuplicateOrderNumberError: supplied order number already used.
    - InsufficientQuantityError: a line asks for more than is in stock.
    - OrderNotFoundError / InvalidStatusError on status updates.

Audit relevance:
    Deleting an order removes its lines and history but keeps the ledger
    entries, so the stock it consumed stays consumed.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.dtos import OrderInfo, OrderStatusHistoryInfo
from warehouse_kernel.domain.stock import parse_status, require_positive_quantity
from warehouse_kernel.exceptions import (
    DuplicateOrderNumberError,
    EmptyOrderError,
    ItemHasNoLocationError,
    ItemNotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from warehouse_kernel.logging_config import LogContext, get_logger
from warehouse_kernel.models.item import Item
from warehouse_kernel.models.order import Order, OrderLine, OrderStatusHistory
from warehouse_kernel.models.transaction import TransactionStatus, TransactionType
from warehouse_kernel.selectors.location_selector import LocationSelector
from warehouse_kernel.selectors.order_selector import OrderSelector
from warehouse_kernel.services.base import BaseService
from warehouse_kernel.services.transaction_ledger import TransactionLedger

logger = get_logger("services.order")


@dataclass(frozen=True)
class OrderLineRequest:
    """One requested line of a new order."""

    item_id: UUID
    quantity: int


@dataclass(frozen=True)
class _ResolvedLine:
    line_no: int
    item_id: UUID
    quantity: int
    location_id: UUID


class OrderService(BaseService[Order]):
    """
    Order workflow.

    Contract:
        create_order issues one ORDER transaction per line against the
        item's first assigned location (earliest assignment, then lowest
        location code).  Status transitions are unrestricted; any status may
        follow any other.

    Non-goals:
        - Does NOT reverse stock when an order is cancelled or deleted.
    """

    def __init__(
        self,
        session: Session,
        ledger: TransactionLedger | None = None,
        clock: Clock | None = None,
        order_number_prefix: str = "ORD",
        creation_reason: str = "created",
    ):
        super().__init__(session, clock)
        self._ledger = ledger or TransactionLedger(session, self._clock)
        self._locations = LocationSelector(session)
        self._orders = OrderSelector(session)
        self._order_number_prefix = order_number_prefix
        self._creation_reason = creation_reason

    def create_order(
        self,
        lines: Sequence[OrderLineRequest | tuple[UUID, int]] | None,
        actor_id: UUID,
        order_number: str | None = None,
        description: str | None = None,
    ) -> OrderInfo:
        """
        Create an order and issue its stock.

        Args:
            lines: OrderLineRequest objects or (item_id, quantity) pairs.
            actor_id: The ordering user.
            order_number: Explicit number; generated when omitted.
            description: Free text stored on the order.

        Returns:
            OrderInfo in PENDING status with every line linked to its
            ORDER transaction.
        """
        if not lines:
            raise EmptyOrderError()
        self._require_actor(actor_id)
        resolved = self._resolve_lines(lines)

        if order_number is None:
            order_number = self._generate_order_number()
        elif self._order_number_exists(order_number):
            raise DuplicateOrderNumberError(order_number)

        now = self._clock.now()
        with self.session.begin_nested():
            order = Order(
                order_number=order_number,
                status=TransactionStatus.PENDING.value,
                description=description,
                created_at=now,
                updated_at=now,
                created_by_id=actor_id,
            )
            self.session.add(order)
            self.session.flush()

            with LogContext.bind(order_id=str(order.id)):
                for resolved_line in resolved:
                    line = OrderLine(
                        item_id=resolved_line.item_id,
                        quantity=resolved_line.quantity,
                        line_no=resolved_line.line_no,
                        created_at=now,
                        updated_at=now,
                        created_by_id=actor_id,
                    )
                    order.lines.append(line)
                    self.session.flush()

                    transaction = self._ledger.create_transaction(
                        TransactionType.ORDER,
                        item_id=resolved_line.item_id,
                        location_id=resolved_line.location_id,
                        quantity=resolved_line.quantity,
                        actor_id=actor_id,
                        description=f"Order #{order_number}",
                        status=TransactionStatus.PENDING,
                    )
                    line.transaction_id = transaction.id

                self.session.add(
                    OrderStatusHistory(
                        order_id=order.id,
                        sequence=1,
                        old_status=TransactionStatus.PENDING.value,
                        new_status=TransactionStatus.PENDING.value,
                        reason=self._creation_reason,
                        created_at=now,
                        updated_at=now,
                        created_by_id=actor_id,
                    )
                )
                self.session.flush()

        logger.info(
            "order_created",
            extra={
                "order_id": str(order.id),
                "order_number": order_number,
                "line_count": len(resolved),
                "total_quantity": sum(line.quantity for line in resolved),
                "actor_id": str(actor_id),
            },
        )
        return OrderInfo.from_model(order)

    def update_order_status(
        self,
        order_id: UUID,
        new_status: TransactionStatus | str,
        reason: str | None,
        actor_id: UUID,
    ) -> OrderInfo:
        """
        Set the order's status and append a history row.

        reason defaults to "Status changed to <NEW>".
        """
        order = self._get_order(order_id)
        status = parse_status(new_status)
        self._require_actor(actor_id)

        old_status = TransactionStatus(order.status)
        now = self._clock.now()
        order.status = status.value
        order.updated_by_id = actor_id
        self.session.add(
            OrderStatusHistory(
                order_id=order.id,
                sequence=self._next_history_sequence(order.id),
                old_status=old_status.value,
                new_status=status.value,
                reason=reason if reason is not None else f"Status changed to {status.value}",
                created_at=now,
                updated_at=now,
                created_by_id=actor_id,
            )
        )
        self.session.flush()

        logger.info(
            "order_status_updated",
            extra={
                "order_id": str(order_id),
                "old_status": old_status.value,
                "new_status": status.value,
                "actor_id": str(actor_id),
            },
        )
        return OrderInfo.from_model(order)

    def get_order(self, order_id: UUID) -> OrderInfo:
        return OrderInfo.from_model(self._get_order(order_id))

    def get_order_status_history(self, order_id: UUID) -> list[OrderStatusHistoryInfo]:
        """History of the order, most recent first."""
        self._get_order(order_id)
        return self._orders.status_history(order_id)

    def delete_order(self, order_id: UUID, actor_id: UUID) -> None:
        """
        Delete the order with its lines and history.

        The ORDER transactions stay in the ledger and item quantities are
        not restored.
        """
        self._require_actor(actor_id)
        order = self._get_order(order_id)
        order_number = order.order_number

        self.session.delete(order)
        self.session.flush()

        logger.info(
            "order_deleted",
            extra={
                "order_id": str(order_id),
                "order_number": order_number,
                "actor_id": str(actor_id),
            },
        )

    def _get_order(self, order_id: UUID) -> Order:
        order = self.session.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(str(order_id))
        return order

    def _resolve_lines(
        self, lines: Iterable[OrderLineRequest | tuple[UUID, int]]
    ) -> list[_ResolvedLine]:
        """Validate every line and pick its location before anything is written."""
        resolved = []
        for line_no, raw in enumerate(lines, start=1):
            if isinstance(raw, OrderLineRequest):
                item_id, quantity = raw.item_id, raw.quantity
            else:
                item_id, quantity = raw
            require_positive_quantity(quantity, field=f"lines[{line_no}].quantity")
            if item_id is None:
                raise ValidationError(f"lines[{line_no}].item_id", "is required")

            item = self.session.get(Item, item_id)
            if item is None:
                raise ItemNotFoundError(str(item_id))

            locations = self._locations.locations_for_item(item_id)
            if not locations:
                raise ItemHasNoLocationError(str(item_id), item.name)

            resolved.append(
                _ResolvedLine(
                    line_no=line_no,
                    item_id=item_id,
                    quantity=quantity,
                    location_id=locations[0].id,
                )
            )
        return resolved

    def _next_history_sequence(self, order_id: UUID) -> int:
        last = self.session.execute(
            select(func.max(OrderStatusHistory.sequence)).where(
                OrderStatusHistory.order_id == order_id
            )
        ).scalar_one()
        return (last or 0) + 1

    def _order_number_exists(self, order_number: str) -> bool:
        return (
            self.session.execute(
                select(Order.id).where(Order.order_number == order_number)
            ).first()
            is not None
        )

    def _generate_order_number(self) -> str:
        stamp = self._clock.now().strftime("%Y%m%d%H%M%S")
        return f"{self._order_number_prefix}-{stamp}-{uuid4().hex[:6].upper()}"
