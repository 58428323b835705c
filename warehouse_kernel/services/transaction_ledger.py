"""
TransactionLedger -- the single write path for item quantities.

Responsibility:
    Records stock-affecting events as append-only Transaction rows and keeps
    ``Item.current_quantity`` equal to the signed sum of those rows.  Every
    other component that moves stock (capacity engine, order workflow) goes
    through ``create_transaction``.

Architecture position:
    Kernel > Services -- imperative shell.
    Uses domain/stock.py for the sign convention and input coercion.

Invariants enforced:
    - current_quantity == sum(credits) - sum(debits), floored at zero.
    - A debit larger than the available quantity is refused before anything
      is written.
    - The Transaction row and the quantity update are flushed inside one
      SAVEPOINT: both land or neither does.
    - Lost updates are prevented by ``SELECT ... FOR UPDATE`` on the item
      row plus the optimistic ``Item.version`` column.

Failure modes:
    - ValidationError: missing/non-positive quantity, missing ids, unknown type.
    - ItemNotFoundError / LocationNotFoundError: ids do not resolve.
    - InsufficientQuantityError: debit exceeds current_quantity.
    - OptimisticLockError: the item row changed underneath us.  Not retried.

Audit relevance:
    Every entry records the acting user and the injected clock's time.
    Entries are never edited except for their status.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.dtos import TransactionInfo
from warehouse_kernel.domain.stock import (
    apply_delta,
    is_debit,
    parse_status,
    parse_transaction_type,
    quantity_delta,
    require_positive_quantity,
)
from warehouse_kernel.exceptions import (
    InsufficientQuantityError,
    ItemNotFoundError,
    LocationNotFoundError,
    OptimisticLockError,
    TransactionNotFoundError,
    ValidationError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.models.item import Item
from warehouse_kernel.models.location import Location
from warehouse_kernel.models.transaction import (
    Transaction,
    TransactionStatus,
    TransactionType,
)
from warehouse_kernel.services.base import BaseService

logger = get_logger("services.transaction_ledger")


class TransactionLedger(BaseService[Transaction]):
    """
    Append-only stock ledger.

    Contract:
        ``create_transaction`` validates, locks the item, checks stock, then
        writes the entry and the new quantity in one savepoint.  The caller
        owns the surrounding transaction and its commit.

    Non-goals:
        - Does NOT retry on OptimisticLockError.
        - Does NOT check location capacity (LocationCapacityService does).
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session, clock)

    def create_transaction(
        self,
        transaction_type: TransactionType | str,
        item_id: UUID | None,
        location_id: UUID | None,
        quantity: int | None,
        actor_id: UUID | None,
        description: str | None = None,
        status: TransactionStatus | str | None = None,
    ) -> TransactionInfo:
        """
        Record one stock movement and apply it to the item's quantity.

        Preconditions:
            quantity is a positive int; item_id, actor_id and location_id are
            set and resolve to persisted rows.

        Postconditions:
            On success one Transaction row exists and the item's quantity has
            moved by the signed quantity.  On any failure nothing was written.

        Returns:
            TransactionInfo for the new entry.
        """
        require_positive_quantity(quantity)
        if item_id is None:
            raise ValidationError("item_id", "is required")
        self._require_actor(actor_id)
        if location_id is None:
            raise ValidationError("location_id", "is required")
        txn_type = parse_transaction_type(transaction_type)
        txn_status = parse_status(status) if status is not None else None

        item = self._lock_item(item_id)
        if self.session.get(Location, location_id) is None:
            raise LocationNotFoundError(str(location_id))

        available = item.current_quantity
        if is_debit(txn_type) and available < quantity:
            logger.warning(
                "insufficient_quantity",
                extra={
                    "item_id": str(item_id),
                    "transaction_type": txn_type.value,
                    "available": available,
                    "requested": quantity,
                },
            )
            raise InsufficientQuantityError(str(item_id), available, quantity)

        new_quantity = apply_delta(available, quantity_delta(txn_type, quantity))
        now = self._clock.now()

        transaction = Transaction(
            transaction_type=txn_type.value,
            item_id=item.id,
            location_id=location_id,
            quantity=quantity,
            user_id=actor_id,
            status=txn_status.value if txn_status is not None else None,
            description=description,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
        )

        try:
            with self.session.begin_nested():
                self.session.add(transaction)
                item.current_quantity = new_quantity
                item.updated_by_id = actor_id
                self.session.flush()
        except StaleDataError:
            logger.warning(
                "optimistic_lock_conflict",
                extra={"entity_type": "Item", "entity_id": str(item_id)},
            )
            raise OptimisticLockError("Item", str(item_id)) from None

        logger.info(
            "transaction_created",
            extra={
                "transaction_id": str(transaction.id),
                "transaction_type": txn_type.value,
                "item_id": str(item.id),
                "location_id": str(location_id),
                "quantity": quantity,
                "previous_quantity": available,
                "new_quantity": new_quantity,
                "actor_id": str(actor_id),
            },
        )
        return TransactionInfo.from_model(transaction)

    def update_transaction_status(
        self,
        transaction_id: UUID,
        new_status: TransactionStatus | str,
        actor_id: UUID | None = None,
    ) -> TransactionInfo:
        """
        Move a transaction to another status.  Quantities are untouched.

        Raises:
            TransactionNotFoundError: No transaction with that id.
            InvalidStatusError: new_status is not a TransactionStatus.
        """
        transaction = self.session.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(str(transaction_id))
        status = parse_status(new_status)

        old_status = transaction.status
        transaction.status = status.value
        if actor_id is not None:
            transaction.updated_by_id = actor_id
        self.session.flush()

        logger.info(
            "transaction_status_updated",
            extra={
                "transaction_id": str(transaction_id),
                "old_status": old_status,
                "new_status": status.value,
            },
        )
        return TransactionInfo.from_model(transaction)

    def get_transaction(self, transaction_id: UUID) -> TransactionInfo:
        transaction = self.session.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(str(transaction_id))
        return TransactionInfo.from_model(transaction)

    def _lock_item(self, item_id: UUID) -> Item:
        """Load the item row fresh from the database under a row lock."""
        item = self.session.execute(
            select(Item)
            .where(Item.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if item is None:
            raise ItemNotFoundError(str(item_id))
        return item
