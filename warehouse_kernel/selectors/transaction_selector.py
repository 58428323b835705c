"""
Module: warehouse_kernel.selectors.transaction_selector
Responsibility: Read-only queries over the stock ledger.
Architecture position: Kernel > Selectors.

Every listing is ordered most recent first (created_at descending), with the
id as a stable tie-break.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.dtos import Page, TransactionInfo
from warehouse_kernel.domain.stock import parse_transaction_type
from warehouse_kernel.models.transaction import Transaction, TransactionType
from warehouse_kernel.selectors.base import BaseSelector

# Types that take stock out of the warehouse, in reporting order.
ISSUE_TYPES: tuple[TransactionType, ...] = (
    TransactionType.ISSUE_TO_PRODUCTION,
    TransactionType.ISSUE_TO_SALES,
    TransactionType.ORDER,
)


class TransactionSelector(BaseSelector[Transaction]):
    """Selector for ledger transaction queries."""

    def __init__(self, session: Session):
        super().__init__(session)

    @staticmethod
    def _newest_first(stmt: Select) -> Select:
        return stmt.order_by(Transaction.created_at.desc(), Transaction.id)

    def _list(self, stmt: Select) -> list[TransactionInfo]:
        rows = self.session.execute(self._newest_first(stmt)).scalars().all()
        return [TransactionInfo.from_model(t) for t in rows]

    def get(self, transaction_id: UUID) -> TransactionInfo | None:
        transaction = self.session.get(Transaction, transaction_id)
        if transaction is None:
            return None
        return TransactionInfo.from_model(transaction)

    def by_item(self, item_id: UUID) -> list[TransactionInfo]:
        return self._list(select(Transaction).where(Transaction.item_id == item_id))

    def by_user(self, user_id: UUID) -> list[TransactionInfo]:
        return self._list(select(Transaction).where(Transaction.user_id == user_id))

    def by_location(self, location_id: UUID) -> list[TransactionInfo]:
        return self._list(
            select(Transaction).where(Transaction.location_id == location_id)
        )

    def by_type(self, transaction_type: TransactionType | str) -> list[TransactionInfo]:
        txn_type = parse_transaction_type(transaction_type)
        return self._list(
            select(Transaction).where(Transaction.transaction_type == txn_type.value)
        )

    def by_date_range(self, start: datetime, end: datetime) -> list[TransactionInfo]:
        """Transactions with start <= created_at <= end."""
        return self._list(
            select(Transaction).where(
                Transaction.created_at >= start,
                Transaction.created_at <= end,
            )
        )

    def issue_transactions(self) -> list[TransactionInfo]:
        """All transactions that removed stock (issues and orders)."""
        return self._list(
            select(Transaction).where(
                Transaction.transaction_type.in_([t.value for t in ISSUE_TYPES])
            )
        )

    def list_transactions(self, page: int = 0, size: int = 20) -> Page[TransactionInfo]:
        """
        One page of the whole ledger, most recent first.

        Args:
            page: Zero-based page index.
            size: Page size (> 0).
        """
        self._check_page(page, size)
        stmt = select(Transaction)
        total = self._count(stmt)
        rows = self.session.execute(
            self._newest_first(stmt).limit(size).offset(page * size)
        ).scalars().all()
        return Page(
            items=tuple(TransactionInfo.from_model(t) for t in rows),
            total=total,
            page=page,
            size=size,
        )
