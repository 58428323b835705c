"""
Stock arithmetic and input coercion for the ledger.

Pure functions, no I/O.  TransactionLedger and the order workflow call these
so that the sign convention and the status/type vocabularies are decided in
exactly one place.
"""

from warehouse_kernel.exceptions import (
    InvalidStatusError,
    InvalidTransactionTypeError,
    ValidationError,
)
from warehouse_kernel.models.transaction import (
    DEBIT_TYPES,
    TransactionStatus,
    TransactionType,
)


def parse_transaction_type(value: TransactionType | str | None) -> TransactionType:
    """Coerce a caller-supplied type (enum or name, any case)."""
    if value is None:
        raise ValidationError("transaction_type", "is required")
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().upper())
    except ValueError:
        raise InvalidTransactionTypeError(str(value)) from None


def parse_status(value: TransactionStatus | str | None) -> TransactionStatus:
    """Coerce a caller-supplied status (enum or name, any case)."""
    if value is None:
        raise InvalidStatusError("None")
    if isinstance(value, TransactionStatus):
        return value
    try:
        return TransactionStatus(str(value).strip().upper())
    except ValueError:
        raise InvalidStatusError(str(value)) from None


def require_positive_quantity(quantity, field: str = "quantity") -> int:
    """Quantity must be present and a positive integer (bools rejected)."""
    if quantity is None:
        raise ValidationError(field, "is required")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(field, f"must be an integer, got {quantity!r}")
    if quantity <= 0:
        raise ValidationError(field, f"must be positive, got {quantity}")
    return quantity


def is_debit(transaction_type: TransactionType) -> bool:
    return transaction_type in DEBIT_TYPES


def quantity_delta(transaction_type: TransactionType, quantity: int) -> int:
    """Signed change a transaction applies to an item's quantity."""
    if is_debit(transaction_type):
        return -quantity
    return quantity


def apply_delta(current_quantity: int, delta: int) -> int:
    """New quantity after delta, clamped at zero."""
    return max(0, current_quantity + delta)


def occupancy_percentage(occupancy: int, max_capacity: int) -> float:
    """Occupancy as a percentage of max capacity; 0 when no max is set."""
    if max_capacity <= 0:
        return 0.0
    return occupancy * 100.0 / max_capacity
