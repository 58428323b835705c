"""
Kernel Invariants Contract.

These invariants are structural law. No configuration may switch them off.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across TransactionLedger,
LocationCapacityService, OrderService, and the ORM listeners in
warehouse_kernel.db.immutability.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    NON_NEGATIVE_STOCK = "non_negative_stock"
    """Item.current_quantity is never negative. Debits larger than the
    current quantity are rejected by TransactionLedger."""

    LEDGER_ONLY_MUTATION = "ledger_only_mutation"
    """Item.current_quantity changes only through
    TransactionLedger.create_transaction, so it always equals the signed
    sum of the item's ledger rows (floored at zero)."""

    LEDGER_APPEND_ONLY = "ledger_append_only"
    """Transaction rows are never edited except for their status and are
    never deleted individually. Enforced by db.immutability."""

    UNIQUE_ASSIGNMENT = "unique_assignment"
    """An item is assigned to a location at most once. Enforced by
    LocationCapacityService and a unique constraint."""

    CAPACITY_BOUND = "capacity_bound"
    """A location accepts a new item only while occupancy + 1 <= max
    threshold. Enforced by LocationCapacityService."""

    ORDER_ATOMICITY = "order_atomicity"
    """An order and all of its lines, ledger transactions and initial
    history row are created together or not at all."""

    STATUS_HISTORY_APPEND_ONLY = "status_history_append_only"
    """Order status history rows are never edited and are deleted only
    together with their order."""


ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = ("warehouse_config",)
