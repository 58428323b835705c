"""
ORM-level append-only enforcement for the ledger and the order audit trail.

SQLAlchemy fires events before UPDATE/DELETE operations reach the database.
We register listeners that intercept these events and check our invariants:

    session.flush()
         |
         v
    [before_flush]  --> _check_append_only_deletions() --> ImmutabilityViolationError
         |
         v
    [before_update] --> _check_*_immutability() ---------> ImmutabilityViolationError
         |
         v
    SQL sent to database (only if checks pass)

Entity              | Rule
--------------------|-----------------------------------------------------------
Transaction         | Only status may change.  Deleted only with its Item.
OrderStatusHistory  | Never changes.  Deleted only with its Order.

updated_at / updated_by_id are audit metadata and may always change.

Usage:

    from warehouse_kernel.db.immutability import register_immutability_listeners
    register_immutability_listeners()  # Called once at startup
"""

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from warehouse_kernel.exceptions import ImmutabilityViolationError
from warehouse_kernel.logging_config import get_logger

logger = get_logger("db.immutability")

AUDIT_METADATA_FIELDS = frozenset({"updated_at", "updated_by_id"})

TRANSACTION_MUTABLE_FIELDS = AUDIT_METADATA_FIELDS | {"status"}


def _changed_fields(target, allowed: frozenset[str]) -> list[str]:
    """Column attributes that changed on target, excluding allowed ones."""
    insp = inspect(target)
    changed = []
    for attr in insp.mapper.column_attrs:
        if attr.key in allowed:
            continue
        if insp.attrs[attr.key].history.has_changes():
            changed.append(attr.key)
    return changed


def _block(entity_type: str, entity_id, operation: str, reason: str) -> None:
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": entity_type,
            "entity_id": str(entity_id),
            "operation": operation,
        },
    )
    raise ImmutabilityViolationError(
        entity_type=entity_type,
        entity_id=str(entity_id),
        reason=reason,
    )


def _check_transaction_immutability(mapper, connection, target):
    """Only the status of a ledger transaction may change after INSERT."""
    changed = _changed_fields(target, TRANSACTION_MUTABLE_FIELDS)
    if changed:
        _block(
            "Transaction",
            target.id,
            "UPDATE",
            f"ledger transactions are append-only; cannot modify {', '.join(changed)}",
        )


def _check_status_history_immutability(mapper, connection, target):
    """Status history rows never change."""
    changed = _changed_fields(target, AUDIT_METADATA_FIELDS)
    if changed:
        _block(
            "OrderStatusHistory",
            target.id,
            "UPDATE",
            "order status history is append-only",
        )


def _check_append_only_deletions(session, flush_context, instances):
    """
    Allow ledger and history deletions only as part of their parent's cascade.

    Runs in SessionEvents.before_flush, where session.deleted already holds
    the parent and every row its delete cascade reached.
    """
    from warehouse_kernel.models.item import Item
    from warehouse_kernel.models.order import Order, OrderStatusHistory
    from warehouse_kernel.models.transaction import Transaction

    deleted = list(session.deleted)
    deleted_item_ids = {obj.id for obj in deleted if isinstance(obj, Item)}
    deleted_order_ids = {obj.id for obj in deleted if isinstance(obj, Order)}

    for obj in deleted:
        if isinstance(obj, Transaction) and obj.item_id not in deleted_item_ids:
            _block(
                "Transaction",
                obj.id,
                "DELETE",
                "ledger transactions cannot be deleted individually",
            )
        if isinstance(obj, OrderStatusHistory) and obj.order_id not in deleted_order_ids:
            _block(
                "OrderStatusHistory",
                obj.id,
                "DELETE",
                "status history is deleted only together with its order",
            )


def register_immutability_listeners():
    """
    Register all append-only enforcement event listeners.

    Call this after all models are imported but before any database
    operations begin.  Idempotent.
    """
    from warehouse_kernel.models.order import OrderStatusHistory
    from warehouse_kernel.models.transaction import Transaction

    listeners = (
        (Session, "before_flush", _check_append_only_deletions),
        (Transaction, "before_update", _check_transaction_immutability),
        (OrderStatusHistory, "before_update", _check_status_history_immutability),
    )
    for target, event_name, listener_fn in listeners:
        if not event.contains(target, event_name, listener_fn):
            event.listen(target, event_name, listener_fn)


def _safe_remove_listener(target, event_name, listener_fn):
    """Remove an event listener, ignoring it if it was never registered."""
    if event.contains(target, event_name, listener_fn):
        event.remove(target, event_name, listener_fn)


def unregister_immutability_listeners():
    """
    Remove append-only enforcement event listeners.

    WARNING: Only use this in tests where you need to intentionally
    violate immutability rules to verify detection.
    """
    from warehouse_kernel.models.order import OrderStatusHistory
    from warehouse_kernel.models.transaction import Transaction

    _safe_remove_listener(Session, "before_flush", _check_append_only_deletions)
    _safe_remove_listener(Transaction, "before_update", _check_transaction_immutability)
    _safe_remove_listener(
        OrderStatusHistory, "before_update", _check_status_history_immutability
    )
