"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every service in the kernel layer.  Concrete services receive a
    SQLAlchemy ``Session`` and use ``session.flush()`` -- never
    ``session.commit()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.
    Every service in ``warehouse_kernel/services/`` that performs write
    operations extends this class.

Invariants enforced:
    Transaction boundaries: services flush within the caller's transaction
    and never commit themselves.  A service that must be atomic on its own
    (one ledger entry, one whole order) wraps its writes in a SAVEPOINT
    (``session.begin_nested()``) so a failure undoes only its own work.

Failure modes:
    - If a subclass calls ``session.commit()``, the all-or-nothing guarantee
      of order creation is broken.
"""

from abc import ABC
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.orm import Session

from warehouse_kernel.db.base import Base
from warehouse_kernel.domain.clock import Clock, SystemClock
from warehouse_kernel.exceptions import ValidationError

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Contract:
        Accepts a SQLAlchemy ``Session`` from the caller and uses
        ``session.flush()`` to persist changes within the active
        transaction.  Timestamps come from the injected ``Clock``.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide query-only (read) methods -- those belong
          in ``warehouse_kernel/selectors/``.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        """
        Initialize the service.

        Args:
            session: SQLAlchemy session for database operations.
            clock: Time source for created_at; defaults to SystemClock.
        """
        self.session = session
        self._clock = clock or SystemClock()

    @staticmethod
    def _require_actor(actor_id: UUID | None) -> UUID:
        """Every write is attributed to an explicit acting user."""
        if actor_id is None:
            raise ValidationError("actor_id", "is required")
        return actor_id
