"""
Config -> Kernel Bridges.

Functions that turn a WarehouseConfig into kernel inputs.  They live in
warehouse_config (the producer) because the kernel must NEVER import
warehouse_config.

Usage:
    from warehouse_config import get_active_config
    from warehouse_config.bridges import build_services, init_kernel

    config = get_active_config()
    init_kernel(config)
    with session_scope() as session:
        services = build_services(session, config)
        services.orders.create_order(lines, actor_id)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from warehouse_config.schema import WarehouseConfig
from warehouse_kernel.db.engine import init_engine_from_url
from warehouse_kernel.db.immutability import register_immutability_listeners
from warehouse_kernel.domain.clock import Clock, SystemClock
from warehouse_kernel.logging_config import configure_logging
from warehouse_kernel.selectors.location_selector import LocationSelector
from warehouse_kernel.selectors.order_selector import OrderSelector
from warehouse_kernel.selectors.transaction_selector import TransactionSelector
from warehouse_kernel.services.item_service import ItemService
from warehouse_kernel.services.location_capacity_service import (
    LocationCapacityService,
)
from warehouse_kernel.services.location_service import LocationService
from warehouse_kernel.services.order_service import OrderService
from warehouse_kernel.services.transaction_ledger import TransactionLedger


@dataclass(frozen=True)
class KernelServices:
    """Services and selectors sharing one session, clock and ledger."""

    ledger: TransactionLedger
    capacity: LocationCapacityService
    orders: OrderService
    items: ItemService
    locations: LocationService
    transaction_selector: TransactionSelector
    location_selector: LocationSelector
    order_selector: OrderSelector


def init_kernel(config: WarehouseConfig) -> Engine:
    """Configure logging, create the engine, and arm the append-only listeners."""
    configure_logging(level=config.logging.level)
    db = config.database
    engine = init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
    )
    register_immutability_listeners()
    return engine


def build_services(
    session: Session,
    config: WarehouseConfig,
    clock: Clock | None = None,
) -> KernelServices:
    """Wire every service onto one session so they share the ledger."""
    clock = clock or SystemClock()
    ledger = TransactionLedger(session, clock)
    return KernelServices(
        ledger=ledger,
        capacity=LocationCapacityService(session, ledger=ledger, clock=clock),
        orders=OrderService(
            session,
            ledger=ledger,
            clock=clock,
            order_number_prefix=config.orders.number_prefix,
            creation_reason=config.orders.creation_reason,
        ),
        items=ItemService(session, clock),
        locations=LocationService(session, clock),
        transaction_selector=TransactionSelector(session),
        location_selector=LocationSelector(session),
        order_selector=OrderSelector(session),
    )
