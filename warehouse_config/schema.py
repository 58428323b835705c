"""
Configuration schema (``warehouse_config.schema``).

Frozen dataclasses describing one parsed settings file.  Nothing here reads
files or the environment; see ``loader.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings handed to ``init_engine_from_url``."""

    url: str
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class OrderSettings:
    """Order numbering and the reason recorded on an order's first history row."""

    number_prefix: str = "ORD"
    creation_reason: str = "created"


@dataclass(frozen=True)
class WarehouseConfig:
    """Root of a parsed settings file."""

    name: str
    database: DatabaseSettings
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    orders: OrderSettings = field(default_factory=OrderSettings)
