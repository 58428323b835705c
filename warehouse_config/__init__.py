"""
warehouse_config -- single public entrypoint for warehouse settings.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads settings files or
    environment variables directly.

Architecture position:
    Configuration sits above ``warehouse_kernel``.  The kernel MUST NEVER
    import from ``warehouse_config``; ``warehouse_config.bridges`` turns a
    loaded config into kernel inputs (engine, logging, wired services).

Failure modes:
    - ``FileNotFoundError`` -- the settings file does not exist.
    - ``KeyError`` / ``ValueError`` -- missing or invalid settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from warehouse_config.loader import load_config
from warehouse_config.schema import (
    DatabaseSettings,
    LoggingSettings,
    OrderSettings,
    WarehouseConfig,
)

_logger = logging.getLogger("warehouse_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> WarehouseConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: Settings file; the bundled ``settings/default.yaml`` when omitted.

    Returns:
        Parsed, frozen WarehouseConfig.
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    config = load_config(settings_path)
    _logger.info(
        "WAREHOUSE_CONFIG_TRACE",
        extra={
            "config_name": config.name,
            "settings_path": str(settings_path),
            "order_number_prefix": config.orders.number_prefix,
        },
    )
    return config


__all__ = [
    "get_active_config",
    "DatabaseSettings",
    "LoggingSettings",
    "OrderSettings",
    "WarehouseConfig",
]
