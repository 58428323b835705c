"""
Configuration Loader (``warehouse_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into the frozen dataclasses of
``warehouse_config.schema``.  The single public entry point for runtime
config is ``warehouse_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Bad values (unknown log level, empty prefix)  -> ``ValueError``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from warehouse_config.schema import (
    DatabaseSettings,
    LoggingSettings,
    OrderSettings,
    WarehouseConfig,
)

DATABASE_URL_ENV = "WAREHOUSE_DATABASE_URL"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_database(data: dict[str, Any]) -> DatabaseSettings:
    return DatabaseSettings(
        url=data["url"],
        echo=bool(data.get("echo", False)),
        pool_size=int(data.get("pool_size", 20)),
        max_overflow=int(data.get("max_overflow", 10)),
        pool_timeout=int(data.get("pool_timeout", 30)),
        pool_recycle=int(data.get("pool_recycle", 1800)),
    )


def parse_logging(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level!r}")
    return LoggingSettings(level=level)


def parse_orders(data: dict[str, Any]) -> OrderSettings:
    prefix = str(data.get("number_prefix", "ORD")).strip()
    if not prefix:
        raise ValueError("orders.number_prefix must not be empty")
    return OrderSettings(
        number_prefix=prefix,
        creation_reason=str(data.get("creation_reason", "created")),
    )


def parse_config(
    data: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> WarehouseConfig:
    """
    Build a WarehouseConfig from a parsed YAML dict.

    ``WAREHOUSE_DATABASE_URL`` in ``environ`` (default ``os.environ``)
    replaces ``database.url``.
    """
    environ = os.environ if environ is None else environ
    database_data = dict(data.get("database") or {})
    override = environ.get(DATABASE_URL_ENV)
    if override:
        database_data["url"] = override

    return WarehouseConfig(
        name=data.get("name", "default"),
        database=parse_database(database_data),
        logging=parse_logging(data.get("logging") or {}),
        orders=parse_orders(data.get("orders") or {}),
    )


def load_config(
    path: Path,
    environ: Mapping[str, str] | None = None,
) -> WarehouseConfig:
    return parse_config(load_yaml_file(path), environ)
