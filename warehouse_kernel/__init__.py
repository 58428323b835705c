"""
Warehouse Kernel

The consistency core of a warehouse stock system:
- Transaction ledger as the single path for stock changes
- Non-negative inventory
- Per-location capacity thresholds
- Multi-line orders with an append-only status history
"""

__version__ = "0.1.0"
