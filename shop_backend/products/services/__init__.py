from .stock_ledger import (
    InsufficientStockError,
    ProductNotFoundError,
    StockLedgerError,
    StockLine,
    check_availability,
    decrement_stock,
    receive_stock,
    restore_stock,
)

__all__ = [
    "StockLedgerError",
    "ProductNotFoundError",
    "InsufficientStockError",
    "StockLine",
    "check_availability",
    "decrement_stock",
    "restore_stock",
    "receive_stock",
]
