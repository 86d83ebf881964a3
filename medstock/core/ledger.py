from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    IN = "IN"
    OUT = "OUT"


class StockSource(str, Enum):
    DOH = "DOH"  # Department of Health
    MHO = "MHO"  # Municipal Health Office
    PHILOS = "PHILOS"


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: TransactionType
    quantity: int
    timestamp: datetime
    source: Optional[StockSource] = None


@dataclass(frozen=True)
class Medicine:
    id: str
    name: str
    current_stock: int
    low_stock_threshold: int
    description: str = ""
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    order_pending: bool = False


def parse_transaction_type(value) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    key = str(value or "").strip().upper()
    try:
        return TransactionType(key)
    except ValueError:
        raise ValueError(f"Unsupported transaction type: {value}") from None


def parse_stock_source(value) -> Optional[StockSource]:
    if value is None or isinstance(value, StockSource):
        return value
    key = str(value).strip().upper()
    if not key:
        return None
    try:
        return StockSource(key)
    except ValueError:
        raise ValueError(f"Unsupported stock source: {value}") from None


__all__ = [
    "Medicine",
    "StockSource",
    "Transaction",
    "TransactionType",
    "parse_stock_source",
    "parse_transaction_type",
]
