from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from medstock.core.dates import end_of_day, start_of_day, to_local
from medstock.core.ledger import Medicine, TransactionType


@dataclass(frozen=True)
class PeriodSummary:
    medicine_id: str
    medicine_name: str
    starting_stock: int
    total_in: int
    total_out: int
    ending_stock: int


def _summarize(medicine: Medicine, period_start, period_end, tz) -> PeriodSummary:
    total_in = 0
    total_out = 0
    ending_stock = medicine.current_stock

    for transaction in medicine.transactions:
        timestamp = to_local(transaction.timestamp, tz)
        is_in = transaction.kind is TransactionType.IN
        if period_start <= timestamp <= period_end:
            if is_in:
                total_in += transaction.quantity
            else:
                total_out += transaction.quantity
        elif timestamp > period_end:
            # undo movements that happened after the period closed
            ending_stock += -transaction.quantity if is_in else transaction.quantity

    return PeriodSummary(
        medicine_id=medicine.id,
        medicine_name=medicine.name,
        starting_stock=ending_stock - total_in + total_out,
        total_in=total_in,
        total_out=total_out,
        ending_stock=ending_stock,
    )


def calculate_period_summary(
    medicines: Iterable[Medicine],
    start_date,
    end_date,
    tz=None,
) -> list[PeriodSummary]:
    """Reconstruct stock movement for each medicine over a closed date range.

    ``start_date`` and ``end_date`` may be dates or datetimes; only their
    calendar day is used, so the range covers every instant of both boundary
    days. Ending stock is walked back from the current stock by undoing every
    later transaction, and starting stock follows from the period's own net
    movement. Callers are expected to pass ``start_date <= end_date``.

    ``tz`` is the zone whose calendar days bound the range (system zone when
    None); naive transaction timestamps are read as wall-clock times in it.
    """
    period_start = start_of_day(start_date)
    period_end = end_of_day(end_date)
    return [_summarize(medicine, period_start, period_end, tz) for medicine in medicines]


__all__ = ["PeriodSummary", "calculate_period_summary"]
