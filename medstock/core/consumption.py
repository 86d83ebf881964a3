"""Consumption analytics for a single medicine ledger.

Every function here is pure over its inputs: the evaluation instant is passed
in as ``now`` and only defaults to the wall clock when omitted. Calendar days
are taken in the zone of ``now`` (the system zone when ``now`` is naive).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from medstock.core.constants import (
    CONSUMPTION_WINDOW_DAYS,
    MOVING_AVERAGE_WEEKS,
    REORDER_SUPPLY_DAYS,
    REORDER_THRESHOLD_DAYS,
    WEEKLY_TREND_MONTHS,
    WEEKLY_TREND_WEEKS,
    WEEKS_IN_WINDOW,
)
from medstock.core.dates import (
    day_range,
    resolve_now,
    start_of_day,
    subtract_months,
    to_local,
    week_start,
)
from medstock.core.ledger import Medicine, TransactionType


@dataclass(frozen=True)
class DailyConsumption:
    date: date
    dispensed: int


@dataclass(frozen=True)
class ReorderSuggestion:
    should_reorder: bool
    suggested_quantity: Optional[int]


@dataclass(frozen=True)
class ConsumptionData:
    chart_data: list[DailyConsumption]
    average_weekly_consumption: float
    depletion_date: Optional[datetime]
    days_until_depletion: Optional[float]
    reorder_suggestion: ReorderSuggestion


@dataclass(frozen=True)
class WeeklyConsumption:
    week_start: date
    dispensed: int
    moving_average: float


def _out_movements(medicine: Medicine, tz):
    for transaction in medicine.transactions:
        if transaction.kind is not TransactionType.OUT:
            continue
        yield to_local(transaction.timestamp, tz), transaction.quantity


def forecast_depletion(current_stock, average_weekly_consumption, now):
    if current_stock <= 0 or average_weekly_consumption <= 0:
        return None, None
    daily_rate = average_weekly_consumption / 7
    days_until_depletion = current_stock / daily_rate
    return now + timedelta(days=days_until_depletion), days_until_depletion


def suggest_reorder(current_stock, average_weekly_consumption, days_until_depletion) -> ReorderSuggestion:
    should_reorder = current_stock == 0 or (
        days_until_depletion is not None and days_until_depletion <= REORDER_THRESHOLD_DAYS
    )
    suggested_quantity = None
    if should_reorder and average_weekly_consumption > 0:
        supply = (average_weekly_consumption / 7) * REORDER_SUPPLY_DAYS
        # drop float noise before ceil
        suggested_quantity = math.ceil(round(supply, 9))
    return ReorderSuggestion(should_reorder=should_reorder, suggested_quantity=suggested_quantity)


def calculate_consumption_data(medicine: Medicine, now: datetime | None = None) -> ConsumptionData:
    now = resolve_now(now)
    tz = now.tzinfo
    today = to_local(now, tz).date()

    daily = {day: 0 for day in day_range(today, CONSUMPTION_WINDOW_DAYS)}
    window_start = start_of_day(today - timedelta(days=CONSUMPTION_WINDOW_DAYS))

    total_consumption = 0
    for timestamp, quantity in _out_movements(medicine, tz):
        if timestamp < window_start:
            continue
        key = timestamp.date()
        if key in daily:
            daily[key] += quantity
        total_consumption += quantity

    average_weekly = total_consumption / WEEKS_IN_WINDOW if total_consumption > 0 else 0.0
    depletion_date, days_until_depletion = forecast_depletion(
        medicine.current_stock, average_weekly, now
    )

    return ConsumptionData(
        chart_data=[DailyConsumption(date=day, dispensed=qty) for day, qty in daily.items()],
        average_weekly_consumption=average_weekly,
        depletion_date=depletion_date,
        days_until_depletion=days_until_depletion,
        reorder_suggestion=suggest_reorder(
            medicine.current_stock, average_weekly, days_until_depletion
        ),
    )


def _round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_weekly_trend(medicine: Medicine, now: datetime | None = None) -> list[WeeklyConsumption]:
    now = resolve_now(now)
    tz = now.tzinfo
    local_now = to_local(now, tz)
    today = local_now.date()

    weekly = {}
    for offset in range(WEEKLY_TREND_WEEKS - 1, -1, -1):
        weekly[week_start(today - timedelta(days=offset * 7))] = 0

    cutoff = subtract_months(local_now, WEEKLY_TREND_MONTHS)
    for timestamp, quantity in _out_movements(medicine, tz):
        if timestamp < cutoff:
            continue
        key = week_start(timestamp.date())
        if key in weekly:
            weekly[key] += quantity

    ordered = sorted(weekly.items())
    trend = []
    for index, (start, dispensed) in enumerate(ordered):
        window = ordered[max(0, index - MOVING_AVERAGE_WEEKS + 1): index + 1]
        average = sum(qty for _, qty in window) / len(window)
        trend.append(
            WeeklyConsumption(
                week_start=start,
                dispensed=dispensed,
                moving_average=_round_half_up(average),
            )
        )
    return trend


__all__ = [
    "ConsumptionData",
    "DailyConsumption",
    "ReorderSuggestion",
    "WeeklyConsumption",
    "calculate_consumption_data",
    "calculate_weekly_trend",
    "forecast_depletion",
    "suggest_reorder",
]
