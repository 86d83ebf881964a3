from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DailyConsumptionRead(BaseModel):
    date: date
    dispensed: int

    model_config = ConfigDict(from_attributes=True)


class ReorderSuggestionRead(BaseModel):
    should_reorder: bool
    suggested_quantity: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ConsumptionRead(BaseModel):
    chart_data: List[DailyConsumptionRead]
    average_weekly_consumption: float
    depletion_date: Optional[datetime] = None
    days_until_depletion: Optional[float] = None
    reorder_suggestion: ReorderSuggestionRead

    model_config = ConfigDict(from_attributes=True)


class WeeklyConsumptionRead(BaseModel):
    week_start: date
    dispensed: int
    moving_average: float

    model_config = ConfigDict(from_attributes=True)


class DashboardItem(BaseModel):
    id: str
    name: str
    description: str
    current_stock: int
    low_stock_threshold: int
    order_pending: bool
    status: str
    consumption: ConsumptionRead


class LowStockAlertRead(BaseModel):
    medicine_id: str
    medicine_name: str
    current_stock: int
    low_stock_threshold: int
    status: str
    order_pending: bool
    should_reorder: bool
    suggested_quantity: Optional[int] = None
