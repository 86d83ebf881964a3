from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict


class PeriodSummaryRead(BaseModel):
    medicine_id: str
    medicine_name: str
    starting_stock: int
    total_in: int
    total_out: int
    ending_stock: int

    model_config = ConfigDict(from_attributes=True)


class PeriodReportRead(BaseModel):
    start_date: date
    end_date: date
    results: List[PeriodSummaryRead]
