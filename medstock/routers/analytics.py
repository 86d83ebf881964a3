from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from medstock.core.consumption import calculate_consumption_data, calculate_weekly_trend
from medstock.dependencies import get_db, get_now
from medstock.schemas.analytics import ConsumptionRead, WeeklyConsumptionRead
from medstock.services.ledger_service import get_medicine

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def _load(db: Session, medicine_id: str):
    try:
        return get_medicine(db, medicine_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Medicine not found.") from exc


@router.get("/{medicine_id}/consumption", response_model=ConsumptionRead)
def consumption(
    medicine_id: str,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    medicine = _load(db, medicine_id)
    return ConsumptionRead.model_validate(calculate_consumption_data(medicine, now=now))


@router.get("/{medicine_id}/weekly-trend", response_model=List[WeeklyConsumptionRead])
def weekly_trend(
    medicine_id: str,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    medicine = _load(db, medicine_id)
    return [
        WeeklyConsumptionRead.model_validate(week)
        for week in calculate_weekly_trend(medicine, now=now)
    ]


__all__ = ["router"]
