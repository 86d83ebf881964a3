from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medstock.dependencies import get_db, get_now
from medstock.schemas.analytics import LowStockAlertRead
from medstock.services.alert_service import run_low_stock_alerts

router = APIRouter(prefix="/alerts", tags=["Alerts"])


@router.get("/low-stock", response_model=List[LowStockAlertRead])
def low_stock(db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    return run_low_stock_alerts(db, now=now)


__all__ = ["router"]
