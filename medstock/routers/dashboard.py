from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from medstock.dependencies import get_db, get_now
from medstock.schemas.analytics import ConsumptionRead, DashboardItem
from medstock.services.dashboard_service import medicine_overview
from medstock.services.ledger_service import list_medicines

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=List[DashboardItem])
def dashboard(
    status: str | None = Query(None, description="all, low or out"),
    query: str | None = Query(None, description="Medicine name search"),
    sort: str | None = Query(None, description="name-asc, stock-desc, stock-asc or depletion-asc"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    try:
        overview = medicine_overview(
            list_medicines(db),
            status_filter=status,
            search=query,
            sort=sort,
            now=now,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    results = []
    for item in overview:
        medicine = item["medicine"]
        results.append(
            DashboardItem(
                id=medicine.id,
                name=medicine.name,
                description=medicine.description,
                current_stock=medicine.current_stock,
                low_stock_threshold=medicine.low_stock_threshold,
                order_pending=medicine.order_pending,
                status=item["status"],
                consumption=ConsumptionRead.model_validate(item["consumption"]),
            )
        )
    return results


__all__ = ["router"]
