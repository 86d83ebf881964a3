from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from medstock.dependencies import get_db, get_now
from medstock.schemas.report import PeriodReportRead, PeriodSummaryRead
from medstock.services.report_service import (
    build_period_report,
    export_csv,
    export_filename,
    export_xlsx,
    narration_payload,
)

router = APIRouter(prefix="/reports", tags=["Reports"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _summaries(db, start_date, end_date, now):
    try:
        return build_period_report(db, start_date, end_date, tz=now.tzinfo)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _attachment(filename):
    return {"Content-Disposition": 'attachment; filename="{}"'.format(filename)}


@router.get("/summary", response_model=PeriodReportRead)
def period_summary(
    start_date: date = Query(..., description="First day of the period (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Last day of the period (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    summaries = _summaries(db, start_date, end_date, now)
    return PeriodReportRead(
        start_date=start_date,
        end_date=end_date,
        results=[PeriodSummaryRead.model_validate(summary) for summary in summaries],
    )


@router.get("/summary.csv")
def period_summary_csv(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    summaries = _summaries(db, start_date, end_date, now)
    return Response(
        content=export_csv(summaries),
        media_type="text/csv",
        headers=_attachment(export_filename(start_date, end_date, "csv")),
    )


@router.get("/summary.xlsx")
def period_summary_xlsx(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    summaries = _summaries(db, start_date, end_date, now)
    return Response(
        content=export_xlsx(summaries, start_date, end_date),
        media_type=_XLSX_MEDIA_TYPE,
        headers=_attachment(export_filename(start_date, end_date, "xlsx")),
    )


@router.get("/narration-input", response_class=PlainTextResponse)
def narration_input(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    summaries = _summaries(db, start_date, end_date, now)
    return PlainTextResponse(narration_payload(summaries), media_type="application/json")


__all__ = ["router"]
