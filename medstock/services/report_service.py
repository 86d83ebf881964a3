import csv
import io
import json
from dataclasses import asdict

from openpyxl import Workbook
from openpyxl.styles import Font
from sqlalchemy.orm import Session

from medstock.config import get_settings
from medstock.core.dates import normalize_date
from medstock.core.period import PeriodSummary, calculate_period_summary
from medstock.services.ledger_service import list_medicines

REPORT_HEADERS = ("Medicine", "Starting Stock", "Total In", "Total Out", "Ending Stock")


def _summary_row(summary: PeriodSummary):
    return (
        summary.medicine_name,
        summary.starting_stock,
        summary.total_in,
        summary.total_out,
        summary.ending_stock,
    )


def validate_period(start_date, end_date):
    start_value = normalize_date(start_date)
    end_value = normalize_date(end_date)
    if start_value is None:
        raise ValueError("start_date must be a date (YYYY-MM-DD)")
    if end_value is None:
        raise ValueError("end_date must be a date (YYYY-MM-DD)")
    if start_value > end_value:
        raise ValueError("start_date must be on or before end_date")
    return start_value, end_value


def build_period_report(db: Session, start_date, end_date, tz=None) -> list[PeriodSummary]:
    start_value, end_value = validate_period(start_date, end_date)
    return calculate_period_summary(list_medicines(db), start_value, end_value, tz=tz)


def export_filename(start_date, end_date, extension):
    prefix = get_settings().REPORT_EXPORT_PREFIX
    return "{}_summary_{}_to_{}.{}".format(prefix, start_date, end_date, extension)


def export_csv(summaries) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(REPORT_HEADERS)
    for summary in summaries:
        writer.writerow(_summary_row(summary))
    return buffer.getvalue()


def export_xlsx(summaries, start_date, end_date) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "summary"
    worksheet.append(["Inventory Report", "{} to {}".format(start_date, end_date)])
    worksheet.append(list(REPORT_HEADERS))
    for cell in worksheet[2]:
        cell.font = Font(bold=True)
    for summary in summaries:
        worksheet.append(list(_summary_row(summary)))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def narration_payload(summaries) -> str:
    """Summary figures for the narration collaborator, identifiers stripped."""
    rows = []
    for summary in summaries:
        row = asdict(summary)
        row.pop("medicine_id", None)
        rows.append(row)
    return json.dumps(rows, indent=2)
