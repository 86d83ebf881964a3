from medstock.services.alert_service import run_low_stock_alerts
from medstock.services.dashboard_service import medicine_overview
from medstock.services.ledger_service import (
    create_medicine,
    delete_medicine,
    get_medicine,
    list_medicines,
    place_reorder,
    record_transaction,
)
from medstock.services.report_service import build_period_report
from medstock.services.sample_data import seed_sample_data

__all__ = [
    "build_period_report",
    "create_medicine",
    "delete_medicine",
    "get_medicine",
    "list_medicines",
    "medicine_overview",
    "place_reorder",
    "record_transaction",
    "run_low_stock_alerts",
    "seed_sample_data",
]
