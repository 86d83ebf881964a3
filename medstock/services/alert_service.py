import logging
from datetime import datetime

from sqlalchemy.orm import Session

from medstock.core.consumption import calculate_consumption_data
from medstock.core.dates import resolve_now
from medstock.core.stock_status import low_stock_medicines, stock_status
from medstock.services.ledger_service import list_medicines

logger = logging.getLogger(__name__)


def build_low_stock_alerts(medicines, now: datetime | None = None):
    now = resolve_now(now)
    alerts = []
    for medicine in low_stock_medicines(medicines):
        status = stock_status(medicine.current_stock, medicine.low_stock_threshold)
        suggestion = calculate_consumption_data(medicine, now=now).reorder_suggestion
        alerts.append(
            {
                "medicine_id": medicine.id,
                "medicine_name": medicine.name,
                "current_stock": medicine.current_stock,
                "low_stock_threshold": medicine.low_stock_threshold,
                "status": status,
                "order_pending": medicine.order_pending,
                "should_reorder": suggestion.should_reorder,
                "suggested_quantity": suggestion.suggested_quantity,
            }
        )
        logger.warning(
            "Low stock: %s has %s units (threshold %s, %s)",
            medicine.name,
            medicine.current_stock,
            medicine.low_stock_threshold,
            status,
            extra={"medicine_id": medicine.id},
        )
    return alerts


def run_low_stock_alerts(db: Session, now: datetime | None = None):
    return build_low_stock_alerts(list_medicines(db), now=now)
