import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medstock.core.dates import ensure_utc
from medstock.core.ledger import (
    Medicine,
    Transaction,
    TransactionType,
    parse_stock_source,
    parse_transaction_type,
)
from medstock.models.medicine import Medicine as MedicineRow
from medstock.models.stock_transaction import StockTransaction

logger = logging.getLogger(__name__)


def _require_non_negative(field, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer")
    if value < 0:
        raise ValueError(f"{field} must be non-negative")
    return value


def _to_transaction(row: StockTransaction) -> Transaction:
    return Transaction(
        id=row.id,
        kind=parse_transaction_type(row.kind),
        quantity=row.quantity,
        timestamp=ensure_utc(row.occurred_at),
        source=parse_stock_source(row.source),
    )


def _to_medicine(row: MedicineRow, transactions) -> Medicine:
    return Medicine(
        id=row.id,
        name=row.name,
        description=row.description or "",
        current_stock=row.current_stock,
        low_stock_threshold=row.low_stock_threshold,
        transactions=tuple(_to_transaction(t) for t in transactions),
        order_pending=bool(row.order_pending),
    )


def _load_transactions(db: Session, medicine_ids):
    if not medicine_ids:
        return {}
    rows = (
        db.execute(
            select(StockTransaction)
            .where(StockTransaction.medicine_id.in_(medicine_ids))
            .order_by(StockTransaction.occurred_at, StockTransaction.id)
        )
        .scalars()
        .all()
    )
    grouped = {}
    for row in rows:
        grouped.setdefault(row.medicine_id, []).append(row)
    return grouped


def _get_row(db: Session, medicine_id) -> MedicineRow:
    row = db.get(MedicineRow, medicine_id)
    if row is None:
        raise LookupError(f"Medicine not found: {medicine_id}")
    return row


def list_medicines(db: Session) -> list[Medicine]:
    rows = db.execute(select(MedicineRow).order_by(MedicineRow.name, MedicineRow.id)).scalars().all()
    grouped = _load_transactions(db, [row.id for row in rows])
    return [_to_medicine(row, grouped.get(row.id, [])) for row in rows]


def get_medicine(db: Session, medicine_id) -> Medicine:
    row = _get_row(db, medicine_id)
    grouped = _load_transactions(db, [row.id])
    return _to_medicine(row, grouped.get(row.id, []))


def create_medicine(
    db: Session,
    *,
    medicine_id,
    name,
    description="",
    current_stock=0,
    low_stock_threshold=0,
) -> Medicine:
    medicine_id = str(medicine_id or "").strip()
    name = str(name or "").strip()
    if not medicine_id:
        raise ValueError("id is required")
    if not name:
        raise ValueError("name is required")
    _require_non_negative("current_stock", current_stock)
    _require_non_negative("low_stock_threshold", low_stock_threshold)
    if db.get(MedicineRow, medicine_id) is not None:
        raise ValueError(f"Medicine already exists: {medicine_id}")

    row = MedicineRow(
        id=medicine_id,
        name=name,
        description=description or "",
        current_stock=current_stock,
        low_stock_threshold=low_stock_threshold,
        order_pending=False,
    )
    try:
        db.add(row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info(
        "Created medicine %s (%s) with stock %s",
        medicine_id,
        name,
        current_stock,
        extra={"medicine_id": medicine_id},
    )
    return _to_medicine(row, [])


def record_transaction(
    db: Session,
    medicine_id,
    kind,
    quantity,
    *,
    source=None,
    now: datetime | None = None,
) -> Medicine:
    """Append a stock movement and apply it to the medicine's current stock.

    Stock never goes below zero; an OUT larger than the stock on hand empties
    it. Receiving stock clears a pending reorder.
    """
    kind = parse_transaction_type(kind)
    source = parse_stock_source(source)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError("quantity must be a positive integer")

    occurred_at = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
    row = _get_row(db, medicine_id)

    if kind is TransactionType.IN:
        new_stock = row.current_stock + quantity
    else:
        new_stock = row.current_stock - quantity

    try:
        db.add(
            StockTransaction(
                id=uuid.uuid4().hex,
                medicine_id=row.id,
                kind=kind.value,
                quantity=quantity,
                source=source.value if source is not None else None,
                occurred_at=occurred_at,
            )
        )
        row.current_stock = max(0, new_stock)
        if kind is TransactionType.IN:
            row.order_pending = False
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    if kind is TransactionType.IN:
        logger.info("Added %s units to %s", quantity, row.name, extra={"medicine_id": row.id})
    else:
        logger.info("Removed %s units from %s", quantity, row.name, extra={"medicine_id": row.id})
    return get_medicine(db, row.id)


def place_reorder(db: Session, medicine_id) -> Medicine:
    row = _get_row(db, medicine_id)
    try:
        row.order_pending = True
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Reorder placed for %s", row.name, extra={"medicine_id": row.id})
    return get_medicine(db, row.id)


def delete_medicine(db: Session, medicine_id) -> None:
    row = _get_row(db, medicine_id)
    try:
        db.execute(delete(StockTransaction).where(StockTransaction.medicine_id == row.id))
        db.delete(row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Deleted medicine %s", medicine_id, extra={"medicine_id": medicine_id})


def import_medicine(db: Session, medicine: Medicine) -> None:
    """Store a medicine together with its existing ledger, as-is."""
    db.add(
        MedicineRow(
            id=medicine.id,
            name=medicine.name,
            description=medicine.description,
            current_stock=medicine.current_stock,
            low_stock_threshold=medicine.low_stock_threshold,
            order_pending=medicine.order_pending,
        )
    )
    db.flush()
    for transaction in medicine.transactions:
        db.add(
            StockTransaction(
                id=transaction.id,
                medicine_id=medicine.id,
                kind=transaction.kind.value,
                quantity=transaction.quantity,
                source=transaction.source.value if transaction.source is not None else None,
                occurred_at=ensure_utc(transaction.timestamp),
            )
        )
