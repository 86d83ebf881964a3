import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medstock.core.ledger import Medicine, StockSource, Transaction, TransactionType
from medstock.models.medicine import Medicine as MedicineRow
from medstock.services.ledger_service import import_medicine

logger = logging.getLogger(__name__)

IN = TransactionType.IN
OUT = TransactionType.OUT

# (id, name, description, current_stock, low_stock_threshold, id_prefix, ledger)
# ledger entries: (kind, quantity, days_ago, source)
SAMPLE_MEDICINES = (
    (
        "paracetamol-500",
        "Paracetamol 500mg",
        "Tablet for fever and pain relief.",
        532,
        50,
        "p",
        (
            (IN, 2000, 180, StockSource.DOH),
            (OUT, 25, 175, None),
            (OUT, 40, 170, None),
            (OUT, 15, 168, None),
            (OUT, 80, 160, None),
            (OUT, 55, 155, None),
            (OUT, 120, 150, None),
            (OUT, 90, 142, None),
            (OUT, 35, 130, None),
            (IN, 500, 120, StockSource.MHO),
            (OUT, 150, 118, None),
            (OUT, 100, 110, None),
            (OUT, 130, 100, None),
            (OUT, 85, 95, None),
            (OUT, 110, 85, None),
            (OUT, 95, 70, None),
            (OUT, 140, 60, None),
            (IN, 300, 45, StockSource.PHILOS),
            (OUT, 70, 40, None),
            (OUT, 80, 32, None),
            (OUT, 60, 25, None),
            (OUT, 45, 18, None),
            (OUT, 50, 14, None),
            (OUT, 38, 7, None),
            (OUT, 25, 2, None),
        ),
    ),
    (
        "amoxicillin-250",
        "Amoxicillin 250mg",
        "Antibiotic syrup for bacterial infections.",
        195,
        20,
        "a",
        (
            (IN, 300, 170, StockSource.PHILOS),
            (OUT, 5, 160, None),
            (OUT, 10, 145, None),
            (OUT, 40, 120, None),
            (OUT, 60, 110, None),
            (OUT, 55, 105, None),
            (OUT, 70, 98, None),
            (IN, 200, 90, StockSource.DOH),
            (OUT, 15, 80, None),
            (OUT, 10, 60, None),
            (OUT, 20, 35, None),
            (OUT, 15, 12, None),
        ),
    ),
    (
        "losartan-50",
        "Losartan 50mg",
        "For hypertension.",
        8,
        10,
        "l",
        (
            (IN, 400, 180, StockSource.MHO),
            (OUT, 30, 175, None),
            (OUT, 25, 160, None),
            (OUT, 30, 145, None),
            (OUT, 30, 130, None),
            (OUT, 60, 118, None),
            (OUT, 30, 100, None),
            (OUT, 30, 88, None),
            (OUT, 30, 72, None),
            (OUT, 30, 58, None),
            (OUT, 30, 40, None),
            (OUT, 30, 25, None),
            (OUT, 37, 5, None),
        ),
    ),
    (
        "ors-sachet",
        "ORS Sachet",
        "Oral Rehydration Salts for dehydration.",
        405,
        100,
        "o",
        (
            (IN, 600, 160, StockSource.DOH),
            (OUT, 10, 140, None),
            (OUT, 5, 125, None),
            (OUT, 15, 110, None),
            (OUT, 100, 80, None),
            (OUT, 150, 78, None),
            (OUT, 80, 75, None),
            (IN, 200, 60, StockSource.MHO),
            (OUT, 20, 40, None),
            (OUT, 15, 22, None),
        ),
    ),
    (
        "metformin-500",
        "Metformin 500mg",
        "For type 2 diabetes.",
        0,
        25,
        "m",
        (
            (IN, 500, 180, StockSource.PHILOS),
            (OUT, 90, 170, None),
            (OUT, 90, 140, None),
            (OUT, 90, 110, None),
            (OUT, 90, 80, None),
            (OUT, 90, 50, None),
            (OUT, 50, 20, None),
        ),
    ),
)


def build_sample_medicines(now: datetime | None = None) -> list[Medicine]:
    if now is None:
        now = datetime.now(timezone.utc)
    medicines = []
    for medicine_id, name, description, stock, threshold, prefix, ledger in SAMPLE_MEDICINES:
        transactions = tuple(
            Transaction(
                id=f"{prefix}-hist-{index}",
                kind=kind,
                quantity=quantity,
                timestamp=now - timedelta(days=days_ago),
                source=source,
            )
            for index, (kind, quantity, days_ago, source) in enumerate(ledger, start=1)
        )
        medicines.append(
            Medicine(
                id=medicine_id,
                name=name,
                description=description,
                current_stock=stock,
                low_stock_threshold=threshold,
                transactions=transactions,
            )
        )
    return medicines


def seed_sample_data(db: Session, now: datetime | None = None) -> int:
    """Load the demo medicines into an empty store; returns how many were added."""
    if db.execute(select(MedicineRow.id).limit(1)).first():
        logger.info("Sample data skipped: medicines already exist.")
        return 0

    medicines = build_sample_medicines(now)
    try:
        for medicine in medicines:
            import_medicine(db, medicine)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Seeded %s sample medicines", len(medicines))
    return len(medicines)
