import argparse

from sqlalchemy import delete

from medstock.core.logging import setup_logging
from medstock.database import Base, SessionLocal, engine
from medstock.models import Medicine, StockTransaction, import_all_models
from medstock.services.sample_data import seed_sample_data


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample medicine stock data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(StockTransaction))
            db.execute(delete(Medicine))
            db.commit()

        added = seed_sample_data(db)
        if added:
            print("Seed data created: {} medicines.".format(added))
        else:
            print("Seed skipped: medicines already exist.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
