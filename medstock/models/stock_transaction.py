from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from medstock.database.base import Base


class StockTransaction(Base):
    __tablename__ = "stock_transactions"

    id = Column(String, primary_key=True)
    medicine_id = Column(
        String,
        ForeignKey("medicines.id", ondelete="CASCADE"),
        nullable=False,
    )

    kind = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    source = Column(String)

    occurred_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_stock_transactions_medicine_time", "medicine_id", "occurred_at"),
    )


__all__ = ["StockTransaction"]
