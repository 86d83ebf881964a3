from sqlalchemy import Boolean, Column, Integer, String

from medstock.database.base import Base


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    current_stock = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=0)
    order_pending = Column(Boolean, nullable=False, default=False)


__all__ = ["Medicine"]
