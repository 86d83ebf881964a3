from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from medstock.core.ledger import StockSource, TransactionType


class TransactionRead(BaseModel):
    id: str
    kind: TransactionType
    quantity: int
    source: Optional[StockSource] = None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionCreate(BaseModel):
    kind: TransactionType
    quantity: int = Field(gt=0)
    source: Optional[StockSource] = None


class MedicineBase(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    current_stock: int = Field(ge=0)
    low_stock_threshold: int = Field(ge=0)


class MedicineCreate(MedicineBase):
    id: str = Field(min_length=1)


class MedicineRead(MedicineBase):
    id: str
    order_pending: bool = False
    transactions: List[TransactionRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
