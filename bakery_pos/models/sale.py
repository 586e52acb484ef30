# bakery_pos/models/sale.py
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class SaleStatus(str, Enum):
    pending = "pending"
    saved = "saved"


class CartLine(BaseModel):
    # persisted under the camelCase aliases
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., alias="itemId")
    name: str
    qty: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., alias="unitPrice")
    amount: Decimal


class Cart(BaseModel):
    lines: List[CartLine] = []
    bakery_id: Optional[str] = None
    target_date: Optional[date] = None
    consumed: bool = False

    def total(self) -> Decimal:
        return money(sum((line.amount for line in self.lines), Decimal("0")))


# ---- request bodies ----
class DraftLine(BaseModel):
    item_id: str
    qty: int = 1


class CartDraft(BaseModel):
    bakery_id: Optional[str] = None
    lines: List[DraftLine] = []


class HistoricalCartDraft(CartDraft):
    target_date: date


class CartPreview(BaseModel):
    bakery_id: Optional[str] = None
    lines: List[CartLine]
    total: Decimal


class SaleCreated(BaseModel):
    id: str
    status: SaleStatus


class Sale(BaseModel):
    id: str
    bakery_id: str
    bakery_name: str
    bakery_phone: str
    items: List[CartLine]
    total_amount: Decimal
    created_at: datetime
    status: SaleStatus
