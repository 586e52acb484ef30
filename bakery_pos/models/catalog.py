# bakery_pos/models/catalog.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class BakeryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: Optional[str] = None


class BakeryDB(BakeryCreate):
    id: str
    last_used_at: Optional[datetime] = None


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)


class ItemDB(ItemCreate):
    id: str


class CatalogSnapshot(BaseModel):
    bakeries: List[BakeryDB]
    items: List[ItemDB]
