# bakery_pos/models/analytics.py
from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel


class RevenueBucket(BaseModel):
    day: date
    label: str  # e.g. "Jan 01"
    revenue: Decimal


class TopItem(BaseModel):
    name: str
    quantity: int


class AnalyticsReport(BaseModel):
    window_start: datetime
    today_revenue: Decimal
    today_quantity: int
    revenue_by_day: List[RevenueBucket]
    top_items: List[TopItem]


class DashboardStats(BaseModel):
    bakeries: int
    items: int
    total_sales: int
    today_revenue: Decimal


class SyncStatus(BaseModel):
    online: bool
    pending_count: int
    label: str
