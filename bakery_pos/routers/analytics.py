# bakery_pos/routers/analytics.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from bakery_pos.core.config import settings
from bakery_pos.deps import get_store
from bakery_pos.models.analytics import AnalyticsReport, DashboardStats
from bakery_pos.services.analytics import AnalyticsWindow, aggregate, dashboard_stats, window_start
from bakery_pos.services.sales import SalesHistory
from bakery_pos.store import RecordStore
from bakery_pos.time_utils import local_today, local_tz, utcnow

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/", response_model=AnalyticsReport)
async def get_analytics(
    window: AnalyticsWindow = Query("today", alias="range"),
    start: Optional[date] = None,
    store: RecordStore = Depends(get_store),
):
    tz = local_tz()
    now = utcnow()
    opens_at = window_start(window, local_today(tz, now), tz, start)
    sales = await SalesHistory(store, tz).since(opens_at)
    return aggregate(sales, opens_at, now=now, tz=tz, limit=settings.top_items_limit)


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(store: RecordStore = Depends(get_store)):
    return await dashboard_stats(store, local_tz())
