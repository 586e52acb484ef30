# bakery_pos/services/analytics.py
import asyncio
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, Literal, Optional

from bakery_pos.core.errors import ValidationError
from bakery_pos.models.analytics import AnalyticsReport, DashboardStats, RevenueBucket, TopItem
from bakery_pos.models.sale import Sale, money
from bakery_pos.store import BAKERIES, ITEMS, SALES, RecordStore
from bakery_pos.time_utils import local_today, start_of_day, utcnow

DAY_LABEL = "%b %d"
AnalyticsWindow = Literal["today", "month", "custom"]


def window_start(window: AnalyticsWindow, today: date, tz: tzinfo, start: Optional[date] = None) -> datetime:
    if window == "today":
        return start_of_day(today, tz)
    if window == "month":
        return start_of_day(today.replace(day=1), tz)
    if window == "custom":
        if start is None:
            raise ValidationError("A custom range needs a start date")
        return start_of_day(start, tz)
    raise ValidationError(f"Unknown analytics range '{window}'")


def aggregate(
    sales: Iterable[Sale],
    window_start: datetime,
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
    limit: int = 5,
) -> AnalyticsReport:
    """Pure over ``sales``. Items are keyed by the name on the line."""
    now = now or utcnow()
    today_start = start_of_day(now.astimezone(tz).date(), tz)

    today_revenue = Decimal("0")
    today_quantity = 0
    revenue: Dict[date, Decimal] = {}
    quantities: Dict[str, int] = {}

    for sale in sales:
        if sale.created_at < window_start:
            continue
        if today_start <= sale.created_at < now:
            today_revenue += sale.total_amount
            today_quantity += sum(line.qty for line in sale.items)

        day = sale.created_at.astimezone(tz).date()
        revenue[day] = revenue.get(day, Decimal("0")) + sale.total_amount

        for line in sale.items:
            quantities[line.name] = quantities.get(line.name, 0) + line.qty

    buckets = [
        RevenueBucket(day=day, label=day.strftime(DAY_LABEL), revenue=money(amount))
        for day, amount in revenue.items()
    ]
    # sorted() is stable, so equal quantities keep first-seen order
    ranked = sorted(quantities.items(), key=lambda pair: pair[1], reverse=True)
    top_items = [TopItem(name=name, quantity=qty) for name, qty in ranked[:limit]]

    return AnalyticsReport(
        window_start=window_start,
        today_revenue=money(today_revenue),
        today_quantity=today_quantity,
        revenue_by_day=buckets,
        top_items=top_items,
    )


async def dashboard_stats(store: RecordStore, tz: tzinfo) -> DashboardStats:
    today_start = start_of_day(local_today(tz), tz)
    bakeries, items, total_sales, today_sales = await asyncio.gather(
        store.count(BAKERIES),
        store.count(ITEMS),
        store.count(SALES),
        store.find(SALES, {"created_at": {"$gte": today_start}}),
    )
    today_revenue = sum((doc["total_amount"] for doc in today_sales), Decimal("0"))
    return DashboardStats(
        bakeries=bakeries,
        items=items,
        total_sales=total_sales,
        today_revenue=money(today_revenue),
    )
