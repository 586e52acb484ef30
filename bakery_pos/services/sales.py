# bakery_pos/services/sales.py
import logging
from datetime import date, datetime, tzinfo
from typing import List, Optional

from bakery_pos.core.errors import IncompleteSaleError, LedgerError, NotFoundError
from bakery_pos.models.sale import Cart, Sale, SaleStatus
from bakery_pos.services.cart import CartBuilder
from bakery_pos.services.catalog import CatalogAccess
from bakery_pos.store import SALES, RecordStore
from bakery_pos.time_utils import day_bounds, local_tz, noon_of, utcnow

logger = logging.getLogger(__name__)


class SaleCommitter:
    """Live commits are stored pending, backdated ones saved."""

    def __init__(self, store: RecordStore, catalog: CatalogAccess, tz: Optional[tzinfo] = None):
        self.store = store
        self.catalog = catalog
        self.tz = tz or local_tz()

    async def commit(self, cart: Cart, target_date: Optional[date] = None) -> str:
        if cart.consumed:
            raise IncompleteSaleError("Cart has already been committed")
        if not cart.bakery_id:
            raise IncompleteSaleError("Please select a bakery")
        if not cart.lines:
            raise IncompleteSaleError("Please add items to the cart")
        bakery = await self.catalog.get_bakery(cart.bakery_id)
        if bakery is None:
            raise IncompleteSaleError("Selected bakery no longer exists")

        total = CartBuilder.verify(cart)
        target_date = target_date or cart.target_date
        now = utcnow()
        if target_date is None:
            created_at, status = now, SaleStatus.pending
        else:
            created_at, status = noon_of(target_date, self.tz), SaleStatus.saved

        record = {
            "bakery_id": bakery.id,
            "bakery_name": bakery.name,
            "bakery_phone": bakery.phone,
            "items": [line.model_dump(by_alias=True) for line in cart.lines],
            "total_amount": total,
            "created_at": created_at,
            "status": status.value,
        }
        sale_id = await self.store.insert(SALES, record)
        cart.consumed = True
        logger.info("Committed sale %s for bakery %s (%s, total %s)", sale_id, bakery.id, status.value, total)

        # recency follows operator activity, not the sale's date
        try:
            if not await self.catalog.touch_bakery(bakery.id, now):
                logger.warning("Bakery %s vanished before its recency could be updated", bakery.id)
        except LedgerError as exc:
            logger.warning("Sale %s saved but bakery %s recency update failed: %s", sale_id, bakery.id, exc)

        return sale_id


class SalesHistory:
    def __init__(self, store: RecordStore, tz: Optional[tzinfo] = None):
        self.store = store
        self.tz = tz or local_tz()

    async def get(self, sale_id: str) -> Sale:
        doc = await self.store.find_one(SALES, sale_id)
        if doc is None:
            raise NotFoundError("Sale not found")
        return Sale(**doc)

    async def between(self, from_day: date, to_day: date) -> List[Sale]:
        """Sales on the local days from_day..to_day inclusive, newest first."""
        start, end = day_bounds(from_day, to_day, self.tz)
        docs = await self.store.find(
            SALES,
            {"created_at": {"$gte": start, "$lt": end}},
            sort=[("created_at", -1)],
        )
        return [Sale(**doc) for doc in docs]

    async def since(self, window_start: datetime) -> List[Sale]:
        docs = await self.store.find(
            SALES,
            {"created_at": {"$gte": window_start}},
            sort=[("created_at", 1)],
        )
        return [Sale(**doc) for doc in docs]

    async def all(self) -> List[Sale]:
        docs = await self.store.find(SALES, sort=[("created_at", -1)])
        return [Sale(**doc) for doc in docs]
