# bakery_pos/services/catalog.py
import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from bakery_pos.core.errors import NotFoundError
from bakery_pos.models.catalog import BakeryCreate, BakeryDB, ItemCreate, ItemDB
from bakery_pos.store import BAKERIES, ITEMS, RecordStore

logger = logging.getLogger(__name__)


class CatalogAccess:
    def __init__(self, store: RecordStore):
        self.store = store

    # ---- reads ----
    async def list_bakeries(self, search: Optional[str] = None) -> List[BakeryDB]:
        filters = None
        if search:
            # case-insensitive substring match on the name
            filters = {"name": {"$regex": re.escape(search), "$options": "i"}}
        docs = await self.store.find(BAKERIES, filters, sort=[("last_used_at", -1)])
        return [BakeryDB(**doc) for doc in docs]

    async def list_items(self) -> List[ItemDB]:
        docs = await self.store.find(ITEMS, sort=[("name", 1)])
        return [ItemDB(**doc) for doc in docs]

    async def snapshot(self) -> Tuple[List[BakeryDB], List[ItemDB]]:
        return await asyncio.gather(self.list_bakeries(), self.list_items())

    async def get_bakery(self, bakery_id: str) -> Optional[BakeryDB]:
        doc = await self.store.find_one(BAKERIES, bakery_id)
        return BakeryDB(**doc) if doc else None

    async def get_item(self, item_id: str) -> Optional[ItemDB]:
        doc = await self.store.find_one(ITEMS, item_id)
        return ItemDB(**doc) if doc else None

    # ---- bakeries ----
    async def create_bakery(self, bakery: BakeryCreate) -> BakeryDB:
        data = bakery.model_dump()
        data["last_used_at"] = datetime.now(timezone.utc)
        bakery_id = await self.store.insert(BAKERIES, data)
        logger.info("Created bakery %s (%s)", bakery_id, bakery.name)
        return BakeryDB(id=bakery_id, **data)

    async def select_or_create_bakery(self, bakery: BakeryCreate) -> Tuple[BakeryDB, bool]:
        # returns the bakery and whether it was created
        existing = await self.store.find_one_by(BAKERIES, {"phone": bakery.phone})
        if existing:
            return BakeryDB(**existing), False
        return await self.create_bakery(bakery), True

    async def update_bakery(self, bakery_id: str, bakery: BakeryCreate) -> BakeryDB:
        if not await self.store.update(BAKERIES, bakery_id, bakery.model_dump()):
            raise NotFoundError("Bakery not found")
        return await self.get_bakery(bakery_id)

    async def touch_bakery(self, bakery_id: str, when: datetime) -> bool:
        return await self.store.update(BAKERIES, bakery_id, {"last_used_at": when})

    async def delete_bakery(self, bakery_id: str) -> None:
        # sales keep their own copy of name/phone, so history is unaffected
        if not await self.store.delete(BAKERIES, bakery_id):
            raise NotFoundError("Bakery not found")

    # ---- items ----
    async def create_item(self, item: ItemCreate) -> ItemDB:
        data = item.model_dump()
        item_id = await self.store.insert(ITEMS, data)
        return ItemDB(id=item_id, **data)

    async def update_item(self, item_id: str, item: ItemCreate) -> ItemDB:
        # existing sales snapshot their prices; nothing to propagate
        if not await self.store.update(ITEMS, item_id, item.model_dump()):
            raise NotFoundError("Item not found")
        return await self.get_item(item_id)

    async def delete_item(self, item_id: str) -> None:
        if not await self.store.delete(ITEMS, item_id):
            raise NotFoundError("Item not found")
