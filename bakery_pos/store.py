# bakery_pos/store.py
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from bakery_pos.core.errors import PersistenceError

logger = logging.getLogger(__name__)

BAKERIES = "bakeries"
ITEMS = "items"
SALES = "sales"

OWNER_FIELD = "created_by"


def to_oid(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def to_document(value: Any) -> Any:
    # money goes in as Decimal128, datetimes as naive UTC
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    if isinstance(value, dict):
        return {k: to_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document(v) for v in value]
    return value


def from_document(value: Any) -> Any:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, datetime) and value.tzinfo is None:
        # BSON dates are UTC; clients without tz_aware hand them back naive
        return value.replace(tzinfo=timezone.utc)
    if isinstance(value, dict):
        doc = {k: from_document(v) for k, v in value.items() if k not in ("_id", OWNER_FIELD)}
        if "_id" in value:
            doc["id"] = str(value["_id"])
        return doc
    if isinstance(value, list):
        return [from_document(v) for v in value]
    return value


class RecordStore:
    def __init__(self, db, owner_id: str):
        self.db = db
        self.owner_id = owner_id

    def _scoped(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        query = dict(filters or {})
        query[OWNER_FIELD] = self.owner_id
        return query

    async def find(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self.db[collection].find(to_document(self._scoped(filters)))
            if sort:
                cursor = cursor.sort(list(sort))
            docs = [from_document(doc) async for doc in cursor]
        except PyMongoError as exc:
            logger.error("find on %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to fetch {collection}") from exc
        return docs

    async def find_one(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        obj = to_oid(record_id)
        if obj is None:
            return None
        return await self.find_one_by(collection, {"_id": obj})

    async def find_one_by(self, collection: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            doc = await self.db[collection].find_one(to_document(self._scoped(filters)))
        except PyMongoError as exc:
            logger.error("find_one on %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to fetch {collection}") from exc
        if doc is None:
            return None
        return from_document(doc)

    async def insert(self, collection: str, data: Dict[str, Any]) -> str:
        record = to_document(dict(data))
        record[OWNER_FIELD] = self.owner_id
        try:
            res = await self.db[collection].insert_one(record)
        except PyMongoError as exc:
            logger.error("insert into %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to save {collection}") from exc
        return str(res.inserted_id)

    async def update(self, collection: str, record_id: str, changes: Dict[str, Any]) -> bool:
        obj = to_oid(record_id)
        if obj is None:
            return False
        try:
            res = await self.db[collection].update_one(
                self._scoped({"_id": obj}), {"$set": to_document(changes)}
            )
        except PyMongoError as exc:
            logger.error("update on %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to update {collection}") from exc
        return res.matched_count > 0

    async def delete(self, collection: str, record_id: str) -> bool:
        obj = to_oid(record_id)
        if obj is None:
            return False
        try:
            res = await self.db[collection].delete_one(self._scoped({"_id": obj}))
        except PyMongoError as exc:
            logger.error("delete on %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to delete {collection}") from exc
        return res.deleted_count > 0

    async def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await self.db[collection].count_documents(to_document(self._scoped(filters)))
        except PyMongoError as exc:
            logger.error("count on %s failed: %s", collection, exc)
            raise PersistenceError(f"Failed to count {collection}") from exc
