# bakery_pos/deps.py
from fastapi import Depends, Request

from bakery_pos.core.security import get_current_owner
from bakery_pos.db import get_db
from bakery_pos.services.catalog import CatalogAccess
from bakery_pos.services.sync_status import SyncStatusTracker
from bakery_pos.store import RecordStore


async def get_store(owner_id: str = Depends(get_current_owner), db=Depends(get_db)) -> RecordStore:
    return RecordStore(db, owner_id)


async def get_catalog(store: RecordStore = Depends(get_store)) -> CatalogAccess:
    return CatalogAccess(store)


async def get_tracker(request: Request, owner_id: str = Depends(get_current_owner)) -> SyncStatusTracker:
    return request.app.state.sync.tracker_for(owner_id)
