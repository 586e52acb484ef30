# bakery_pos/routers/sync.py
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from bakery_pos.core.security import get_current_owner
from bakery_pos.deps import get_store, get_tracker
from bakery_pos.models.analytics import SyncStatus
from bakery_pos.services.sync_status import SyncStatusTracker
from bakery_pos.store import RecordStore

router = APIRouter(prefix="/api/sync", tags=["sync"])


class ConnectivityBody(BaseModel):
    online: bool


@router.get("/status", response_model=SyncStatus)
async def sync_status(
    store: RecordStore = Depends(get_store),
    tracker: SyncStatusTracker = Depends(get_tracker),
):
    await tracker.refresh(store)
    return tracker.status()


@router.put("/connectivity", response_model=SyncStatus)
async def set_connectivity(
    payload: ConnectivityBody,
    request: Request,
    owner_id: str = Depends(get_current_owner),
    store: RecordStore = Depends(get_store),
    tracker: SyncStatusTracker = Depends(get_tracker),
):
    request.app.state.sync.signal_for(owner_id).publish(payload.online)
    await tracker.refresh(store)
    return tracker.status()
