# bakery_pos/routers/sales.py
import logging
from datetime import date
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Response, status

from bakery_pos.core.errors import LedgerError, ValidationError
from bakery_pos.deps import get_catalog, get_store, get_tracker
from bakery_pos.models.sale import CartDraft, HistoricalCartDraft, Sale, SaleCreated, SaleStatus
from bakery_pos.services.cart import CartBuilder
from bakery_pos.services.catalog import CatalogAccess
from bakery_pos.services.export import full_filename, range_filename, to_csv
from bakery_pos.services.sales import SaleCommitter, SalesHistory
from bakery_pos.services.sync_status import SyncStatusTracker
from bakery_pos.store import RecordStore
from bakery_pos.time_utils import RangePreset, local_today, preset_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sales", tags=["sales"])


def resolve_range(from_day: Optional[date], to_day: Optional[date], preset: Optional[RangePreset]) -> Tuple[date, date]:
    if preset:
        return preset_range(preset, local_today())
    if from_day is None and to_day is None:
        today = local_today()
        return today, today
    if from_day is None or to_day is None:
        raise ValidationError("Both 'from' and 'to' are required")
    return from_day, to_day


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---- commit ----
@router.post("/", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
async def commit_sale(
    draft: CartDraft,
    store: RecordStore = Depends(get_store),
    catalog: CatalogAccess = Depends(get_catalog),
    tracker: SyncStatusTracker = Depends(get_tracker),
):
    cart = CartBuilder(await catalog.list_items()).build(draft)
    sale_id = await SaleCommitter(store, catalog).commit(cart)
    # the sale is already stored; a stale count must not report it as failed
    try:
        await tracker.refresh(store)
    except LedgerError as exc:
        logger.warning("Sale %s saved but pending count refresh failed: %s", sale_id, exc)
    return SaleCreated(id=sale_id, status=SaleStatus.pending)


@router.post("/historical", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
async def commit_historical_sale(
    draft: HistoricalCartDraft,
    store: RecordStore = Depends(get_store),
    catalog: CatalogAccess = Depends(get_catalog),
):
    """Enter a past sale. It is dated at noon of ``target_date`` and already reconciled."""
    cart = CartBuilder(await catalog.list_items()).build(draft)
    cart.target_date = draft.target_date
    sale_id = await SaleCommitter(store, catalog).commit(cart)
    return SaleCreated(id=sale_id, status=SaleStatus.saved)


# ---- history ----
@router.get("/", response_model=List[Sale])
async def list_sales(
    from_day: Optional[date] = Query(None, alias="from"),
    to_day: Optional[date] = Query(None, alias="to"),
    preset: Optional[RangePreset] = None,
    store: RecordStore = Depends(get_store),
):
    start, end = resolve_range(from_day, to_day, preset)
    return await SalesHistory(store).between(start, end)


@router.get("/export")
async def export_sales(
    from_day: Optional[date] = Query(None, alias="from"),
    to_day: Optional[date] = Query(None, alias="to"),
    preset: Optional[RangePreset] = None,
    store: RecordStore = Depends(get_store),
):
    start, end = resolve_range(from_day, to_day, preset)
    sales = await SalesHistory(store).between(start, end)
    return csv_response(to_csv(sales), range_filename(start, end))


@router.get("/export/all")
async def export_all_sales(store: RecordStore = Depends(get_store)):
    sales = await SalesHistory(store).all()
    return csv_response(to_csv(sales), full_filename(local_today()))


@router.get("/{sale_id}", response_model=Sale)
async def get_sale(sale_id: str, store: RecordStore = Depends(get_store)):
    return await SalesHistory(store).get(sale_id)
