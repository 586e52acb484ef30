# bakery_pos/routers/bakeries.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from bakery_pos.deps import get_catalog
from bakery_pos.models.catalog import BakeryCreate, BakeryDB
from bakery_pos.services.catalog import CatalogAccess

router = APIRouter(prefix="/api/bakeries", tags=["bakeries"])


@router.get("/", response_model=List[BakeryDB])
async def list_bakeries(search: Optional[str] = None, catalog: CatalogAccess = Depends(get_catalog)):
    # most recently used first
    return await catalog.list_bakeries(search)


@router.post("/", response_model=BakeryDB, status_code=status.HTTP_201_CREATED)
async def create_bakery(bakery: BakeryCreate, catalog: CatalogAccess = Depends(get_catalog)):
    return await catalog.create_bakery(bakery)


@router.post("/select", response_model=BakeryDB)
async def select_bakery(bakery: BakeryCreate, response: Response, catalog: CatalogAccess = Depends(get_catalog)):
    """Pick the bakery with this phone number, creating it if there is none."""
    found, created = await catalog.select_or_create_bakery(bakery)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return found


@router.put("/{bakery_id}", response_model=BakeryDB)
async def update_bakery(bakery_id: str, bakery: BakeryCreate, catalog: CatalogAccess = Depends(get_catalog)):
    return await catalog.update_bakery(bakery_id, bakery)


@router.delete("/{bakery_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bakery(bakery_id: str, catalog: CatalogAccess = Depends(get_catalog)):
    await catalog.delete_bakery(bakery_id)
