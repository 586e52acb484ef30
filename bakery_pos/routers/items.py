# bakery_pos/routers/items.py
from typing import List

from fastapi import APIRouter, Depends, status

from bakery_pos.deps import get_catalog
from bakery_pos.models.catalog import ItemCreate, ItemDB
from bakery_pos.services.catalog import CatalogAccess

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("/", response_model=List[ItemDB])
async def list_items(catalog: CatalogAccess = Depends(get_catalog)):
    return await catalog.list_items()


@router.post("/", response_model=ItemDB, status_code=status.HTTP_201_CREATED)
async def create_item(item: ItemCreate, catalog: CatalogAccess = Depends(get_catalog)):
    return await catalog.create_item(item)


@router.put("/{item_id}", response_model=ItemDB)
async def update_item(item_id: str, item: ItemCreate, catalog: CatalogAccess = Depends(get_catalog)):
    return await catalog.update_item(item_id, item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, catalog: CatalogAccess = Depends(get_catalog)):
    await catalog.delete_item(item_id)
