# bakery_pos/routers/cart.py
from fastapi import APIRouter, Depends

from bakery_pos.deps import get_catalog
from bakery_pos.models.catalog import CatalogSnapshot
from bakery_pos.models.sale import CartDraft, CartPreview
from bakery_pos.services.cart import CartBuilder
from bakery_pos.services.catalog import CatalogAccess

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("/catalog", response_model=CatalogSnapshot)
async def cart_catalog(catalog: CatalogAccess = Depends(get_catalog)):
    bakeries, items = await catalog.snapshot()
    return CatalogSnapshot(bakeries=bakeries, items=items)


@router.post("/price", response_model=CartPreview)
async def price_cart(draft: CartDraft, catalog: CatalogAccess = Depends(get_catalog)):
    """Price a draft against the current catalog without saving anything."""
    cart = CartBuilder(await catalog.list_items()).build(draft)
    return CartPreview(bakery_id=cart.bakery_id, lines=cart.lines, total=cart.total())
