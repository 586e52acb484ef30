from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pymongo.errors import PyMongoError

from bakery_pos.core.errors import IncompleteSaleError, PersistenceError
from bakery_pos.models.catalog import BakeryCreate, ItemCreate
from bakery_pos.models.sale import Cart, SaleStatus
from bakery_pos.services.cart import CartBuilder
from bakery_pos.services.catalog import CatalogAccess
from bakery_pos.services.sales import SaleCommitter, SalesHistory
from bakery_pos.store import SALES, RecordStore

pytestmark = pytest.mark.anyio


async def seed(catalog):
    bakery = await catalog.create_bakery(BakeryCreate(name="Sunrise Bakery", phone="9000000001"))
    bun = await catalog.create_item(ItemCreate(name="Bun", unit_price=Decimal("10")))
    loaf = await catalog.create_item(ItemCreate(name="Loaf", unit_price=Decimal("50")))
    return bakery, bun, loaf


async def filled_cart(catalog, bakery_id):
    cart = Cart(bakery_id=bakery_id)
    builder = CartBuilder(await catalog.list_items())
    items = {item.name: item for item in builder.items.values()}
    builder.add_line(cart, items["Bun"].id, 3)
    builder.add_line(cart, items["Loaf"].id, 1)
    return cart


async def test_live_commit_is_pending_and_totals_match(store, catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)

    sale_id = await SaleCommitter(store, catalog).commit(cart)

    sale = await SalesHistory(store).get(sale_id)
    assert sale.total_amount == Decimal("80")
    assert sale.status == SaleStatus.pending
    assert sale.bakery_name == "Sunrise Bakery"
    assert sale.bakery_phone == "9000000001"
    assert sale.total_amount == sum(line.amount for line in sale.items)
    for line in sale.items:
        assert line.amount == line.qty * line.unit_price
    assert cart.consumed


async def test_commit_without_bakery_writes_nothing(store, catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)
    cart.bakery_id = None

    with pytest.raises(IncompleteSaleError):
        await SaleCommitter(store, catalog).commit(cart)
    assert await store.count(SALES) == 0
    assert not cart.consumed


async def test_commit_without_lines_fails(store, catalog):
    bakery, _, _ = await seed(catalog)
    with pytest.raises(IncompleteSaleError):
        await SaleCommitter(store, catalog).commit(Cart(bakery_id=bakery.id))
    assert await store.count(SALES) == 0


async def test_commit_against_deleted_bakery_fails(store, catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)
    await catalog.delete_bakery(bakery.id)
    with pytest.raises(IncompleteSaleError):
        await SaleCommitter(store, catalog).commit(cart)


async def test_consumed_cart_cannot_be_recommitted(store, catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)
    committer = SaleCommitter(store, catalog)
    await committer.commit(cart)
    with pytest.raises(IncompleteSaleError):
        await committer.commit(cart)
    assert await store.count(SALES) == 1


async def test_identical_carts_make_two_sales(store, catalog):
    bakery, _, _ = await seed(catalog)
    committer = SaleCommitter(store, catalog)
    first = await committer.commit(await filled_cart(catalog, bakery.id))
    second = await committer.commit(await filled_cart(catalog, bakery.id))
    assert first != second
    assert await store.count(SALES) == 2


async def test_historical_commit_is_saved_at_local_noon(store, catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)

    before = datetime.now(timezone.utc)
    sale_id = await SaleCommitter(store, catalog).commit(cart, target_date=date(2024, 1, 1))

    sale = await SalesHistory(store).get(sale_id)
    assert sale.status == SaleStatus.saved
    # noon in Asia/Kolkata
    assert sale.created_at == datetime(2024, 1, 1, 6, 30, tzinfo=timezone.utc)
    # recency reflects when the operator worked, not the sale date
    touched = await catalog.get_bakery(bakery.id)
    assert touched.last_used_at >= before - timedelta(seconds=1)


async def test_recency_failure_does_not_fail_commit(store, catalog, monkeypatch, caplog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)

    async def broken_touch(bakery_id, when):
        raise PersistenceError("Failed to update bakeries")

    monkeypatch.setattr(catalog, "touch_bakery", broken_touch)
    sale_id = await SaleCommitter(store, catalog).commit(cart)

    assert (await SalesHistory(store).get(sale_id)).total_amount == Decimal("80")
    assert "recency update failed" in caplog.text


class BrokenCollection:
    async def insert_one(self, record):
        raise PyMongoError("connection refused")


class BrokenDB:
    def __getitem__(self, name):
        return BrokenCollection()


async def test_rejected_insert_surfaces_persistence_error(catalog):
    bakery, _, _ = await seed(catalog)
    cart = await filled_cart(catalog, bakery.id)
    broken = RecordStore(BrokenDB(), "owner-a")

    with pytest.raises(PersistenceError):
        await SaleCommitter(broken, catalog).commit(cart)
    assert not cart.consumed


async def test_history_between_is_inclusive_and_newest_first(store, catalog):
    bakery, _, _ = await seed(catalog)
    committer = SaleCommitter(store, catalog)
    for day in (date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)):
        await committer.commit(await filled_cart(catalog, bakery.id), target_date=day)

    sales = await SalesHistory(store).between(date(2024, 1, 1), date(2024, 1, 3))
    assert [s.created_at.date() for s in sales] == [date(2024, 1, 3), date(2024, 1, 1)]


async def test_sales_are_scoped_to_owner(db, store, catalog):
    bakery, _, _ = await seed(catalog)
    await SaleCommitter(store, catalog).commit(await filled_cart(catalog, bakery.id))

    other = RecordStore(db, "owner-b")
    assert await SalesHistory(other).all() == []
    assert await CatalogAccess(other).get_bakery(bakery.id) is None
