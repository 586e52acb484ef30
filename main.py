# main.py
import uvicorn
from fastapi import Depends, FastAPI

from bakery_pos.core.errors import register_error_handlers
from bakery_pos.core.log import configure_logging
from bakery_pos.db import get_db
from bakery_pos.routers import analytics, bakeries, cart, items, sales, sync
from bakery_pos.services.sync_status import SyncStatusRegistry

configure_logging()

app = FastAPI(title="Bakery POS Ledger API")
app.state.sync = SyncStatusRegistry()
register_error_handlers(app)

app.include_router(bakeries.router)
app.include_router(items.router)
app.include_router(cart.router)
app.include_router(sales.router)
app.include_router(analytics.router)
app.include_router(sync.router)

@app.get("/ping")
async def ping_db(db=Depends(get_db)):
    res = await db.command("ping")
    return {"mongo_ok": res.get("ok")}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
