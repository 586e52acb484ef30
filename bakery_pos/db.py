from motor.motor_asyncio import AsyncIOMotorClient
from bakery_pos.core.config import settings

client = AsyncIOMotorClient(
    settings.mongo_uri,
    tz_aware=True,
    serverSelectionTimeoutMS=settings.mongo_timeout_ms,
)
db = client[settings.db_name]


async def get_db():
    return db
