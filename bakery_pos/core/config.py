# bakery_pos/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # tell pydantic-settings to load from .env
    model_config = SettingsConfigDict(env_file=".env")

    mongo_uri: str
    db_name: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    mongo_timeout_ms: int = 5000
    # operator's local zone, used for day boundaries and historical dates
    timezone: str = "Asia/Kolkata"
    top_items_limit: int = 5
    log_level: str = "INFO"

settings = Settings()
