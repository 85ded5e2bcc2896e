from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "StockLedger"
    APP_PORT: int = 9202
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Storage: a SQLAlchemy URL, or file://<directory> for the JSON file store
    DATABASE_URL: str = "sqlite:///./stockledger.db"
    
    # Statistics
    BEST_SELLING_LIMIT: int = 5
    TOP_CUSTOMER_SPEND: Literal["unit_cost", "raw_cost"] = "unit_cost"
    CUSTOMER_STATS_SPEND: Literal["unit_cost", "raw_cost"] = "raw_cost"
    
    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
