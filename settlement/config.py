import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field

from .models import StrategyName


class Settings(BaseModel):
    default_strategy: StrategyName = StrategyName.AGGREGATE
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("SETTLEMENT_CORS_ORIGINS", "*")
        return cls(
            default_strategy=os.getenv("SETTLEMENT_DEFAULT_STRATEGY", StrategyName.AGGREGATE.value),
            log_level=os.getenv("SETTLEMENT_LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
