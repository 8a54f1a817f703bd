from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Lambda の環境変数から読み込む実行時設定"""

    table_name: str = Field(
        default="",
        validation_alias=AliasChoices("PRICING_TABLE_NAME", "TABLE_NAME"),
    )
    event_bus_name: str = "default"
    event_source: str = "room-pricing"

    # PENDING の予約はこの分数を過ぎるとキャンセル対象になる
    pending_timeout_minutes: int = Field(default=20, gt=0)

    compensation_queue_capacity: int = Field(default=1000, gt=0)
    compensation_queue_warning_size: int = Field(default=10, ge=0)
    compensation_max_retry_count: int = Field(default=5, gt=0)

    expiry_job_lock_seconds: int = Field(default=300, gt=0)
    compensation_job_lock_seconds: int = Field(default=240, gt=0)

    model_config = SettingsConfigDict(env_prefix="PRICING_", populate_by_name=True)


@lru_cache
def get_settings() -> PricingSettings:
    return PricingSettings()
