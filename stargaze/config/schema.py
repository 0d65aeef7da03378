"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = WEATHERAPI_BASE_URL
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=2.0, ge=0.0)
    forecast_days: int = Field(default=3, ge=1, le=14)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    namespace: str = Field(default="stargaze_", min_length=1)
    forecast_ttl_hours: float = Field(default=2.0, gt=0.0)
    light_pollution_ttl_hours: float = Field(default=24.0, gt=0.0)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/stargaze.db"
    timeout_seconds: float = Field(default=5.0, gt=0.0)


class ScoringConfig(BaseModel):
    model_config = {"extra": "forbid"}

    best_hours: int = Field(default=5, ge=1, le=24)


class LightPollutionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # Estimated Bortle class used until a light-pollution map is wired in.
    # None reports light pollution as unavailable.
    default_bortle_class: int | None = Field(default=5, ge=1, le=9)


class StargazeConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    cache: CacheConfig = CacheConfig()
    storage: StorageConfig = StorageConfig()
    scoring: ScoringConfig = ScoringConfig()
    light_pollution: LightPollutionConfig = LightPollutionConfig()
