"""Application configuration."""

import os
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from event_gallery.domain.events import PricingSchedule

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    operator_token: str
    storage_bucket: str = "event-photos"
    extractor_base_url: str
    camera_source: str = "0"
    match_threshold: float = 0.6
    descriptor_length: int = 128
    include_unresolved_photos: bool = True
    extractor_load_attempts: int = 30
    extractor_load_interval_seconds: float = 2.0
    view_idle_seconds: int = 900
    upload_retention_seconds: int = 3600
    default_social_price: Decimal = Decimal("0.99")
    default_print_price: Decimal = Decimal("9.99")
    default_original_price: Decimal = Decimal("19.99")
    default_credit_price: Decimal = Decimal("1.00")
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def default_pricing(settings: Settings) -> PricingSchedule:
    """Build the pricing schedule used when an event has none stored."""
    return PricingSchedule(
        social_price=settings.default_social_price,
        print_price=settings.default_print_price,
        original_price=settings.default_original_price,
        credit_price=settings.default_credit_price,
    )
