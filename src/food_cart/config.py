"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_cart.services.pricing import PricingPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    vendor_token: str
    vendor_api_base_url: str = "https://ineat-vendor.onrender.com"
    vendor_api_token: str | None = None
    delivery_fee: float = 40.0
    tax_rate: float = 0.05
    currency_symbol: str = "₹"
    strict_price_parsing: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def pricing_policy(self) -> PricingPolicy:
        """Build the pricing policy from configured constants."""
        return PricingPolicy(
            delivery_fee=self.delivery_fee,
            tax_rate=self.tax_rate,
            currency_symbol=self.currency_symbol,
        )
