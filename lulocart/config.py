from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

API_BASE_URLS = {
    "development": "http://localhost:3000",
    "staging": "https://us-central1-lulop-eds249.cloudfunctions.net",
    "production": "https://us-central1-lulop-eds249.cloudfunctions.net",
}

DEFAULT_PAYMENT_INTENT_ENDPOINT = "https://createpaymentintent-6v2n7ecudq-uc.a.run.app"
DEFAULT_WEBHOOK_ENDPOINT = "https://handlepaymentwebhook-6v2n7ecudq-uc.a.run.app"


class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "DEBUG"

    # Taxes (BC: 5% GST + 7% PST)
    gst_rate: float = 0.05
    pst_rate: float = 0.07

    # Platform fee
    platform_fee_enabled: bool = True
    platform_fee_amount: float = 2.00

    # New customer delivery discount
    discount_percentage: float = 0.20
    discount_eligible_orders: int = 3

    # Delivery fee
    delivery_base_fee: float = 2.00
    delivery_min_fee: float = 2.00
    delivery_max_fee: float = 20.00
    max_delivery_distance_km: float = 60.0

    # Cart persistence
    cart_storage_dir: str = ".lulocart"
    cart_storage_key: str = "lulo-cart"

    # Endpoints
    receipt_endpoint: Optional[str] = None
    payment_intent_endpoint: Optional[str] = None
    webhook_endpoint: Optional[str] = None

    # Receipts / network
    receipt_expiry_hours: int = 24
    request_timeout_seconds: Optional[float] = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_staging(self) -> bool:
        return self.app_env == "staging"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def api_base_url(self) -> str:
        return API_BASE_URLS[self.app_env]

    def resolved_receipt_endpoint(self) -> str:
        """Receipt endpoint from the environment, else the base URL default."""
        return self.receipt_endpoint or f"{self.api_base_url}/generateReceiptManually"

    def resolved_payment_intent_endpoint(self) -> str:
        return self.payment_intent_endpoint or DEFAULT_PAYMENT_INTENT_ENDPOINT

    def resolved_webhook_endpoint(self) -> str:
        return self.webhook_endpoint or DEFAULT_WEBHOOK_ENDPOINT

    @property
    def combined_tax_rate(self) -> float:
        return self.gst_rate + self.pst_rate


_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)

def missing_production_settings(config: Optional[AppConfig] = None) -> List[str]:
    """List the endpoint settings production requires but that are unset.

    Missing values are logged as errors; the application keeps running on the
    defaults.
    """
    config = config or get_config()
    if not config.is_production:
        return []

    missing = [
        name.upper()
        for name in ("receipt_endpoint", "payment_intent_endpoint", "webhook_endpoint")
        if not getattr(config, name)
    ]
    if missing:
        # imported here, the logger reads its level from this module
        from lulocart.logging import get_logger
        get_logger(__name__).error(f"Missing production configuration values: {', '.join(missing)}")
    return missing

def get_environment_info(config: Optional[AppConfig] = None) -> dict:
    """Environment info for debugging."""
    config = config or get_config()
    return {
        "environment": config.app_env,
        "is_development": config.is_development,
        "is_staging": config.is_staging,
        "is_production": config.is_production,
        "base_url": config.api_base_url,
        "receipt_endpoint": config.resolved_receipt_endpoint(),
    }
