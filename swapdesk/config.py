from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Normalize symbol settings so lookups against the catalog are exact."""

        super().model_post_init(__context)

        object.__setattr__(self, "default_source_symbol", self.default_source_symbol.strip().upper())
        object.__setattr__(self, "default_destination_symbol", self.default_destination_symbol.strip().upper())
        object.__setattr__(self, "token_icon_base_url", self.token_icon_base_url.rstrip("/"))

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # External API Keys
    coingecko_api_key: str = Field(default="", description="Coingecko API key")

    # Price Sources
    price_listing_url: str = Field(
        default="https://interview.switcheo.com/prices.json",
        description="Primary bulk price listing endpoint (flat symbol -> price map)",
    )
    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="Base URL for the CoinGecko API used as the fallback price source",
    )
    request_timeout_seconds: int = Field(default=10, description="Request timeout")

    # Provider Toggles
    enable_price_listing: bool = Field(default=True, description="Enable the primary price listing provider")
    enable_coingecko: bool = Field(default=True, description="Enable Coingecko provider")

    # Swap Form
    token_icon_base_url: str = Field(
        default="https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens",
        description="Base path for token icon SVGs",
    )
    default_source_symbol: str = Field(default="BTC", description="Preferred source asset for a new form")
    default_destination_symbol: str = Field(default="USDT", description="Preferred destination asset for a new form")
    max_swap_sessions: int = Field(
        default=1000,
        ge=1,
        description="Open swap sessions kept by the API; the oldest is dropped beyond this",
    )

    @property
    def has_coingecko_key(self) -> bool:
        return bool(self.coingecko_api_key)


# Global settings instance
settings = Settings()
