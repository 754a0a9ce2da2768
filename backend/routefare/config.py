"""Configuration for the routefare pricing service."""

from typing import List, Optional
import os
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Routefare Delivery Pricing"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Point-to-point delivery pricing across a fixed network of named routes"
    )

    # CORS Settings
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8081",
        "http://localhost:19006",
    ]

    # Pricing mode: "index" (tariff table) or "lookup" (flat stop prices)
    PRICING_MODE = os.getenv("ROUTEFARE_PRICING_MODE", "index").strip().lower()

    # Index-based pricing
    TARIFF_BASE = _env_float("ROUTEFARE_TARIFF_BASE", 100.0)
    TARIFF_STEP = _env_float("ROUTEFARE_TARIFF_STEP", 20.0)
    TRANSFER_FEE = _env_float("ROUTEFARE_TRANSFER_FEE", 150.0)

    # Lookup-based pricing
    LOOKUP_SAME_ROUTE_DIVISOR = 1.8
    LOOKUP_DIFFERENT_ROUTE_DIVISOR = 2
    LOOKUP_FIXED_FEE = 50
    LOOKUP_TRANSFER_FEE = 50

    CURRENCY = os.getenv("ROUTEFARE_CURRENCY", "KES")

    # Optional JSON file replacing the built-in network and price tables
    NETWORK_FILE: Optional[str] = os.getenv("ROUTEFARE_NETWORK_FILE") or None

    # Logging
    LOG_LEVEL = os.getenv("ROUTEFARE_LOG_LEVEL", "INFO")
    LOG_JSON = _env_bool("ROUTEFARE_LOG_JSON")

    # Delivery time estimates shown next to a quote
    SAME_ROUTE_DELIVERY_TIME = "60-90 minutes"
    DIFFERENT_ROUTE_DELIVERY_TIME = "90-120 minutes"

    @classmethod
    def is_valid_mode(cls, mode: str) -> bool:
        """Check if a pricing mode name is supported."""
        return mode in ("index", "lookup")


settings = Settings()
