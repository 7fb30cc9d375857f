"""Configuration management."""

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class StoreConfig:
    """Storefront configuration."""

    # Storage
    database_path: str = os.getenv("DATABASE_PATH", "data/storefront.db")
    catalog_path: str = os.getenv("CATALOG_PATH", str(PROJECT_ROOT / "data" / "catalog.json"))
    seed_catalog: bool = _env_flag("SEED_CATALOG", "true")

    # Catalog browsing
    max_price: Decimal = Decimal(os.getenv("MAX_PRICE", "5000"))
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "$")

    # Checkout
    tax_rate: Decimal = Decimal(os.getenv("TAX_RATE", "0.08"))
    shipping_fee: Decimal = Decimal(os.getenv("SHIPPING_FEE", "9.99"))
    # subtotals strictly above this ship free
    free_shipping_threshold: Decimal = Decimal(os.getenv("FREE_SHIPPING_THRESHOLD", "50"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def default_price_range(self) -> tuple[Decimal, Decimal]:
        """Price bounds a fresh filter configuration starts with."""
        return (Decimal("0"), self.max_price)


config = StoreConfig()
