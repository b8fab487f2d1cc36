"""
Application configuration: the tariff, quota conflict retries and logging.

One ApplicationConfig is shared by the process (see ``get_config``); tests and
embedding code install their own with ``set_config``.
"""

import os
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from laundry_ops.domain.constants import DEFAULT_CURRENCY
from laundry_ops.domain.services.rate_card import RateCard


class Environment(Enum):
    """Deployment the engine runs in."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class PricingConfig:
    """Rate table configuration, prices in whole currency units."""

    unit_price_large: Decimal = Decimal("4000")
    unit_price_small: Decimal = Decimal("2000")
    per_kg_detailed_rate: Decimal = Decimal("600")
    drying_rate_per_kg: Decimal = Decimal("150")
    ironing_rate_per_kg: Decimal = Decimal("800")
    express_surcharge: Decimal = Decimal("1000")
    delivery_surcharge: Decimal = Decimal("1000")
    monthly_quota_ceiling: Decimal = Decimal("40")  # kg per billing period
    student_discount_rate: Decimal = Decimal("0.10")  # 10%
    opening_discount_rate: Decimal = Decimal("0.05")  # 5%
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_env(cls) -> "PricingConfig":
        """Read the tariff from ``PRICING_*`` variables."""
        return cls(
            unit_price_large=Decimal(os.getenv("PRICING_UNIT_PRICE_LARGE", "4000")),
            unit_price_small=Decimal(os.getenv("PRICING_UNIT_PRICE_SMALL", "2000")),
            per_kg_detailed_rate=Decimal(os.getenv("PRICING_PER_KG_DETAILED_RATE", "600")),
            drying_rate_per_kg=Decimal(os.getenv("PRICING_DRYING_RATE_PER_KG", "150")),
            ironing_rate_per_kg=Decimal(os.getenv("PRICING_IRONING_RATE_PER_KG", "800")),
            express_surcharge=Decimal(os.getenv("PRICING_EXPRESS_SURCHARGE", "1000")),
            delivery_surcharge=Decimal(os.getenv("PRICING_DELIVERY_SURCHARGE", "1000")),
            monthly_quota_ceiling=Decimal(os.getenv("PRICING_MONTHLY_QUOTA_CEILING", "40")),
            student_discount_rate=Decimal(os.getenv("PRICING_STUDENT_DISCOUNT_RATE", "0.10")),
            opening_discount_rate=Decimal(os.getenv("PRICING_OPENING_DISCOUNT_RATE", "0.05")),
            currency=os.getenv("PRICING_CURRENCY", DEFAULT_CURRENCY),
        )

    def to_rate_card(self) -> RateCard:
        """
        Build the domain rate card.

        Raises:
            ValueError: If a price is negative or a discount rate is outside [0, 1)
        """
        return RateCard(
            unit_price_large=self.unit_price_large,
            unit_price_small=self.unit_price_small,
            per_kg_detailed_rate=self.per_kg_detailed_rate,
            drying_rate_per_kg=self.drying_rate_per_kg,
            ironing_rate_per_kg=self.ironing_rate_per_kg,
            express_surcharge=self.express_surcharge,
            delivery_surcharge=self.delivery_surcharge,
            monthly_quota_ceiling=self.monthly_quota_ceiling,
            student_discount_rate=self.student_discount_rate,
            opening_discount_rate=self.opening_discount_rate,
            currency=self.currency,
        )


@dataclass
class ConcurrencyConfig:
    """Retry configuration for conflicting quota increments."""

    max_quota_retries: int = 3
    retry_base_delay: float = 0.05  # seconds
    retry_max_delay: float = 1.0
    backoff_factor: float = 2.0

    @classmethod
    def from_env(cls) -> "ConcurrencyConfig":
        return cls(
            max_quota_retries=int(os.getenv("CONCURRENCY_MAX_QUOTA_RETRIES", "3")),
            retry_base_delay=float(os.getenv("CONCURRENCY_RETRY_BASE_DELAY", "0.05")),
            retry_max_delay=float(os.getenv("CONCURRENCY_RETRY_MAX_DELAY", "1.0")),
            backoff_factor=float(os.getenv("CONCURRENCY_BACKOFF_FACTOR", "2.0")),
        )


_DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass
class LoggingConfig:
    """Handlers installed on the package logger by ``configure_logging``."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: str | None = None  # rotating file handler when set
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", _DEFAULT_LOG_FORMAT),
            file=os.getenv("LOG_FILE") or None,
            max_bytes=int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "3")),
        )


@dataclass
class ApplicationConfig:
    """Complete engine configuration."""

    environment: Environment = Environment.DEVELOPMENT
    pricing: PricingConfig = field(default_factory=PricingConfig)
    concurrency: ConcurrencyConfig = field(default_factory=ConcurrencyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary for YAML export; Decimal tariff values become strings."""
        pricing = {
            name: str(value) if isinstance(value, Decimal) else value
            for name, value in asdict(self.pricing).items()
        }
        return {
            "environment": self.environment.value,
            "pricing": pricing,
            "concurrency": asdict(self.concurrency),
            "logging": asdict(self.logging),
        }

    def validate(self) -> bool:
        """
        Check the configuration before the engine is wired.

        Returns:
            True; invalid settings raise instead

        Raises:
            ValueError: On a negative price, a discount rate outside [0, 1),
                negative retries or delays, or debug logging in production
        """
        # RateCard checks prices and discount rates
        self.pricing.to_rate_card()

        if self.concurrency.max_quota_retries < 0:
            raise ValueError("Max quota retries cannot be negative")
        if self.concurrency.retry_base_delay < 0 or self.concurrency.retry_max_delay < 0:
            raise ValueError("Retry delays cannot be negative")
        if self.concurrency.backoff_factor < 1:
            raise ValueError("Backoff factor must be at least 1")

        if self.environment == Environment.PRODUCTION and self.logging.level.upper() == "DEBUG":
            raise ValueError("Debug logging should be disabled in production")

        return True


_config: ApplicationConfig | None = None


def get_config() -> ApplicationConfig:
    """Process-wide configuration, read from the environment on first use."""
    global _config
    if _config is None:
        # Imported here, the loader imports this module
        from laundry_ops.application import config_loader

        _config = config_loader.ConfigLoader.from_env()
    return _config


def set_config(config: ApplicationConfig) -> None:
    global _config
    _config = config


def reset_config() -> None:
    """Forget the current configuration; the next ``get_config`` reloads it."""
    global _config
    _config = None
