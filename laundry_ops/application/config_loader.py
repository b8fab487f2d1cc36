"""
Configuration Loader - reads and writes ApplicationConfig.

Sources, in the order a deployment usually layers them:
- a ``.env`` file next to the service (python-dotenv), never overriding
  variables already exported in the process environment
- the process environment (``PRICING_*``, ``CONCURRENCY_*``, ``LOG_*``)
- a YAML rate sheet for sites that keep their tariff under version control
"""

import os
from dataclasses import fields
from decimal import Decimal
from typing import Any

import yaml
from dotenv import load_dotenv

from laundry_ops.application.config import (
    ApplicationConfig,
    ConcurrencyConfig,
    Environment,
    LoggingConfig,
    PricingConfig,
)


def _parse_environment(value: str) -> Environment:
    try:
        return Environment(value)
    except ValueError:
        raise ValueError(f"Invalid environment: {value}") from None


def _merge_section(section_cls: type, data: dict[str, Any] | None, current: Any) -> Any:
    """Rebuild a config section, converting YAML values to the declared field types."""
    data = data or {}
    values = {}
    for section_field in fields(section_cls):
        default = getattr(current, section_field.name)
        value = data.get(section_field.name, default)
        if value is not None and isinstance(default, Decimal):
            # YAML floats such as 0.1 go through str() to stay exact
            value = Decimal(str(value))
        elif value is not None and isinstance(default, (int, float)):
            value = type(default)(value)
        values[section_field.name] = value
    return section_cls(**values)


class ConfigLoader:
    """Builds ApplicationConfig from the environment or a YAML file."""

    @classmethod
    def from_env(cls, env_file: str | None = None) -> ApplicationConfig:
        """
        Read configuration from environment variables.

        Args:
            env_file: Optional ``.env`` file loaded first

        Raises:
            ValueError: If ``ENVIRONMENT`` names an unknown environment
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        return ApplicationConfig(
            environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
            pricing=PricingConfig.from_env(),
            concurrency=ConcurrencyConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_yaml(cls, path: str) -> ApplicationConfig:
        """
        Read configuration from a YAML file; absent sections and keys keep their defaults.

        Example file::

            environment: production
            pricing:
              unit_price_large: 4000
              student_discount_rate: 0.10
            concurrency:
              max_quota_retries: 5
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = ApplicationConfig()
        if "environment" in data:
            config.environment = _parse_environment(data["environment"])
        if "pricing" in data:
            config.pricing = _merge_section(PricingConfig, data["pricing"], config.pricing)
        if "concurrency" in data:
            config.concurrency = _merge_section(
                ConcurrencyConfig, data["concurrency"], config.concurrency
            )
        if "logging" in data:
            config.logging = _merge_section(LoggingConfig, data["logging"], config.logging)
        return config

    @classmethod
    def to_yaml(cls, config: ApplicationConfig) -> str:
        """Serialize a configuration; decimal rates are written as strings."""
        return yaml.dump(config.to_dict(), default_flow_style=False)

    @classmethod
    def save_to_yaml(cls, config: ApplicationConfig, path: str) -> None:
        with open(path, "w") as f:
            f.write(cls.to_yaml(config))
