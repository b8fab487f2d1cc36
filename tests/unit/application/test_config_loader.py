"""
Unit tests for configuration loading
"""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest

from laundry_ops.application.config import ApplicationConfig, Environment, PricingConfig
from laundry_ops.application.config_loader import ConfigLoader


class TestFromEnv:
    """Test loading from the process environment and .env files"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader.from_env()

        assert config.environment == Environment.DEVELOPMENT
        assert config.pricing == PricingConfig()

    def test_invalid_environment(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "qa"}, clear=True):
            with pytest.raises(ValueError, match="Invalid environment: qa"):
                ConfigLoader.from_env()

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PRICING_EXPRESS_SURCHARGE=1500\nENVIRONMENT=testing\n")

        with patch.dict(os.environ, {}, clear=True):
            config = ConfigLoader.from_env(str(env_file))

        assert config.pricing.express_surcharge == Decimal("1500")
        assert config.environment == Environment.TESTING

    def test_process_environment_wins_over_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PRICING_EXPRESS_SURCHARGE=1500\n")

        with patch.dict(os.environ, {"PRICING_EXPRESS_SURCHARGE": "1200"}, clear=True):
            config = ConfigLoader.from_env(str(env_file))

        assert config.pricing.express_surcharge == Decimal("1200")


class TestYaml:
    """Test YAML loading and saving"""

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "environment: staging\n"
            "pricing:\n"
            "  unit_price_large: 4500\n"
            "  student_discount_rate: 0.2\n"
            "concurrency:\n"
            "  max_quota_retries: 1\n"
        )

        config = ConfigLoader.from_yaml(str(path))

        assert config.environment == Environment.STAGING
        assert config.pricing.unit_price_large == Decimal("4500")
        assert config.pricing.student_discount_rate == Decimal("0.2")
        assert config.pricing.unit_price_small == Decimal("2000")
        assert config.concurrency.max_quota_retries == 1
        assert config.logging.level == "INFO"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert ConfigLoader.from_yaml(str(path)) == ApplicationConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "saved.yaml"
        config = ApplicationConfig(
            environment=Environment.PRODUCTION,
            pricing=PricingConfig(delivery_surcharge=Decimal("1250")),
        )

        ConfigLoader.save_to_yaml(config, str(path))
        loaded = ConfigLoader.from_yaml(str(path))

        assert loaded == config

    def test_to_yaml(self):
        content = ConfigLoader.to_yaml(ApplicationConfig())

        assert "environment: development" in content
        assert "unit_price_large: '4000'" in content
