"""
Tests for configuration and logging helpers
"""
import pytest

from storefront import config
from storefront.errors import ERROR_CREDENTIALS_MISSING, ConfigurationError
from storefront.logging import mask_phone, sanitize_id_for_logging, sanitize_string_for_logging


class TestConfig:
    def test_site_config(self):
        assert config.get_site_config() == ("https://shop.test", "ck_test", "cs_test")

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(config, "WOOCOMMERCE_CONSUMER_SECRET", "")

        with pytest.raises(ConfigurationError, match=ERROR_CREDENTIALS_MISSING):
            config.get_site_config()

    def test_missing_site_url(self, monkeypatch):
        monkeypatch.setattr(config, "WORDPRESS_SITE_URL", "")

        with pytest.raises(ConfigurationError, match="WORDPRESS_SITE_URL"):
            config.get_site_config()

    @pytest.mark.parametrize("base,expected", [
        ("https://shop.test", "https://shop.test/wp-json"),
        ("https://shop.test/wp-json/", "https://shop.test/wp-json"),
    ])
    def test_wp_api_base(self, monkeypatch, base, expected):
        monkeypatch.setattr(config, "WP_API_URL", base)

        assert config.get_wp_api_base() == expected


class TestLogSanitizers:
    def test_id_escaped_and_truncated(self):
        assert sanitize_id_for_logging("p1\nFAKE LOG LINE") == "p1\\nFAKE LOG LIN"
        assert sanitize_id_for_logging(None) == "N/A"

    def test_string_shortened(self):
        assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."
        assert sanitize_string_for_logging("") == "N/A"

    def test_mask_phone(self):
        assert mask_phone("+880 1712-345678") == "*********5678"
        assert mask_phone("") == "N/A"
