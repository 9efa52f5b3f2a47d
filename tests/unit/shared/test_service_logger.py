"""
Service Logger and Configuration Unit Tests
"""
import logging

import pytest

from core.config import AppConfig, CarrierConfig, InfraConfig, LoggingConfig
from core.logger import setup_service_logger

pytestmark = pytest.mark.unit


class TestSetupServiceLogger:

    def test_level_and_handlers(self):
        logger = setup_service_logger("test_logger_level", LoggingConfig(log_level="warning"))

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_handlers_attached_once(self):
        config = LoggingConfig()

        first = setup_service_logger("test_logger_once", config)
        second = setup_service_logger("test_logger_once", config)

        assert first is second
        assert len(second.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "service.log"

        logger = setup_service_logger(
            "test_logger_file",
            LoggingConfig(log_file=str(log_file), enable_console=False),
        )
        logger.error("disk check")
        for handler in logger.handlers:
            handler.flush()

        assert [type(h) for h in logger.handlers] == [logging.FileHandler]
        assert "disk check" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()


class TestConfig:

    def test_carrier_credentials(self):
        assert CarrierConfig().has_credentials is False
        assert CarrierConfig(email="ops@example.com", password="secret").has_credentials is True

    def test_postgres_dsn(self):
        config = InfraConfig(postgres_host="db", postgres_port=6543, postgres_db="shop", postgres_user="u", postgres_password="p")

        assert config.postgres_dsn == "postgresql://u:p@db:6543/shop"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SHIPROCKET_EMAIL", "ops@example.com")
        monkeypatch.setenv("SHIPROCKET_PASSWORD", "secret")
        monkeypatch.setenv("SHIPROCKET_BASE_URL", "https://carrier.test/v1/external/")
        monkeypatch.setenv("LOW_STOCK_THRESHOLD", "3")
        monkeypatch.setenv("POSTGRES_PORT", "not-a-port")
        monkeypatch.delenv("SHIPROCKET_PICKUP_LOCATION", raising=False)

        config = AppConfig.from_env()

        assert config.carrier.has_credentials is True
        assert config.carrier.base_url == "https://carrier.test/v1/external"
        assert config.carrier.pickup_location == "Default"
        assert config.inventory.low_stock_threshold == 3
        assert config.infrastructure.postgres_port == 5432

    def test_unknown_log_level_falls_back(self):
        assert LoggingConfig(log_level="verbose").level == logging.INFO
        assert LoggingConfig(log_level="debug").level == logging.DEBUG

    def test_reload_settings_reads_environment(self, monkeypatch):
        from core.config import get_settings, reload_settings

        original = get_settings()
        monkeypatch.setenv("CATALOG_SERVICE_URL", "http://catalog.internal:9000")
        try:
            assert reload_settings().services.catalog_service_url == "http://catalog.internal:9000"
            assert get_settings() is not original
        finally:
            monkeypatch.delenv("CATALOG_SERVICE_URL")
            reload_settings()
