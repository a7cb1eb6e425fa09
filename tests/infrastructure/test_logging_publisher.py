"""Tests for the logging event publisher, settings and logging setup."""

import json
import logging
from decimal import Decimal
from pathlib import Path

from sms.domain.events import SaleCancelled, SaleCreated, SaleEventItem
from sms.infrastructure.config import DEFAULT_DATA_DIR, Settings
from sms.infrastructure.events.logging_publisher import LoggingEventPublisher, event_payload
from sms.infrastructure.logging_setup import configure_logging

ITEM = SaleEventItem(
    product_id="p1",
    product_name="Widget",
    product_sku="WID-001",
    quantity=4,
    unit_price=Decimal("100.00"),
    discount=Decimal("40.00"),
    total_amount=Decimal("360.00"),
)


def _created() -> SaleCreated:
    return SaleCreated(
        sale_id="s1",
        sale_number="SALE-20240501-0001",
        customer_id="c1",
        customer_name="Alice Smith",
        branch_id="b1",
        branch_name="Downtown",
        total_amount=Decimal("360.00"),
        items=(ITEM,),
        item_count=1,
    )


class TestLoggingEventPublisher:

    def test_payload_is_json(self):
        payload = json.loads(event_payload(_created()))
        assert payload["event"] == "SaleCreated"
        assert payload["sale_number"] == "SALE-20240501-0001"
        assert payload["total_amount"] == "360.00"
        assert payload["items"][0]["product_sku"] == "WID-001"

    def test_created_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO):
            LoggingEventPublisher().publish(_created())
        [record] = [r for r in caplog.records if r.name.endswith("logging_publisher")]
        assert record.levelno == logging.INFO
        assert "SaleCreated" in record.getMessage()

    def test_cancelled_logged_at_warning(self, caplog):
        event = SaleCancelled(
            sale_id="s1",
            sale_number="SALE-20240501-0001",
            customer_id="c1",
            customer_name="Alice Smith",
            branch_id="b1",
            branch_name="Downtown",
            total_amount=Decimal("360.00"),
            skipped_product_ids=("p9",),
        )
        with caplog.at_level(logging.INFO):
            LoggingEventPublisher().publish(event)
        [record] = [r for r in caplog.records if r.name.endswith("logging_publisher")]
        assert record.levelno == logging.WARNING
        assert '"skipped_product_ids": ["p9"]' in record.getMessage()


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SMS_DATA_DIR", "SMS_LOG_LEVEL", "SMS_LOG_DIR"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.log_level == "INFO"
        assert settings.log_dir is None

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SMS_DATA_DIR", str(tmp_path / "data"))
        monkeypatch.setenv("SMS_LOG_LEVEL", "debug")
        monkeypatch.setenv("SMS_LOG_DIR", str(tmp_path / "logs"))
        settings = Settings.from_env()
        assert settings.data_dir == tmp_path / "data"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == tmp_path / "logs"

    def test_data_dir_override(self):
        settings = Settings(log_level="WARNING").with_data_dir(Path("/srv/sms"))
        assert settings.data_dir == Path("/srv/sms")
        assert settings.log_level == "WARNING"
        assert Settings().with_data_dir(None) == Settings()


class TestConfigureLogging:

    def test_installs_handlers_once(self, tmp_path):
        logger = logging.getLogger("sms")
        saved = list(logger.handlers)
        logger.handlers.clear()
        try:
            settings = Settings(log_level="DEBUG", log_dir=tmp_path)
            configure_logging(settings)
            configure_logging(settings)
            assert len(logger.handlers) == 2
            assert logger.level == logging.DEBUG
            logger.debug("hello from the test")
            for handler in logger.handlers:
                handler.flush()
            assert "hello from the test" in (tmp_path / "sms.log").read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved
            logger.setLevel(logging.NOTSET)
