"""Tests for settings validation and structured logging."""
import json
import logging

import pytest
from pydantic import ValidationError

from core.config import Settings
from core.logging import BookingJsonFormatter, LogContext, build_formatter


@pytest.mark.unit
class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.api_prefix == "/api/v1"
        assert settings.is_sqlite
        assert settings.is_development

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, app_env="qa")

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, restaurant_timezone="Mars/Olympus")

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://db/tablebook")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql://db/tablebook"
        assert not settings.is_sqlite


@pytest.mark.unit
class TestLogging:

    def test_production_uses_json(self):
        formatter = build_formatter(Settings(_env_file=None, app_env="production"))

        assert isinstance(formatter, BookingJsonFormatter)

    def test_staging_uses_json(self):
        formatter = build_formatter(Settings(_env_file=None, app_env="staging"))

        assert isinstance(formatter, BookingJsonFormatter)

    def test_development_uses_plain_text(self):
        formatter = build_formatter(Settings(_env_file=None, app_env="development"))

        assert not isinstance(formatter, BookingJsonFormatter)

    def test_json_record_carries_context(self):
        formatter = BookingJsonFormatter(
            fmt="%(timestamp)s %(level)s %(name)s %(message)s",
            app_name="Table Booking Service",
            environment="staging",
        )
        record = logging.LogRecord("services", logging.WARNING, __file__, 10, "rejected", None, None)
        record.error_code = "no_availability"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "rejected"
        assert payload["level"] == "WARNING"
        assert payload["error_code"] == "no_availability"
        assert payload["environment"] == "staging"

    def test_log_context_merges_extra(self, caplog):
        log = LogContext(logging.getLogger("tests.booking"), operation="create_reservation", customer_id=10)

        with caplog.at_level(logging.WARNING, logger="tests.booking"):
            log.warning("rejected", extra={"error_code": "no_availability"})

        record = caplog.records[-1]
        assert record.operation == "create_reservation"
        assert record.customer_id == 10
        assert record.error_code == "no_availability"
