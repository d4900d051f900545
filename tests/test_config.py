import logging
import logging.config

import pytest
from pydantic import ValidationError

from laundry.config.database import create_db_engine
from laundry.config.logging import CustomJsonFormatter, build_logging_config
from laundry.config.settings import Settings


class TestSettings:

    def test_list_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("LAUNDRY_ROOMS", "1,2,3")
        monkeypatch.setenv("PASS_RANGES", '["08-13", "13-18"]')
        monkeypatch.setenv("RESIDENT_WEEKS_VISIBLE", "0, 1")

        config = Settings()

        assert config.LAUNDRY_ROOMS == [1, 2, 3]
        assert config.PASS_RANGES == ["08-13", "13-18"]
        assert config.RESIDENT_WEEKS_VISIBLE == [0, 1]

    def test_database_url_from_components(self):
        config = Settings(DATABASE_URL=None, DB_HOST="db", DB_USER="u", DB_PASSWORD="p", DB_NAME="laundry")

        assert config.get_database_url() == "postgresql+psycopg2://u:p@db:5432/laundry"

    @pytest.mark.parametrize("url", ["postgresql://u:p@db/laundry", "postgres://u:p@db/laundry"])
    def test_bare_postgres_url_uses_psycopg2(self, url):
        assert Settings(DATABASE_URL=url).get_database_url() == "postgresql+psycopg2://u:p@db/laundry"

    def test_sqlite_url_is_kept(self):
        assert Settings(DATABASE_URL="sqlite://").get_database_url() == "sqlite://"

    def test_engine_uses_the_declared_driver(self):
        engine = create_db_engine(Settings(DATABASE_URL=None))

        assert engine.dialect.driver == "psycopg2"
        engine.dispose()

    def test_rejects_unknown_log_format(self):
        with pytest.raises(ValidationError):
            Settings(LOG_FORMAT="xml")

    def test_lock_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(LOCK_DURATION_MINUTES=0)


class TestLoggingConfig:

    def test_json_console(self):
        config = build_logging_config(Settings(LOG_FORMAT="json", LOG_TO_FILE=False))

        assert config["handlers"]["console"]["formatter"] == "json"
        assert "file" not in config["handlers"]
        logging.config.dictConfig(config)

    def test_file_handlers(self, tmp_path):
        config = build_logging_config(Settings(LOG_TO_FILE=True, LOG_DIR=str(tmp_path)))

        assert config["handlers"]["file"]["filename"] == str(tmp_path / "laundry.log")
        assert "error_file" in config["loggers"]["laundry"]["handlers"]

    def test_json_formatter_carries_operation_context(self):
        record = logging.LogRecord("laundry", logging.INFO, __file__, 1, "booked", None, None)
        record.operation = "book pass"
        record.username = "alice"

        output = CustomJsonFormatter("%(message)s").format(record)

        assert '"operation": "book pass"' in output
        assert '"username": "alice"' in output
        assert '"level": "INFO"' in output
