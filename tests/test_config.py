import logging

import pytest
from sqlalchemy import text

from scalable_api import config


@pytest.mark.parametrize(
    "value, expected",
    [
        ("DEBUG", logging.DEBUG),
        ("TRACE", config.TRACE),
        ("INFO", logging.INFO),
        ("", logging.INFO),
        ("debug", logging.INFO),
        ("WARNING", logging.INFO),
    ],
)
def test_logger_level(value, expected):
    assert config.logger_level(value) == expected


def test_trace_is_below_debug():
    assert config.logger_level("TRACE") < config.logger_level("DEBUG")


def test_init_log_reads_level_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    logger = config.init_log()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_init_log_defaults_to_info(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    logger = config.init_log()
    assert logger.level == logging.INFO


def test_init_log_reads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    (tmp_path / ".env").write_text("LOG_LEVEL=TRACE\n")
    logger = config.init_log()
    assert logger.level == config.TRACE


def test_init_log_does_not_stack_handlers(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config.init_log()
    logger = config.init_log()
    assert len(logger.handlers) == 1


def test_connect_to_db_with_explicit_dsn(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    engine = config.connect_to_db("sqlite://")
    with engine.connect() as connection:
        assert connection.execute(text("SELECT 1")).scalar() == 1
    engine.dispose()


def test_connect_to_db_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    db_file = tmp_path / "app.db"
    monkeypatch.setenv("DB_DSN", f"sqlite:///{db_file}")
    engine = config.connect_to_db()
    assert str(engine.url) == f"sqlite:///{db_file}"
    engine.dispose()


def test_connect_to_db_without_dsn_raises(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DB_DSN", raising=False)
    with pytest.raises(config.DatabaseConnectionError):
        config.connect_to_db()


def test_connect_to_db_unreachable_raises(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    missing = tmp_path / "no" / "such" / "dir" / "app.db"
    with pytest.raises(config.DatabaseConnectionError):
        config.connect_to_db(f"sqlite:///{missing}")


def test_connect_to_db_bad_scheme_raises(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(config.DatabaseConnectionError):
        config.connect_to_db("nosuchdialect://localhost/app")