"""Database connection and logging set-up driven by the environment."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "scalable_api"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FORMAT = "[%(filename)s:%(lineno)d %(funcName)s] %(asctime)s [%(levelname)s] %(message)s"

log = logging.getLogger(LOGGER_NAME)


class DatabaseConnectionError(RuntimeError):
    """The database could not be reached."""


def _load_env() -> None:
    load_dotenv(os.path.join(os.getcwd(), ".env"))


def connect_to_db(dsn: Optional[str] = None) -> Engine:
    """Open and verify a database engine; ``DB_DSN`` is used when no DSN is given."""
    _load_env()
    if dsn is None:
        dsn = os.environ.get("DB_DSN", "")
    if not dsn:
        raise DatabaseConnectionError("Error connecting to database. Error : no DSN configured")
    try:
        if "://" in dsn:
            engine = create_engine(dsn)
        else:
            # libpq keyword form, e.g. "host=localhost user=user dbname=app"
            engine = create_engine("postgresql://", connect_args={"dsn": dsn})
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, ImportError) as exc:
        log.error("Error connecting to database. Error : %s", exc)
        raise DatabaseConnectionError(f"Error connecting to database. Error : {exc}") from exc
    return engine


def logger_level(value: str) -> int:
    """Map ``DEBUG`` and ``TRACE`` to their levels; anything else is INFO."""
    if value == "DEBUG":
        return logging.DEBUG
    if value == "TRACE":
        return TRACE
    return logging.INFO


def init_log() -> logging.Logger:
    """Configure the package logger from ``LOG_LEVEL`` and return it."""
    _load_env()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logger_level(os.environ.get("LOG_LEVEL", "")))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=TIMESTAMP_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger