"""Database configuration, engine creation and schema migration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

from apisample.entities import Base

PASSWORD = "password"


class DatabaseInstance(IntEnum):
    MYSQL = 0
    POSTGRES = 1
    SQLITE = 2


class NoDatabaseInstanceError(ValueError):
    def __init__(self, message: str = "no database instance") -> None:
        super().__init__(message)


def _url(driver: str, config: Any, query: dict[str, str]) -> str:
    return URL.create(
        driver,
        username=config.user or None,
        password=config.password or None,
        host=config.host or None,
        port=int(config.port) if config.port else None,
        database=config.database or None,
        query=query,
    ).render_as_string(hide_password=False)


@dataclass(frozen=True)
class ConfigMySQL:
    host: str = "localhost"
    port: str = "3306"
    user: str = "app"
    password: str = PASSWORD
    database: str = "api_database"
    driver: str = "mysql"

    def dsn(self) -> str:
        return _url("mysql+pymysql", self, {"charset": "utf8mb4"})


@dataclass(frozen=True)
class ConfigPostgres:
    host: str = ""
    port: str = ""
    user: str = ""
    password: str = ""
    database: str = ""
    driver: str = ""

    def dsn(self) -> str:
        return _url("postgresql", self, {"sslmode": "disable"})


@dataclass(frozen=True)
class ConfigSQLite:
    host: str = ""
    port: str = ""
    user: str = ""
    password: str = ""
    database: str = ""
    driver: str = ""


def load_mysql_config(environ: Optional[Mapping[str, str]] = None) -> ConfigMySQL:
    """Read MySQL settings from ``DB_*`` variables (default: the process environment)."""
    env = os.environ if environ is None else environ
    values = {}
    for f in fields(ConfigMySQL):
        value = env.get("DB_NAME" if f.name == "database" else f"DB_{f.name.upper()}")
        if value:
            values[f.name] = value
    return ConfigMySQL(**values)


def load_postgres_config(environ: Optional[Mapping[str, str]] = None) -> ConfigPostgres:
    return ConfigPostgres()


def load_sqlite_config(environ: Optional[Mapping[str, str]] = None) -> ConfigSQLite:
    return ConfigSQLite()


def new_database(instance: int, environ: Optional[Mapping[str, str]] = None) -> Engine:
    """Open and verify a connection to the chosen database back end."""
    try:
        kind = DatabaseInstance(instance)
    except ValueError:
        raise NoDatabaseInstanceError() from None

    if kind is DatabaseInstance.MYSQL:
        url = load_mysql_config(environ).dsn()
    elif kind is DatabaseInstance.POSTGRES:
        url = load_postgres_config(environ).dsn()
    else:
        url = f"sqlite:///{load_sqlite_config(environ).database}"

    engine = create_engine(url)
    try:
        engine.connect().close()
    except Exception:
        engine.dispose()
        raise
    return engine


def close(engine: Engine) -> None:
    engine.dispose()


def migrate(engine: Engine, *models: type[Base]) -> None:
    """Create the tables of ``models`` that do not exist yet."""
    if models:
        Base.metadata.create_all(engine, tables=[model.__table__ for model in models])