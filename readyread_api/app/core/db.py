"""
Database engine and schema.

This module builds the SQLAlchemy engine shared by every storage
(``create_db_engine``), checks connectivity at startup
(``ping_database``) and describes the four tables as SQLAlchemy Core
``Table`` objects on ``metadata``.

The engine owns a connection pool.  Each storage call borrows a
connection for one statement and gives it back, so concurrent requests
never share a live connection.  Per‑call deadlines are derived from
``database.requestTimeout``: the pool checkout waits at most that long,
and on PostgreSQL each connection is opened with a
``statement_timeout`` of the same length.  SQLite (used by the tests)
gets it as its busy timeout instead.

Schema migrations are not handled here.  Production databases are
expected to have the tables already; ``metadata.create_all`` is what
the test suite uses to build a scratch schema.
"""

import logging
from typing import Any, Dict, Tuple

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    SmallInteger,
    Table,
    Text,
    create_engine,
    false,
    func,
    text,
)
from sqlalchemy.engine import URL, Engine, make_url

from .config import DatabaseSettings

POSTGRES_DRIVER = "postgresql+psycopg"

metadata = MetaData()

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
BigId = BigInteger().with_variant(Integer, "sqlite")
SmallId = SmallInteger().with_variant(Integer, "sqlite")

users = Table(
    "users",
    metadata,
    Column("id", BigId, primary_key=True, autoincrement=True),
    Column("username", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
    Column("verified", Boolean, nullable=False, server_default=false()),
    Column("address", Text, nullable=True),
    Column("phone_number", Text, nullable=True),
    Column("registered_at", DateTime, nullable=False, server_default=func.now()),
)

authors = Table(
    "authors",
    metadata,
    Column("id", BigId, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("surname", Text, nullable=False),
)

genres = Table(
    "genres",
    metadata,
    Column("id", SmallId, primary_key=True, autoincrement=True),
    Column("genre", Text, nullable=False),
)

languages = Table(
    "languages",
    metadata,
    Column("id", SmallId, primary_key=True, autoincrement=True),
    Column("language", Text, nullable=False),
)


def make_database_url(dsn: str) -> URL:
    """Translate a libpq‑style DSN into an SQLAlchemy URL.

    * ``postgres://`` and ``postgresql://`` URLs get the psycopg driver;
    * key/value strings (``host=db dbname=readyread user=app``) are
      parsed with psycopg's own conninfo parser;
    * anything else with a scheme (``sqlite:///readyread.db``,
      ``postgresql+psycopg://...``) is taken as an SQLAlchemy URL.
    """
    dsn = dsn.strip()
    for prefix in ("postgres://", "postgresql://"):
        if dsn.startswith(prefix):
            return make_url(POSTGRES_DRIVER + "://" + dsn[len(prefix):])
    if "://" in dsn:
        return make_url(dsn)

    from psycopg.conninfo import conninfo_to_dict

    params = conninfo_to_dict(dsn)
    port = params.pop("port", None)
    return URL.create(
        POSTGRES_DRIVER,
        username=params.pop("user", None),
        password=params.pop("password", None),
        host=params.pop("host", None),
        port=int(port) if port else None,
        database=params.pop("dbname", None),
        query={key: str(value) for key, value in params.items()},
    )


def _engine_options(url: URL, settings: DatabaseSettings) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    connect_args: Dict[str, Any] = {}
    options: Dict[str, Any] = {"pool_pre_ping": True}
    backend = url.get_backend_name()
    if backend == "sqlite":
        connect_args["check_same_thread"] = False
        connect_args["timeout"] = settings.request_timeout
        return connect_args, options

    if backend == "postgresql":
        connect_args["connect_timeout"] = settings.connection_timeout
        connect_args["options"] = f"-c statement_timeout={settings.request_timeout * 1000}"
    options.update(
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.request_timeout,
    )
    return connect_args, options


def create_db_engine(settings: DatabaseSettings) -> Engine:
    """Create the pooled engine described by ``settings``."""
    logger = logging.getLogger(__name__)
    url = make_database_url(settings.dsn)
    connect_args, options = _engine_options(url, settings)
    logger.info("creating database engine for %s", url.render_as_string(hide_password=True))
    return create_engine(url, connect_args=connect_args, **options)


def ping_database(engine: Engine) -> None:
    """Open a connection and run ``SELECT 1``; driver errors propagate."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
