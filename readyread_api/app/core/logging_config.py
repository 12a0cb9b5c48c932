"""
Logging configuration for the application.

``setup_logging`` sets the root logger level on every call and attaches
a single console handler the first time.  uvicorn is started with
``log_config=None`` (see ``server.py``) so its ``uvicorn.*`` loggers
propagate here as well and every line shares one format.

SQLAlchemy logs each emitted statement on ``sqlalchemy.engine`` at
``INFO``.  That logger is kept at ``WARNING`` unless the application
runs at ``DEBUG``, when statements and their parameters are logged too.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    # getLevelName maps unknown names to "Level <name>".
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str = "INFO") -> None:
    """Apply ``level`` (e.g. ``"debug"``; unknown names mean ``INFO``)."""
    root = logging.getLogger()
    numeric_level = _level(level)
    root.setLevel(numeric_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if numeric_level <= logging.DEBUG else logging.WARNING
    )

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root.addHandler(handler)
