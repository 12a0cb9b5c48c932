"""
HTTP server runner.

Loads the settings, builds the application and serves it with uvicorn
on ``0.0.0.0:<http.port>``.  The listener applies ``http.maxHeaderBytes``
as the largest accepted request head; read and write deadlines are
enforced by the application middleware.

The process stops gracefully on SIGINT, SIGTERM, SIGHUP, SIGQUIT and
SIGABRT: uvicorn stops accepting connections, lets in‑flight requests
finish and then runs the application shutdown, which closes the
database pool.
"""

import argparse
import contextlib
import logging
import signal
import threading
from typing import Iterator, List, Optional

import uvicorn

from .core.config import ConfigError, Settings, load_settings
from .core.logging_config import setup_logging
from .main import create_app

HOST = "0.0.0.0"
GRACEFUL_SHUTDOWN_TIMEOUT = 5

SHUTDOWN_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT", "SIGABRT")
    if hasattr(signal, name)
)


class Server(uvicorn.Server):
    """uvicorn server that shuts down on every signal in ``SHUTDOWN_SIGNALS``."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        logger = logging.getLogger(__name__)
        if threading.current_thread() is not threading.main_thread():
            # Signals can only be handled in the main thread.
            yield
            return
        original_handlers = {sig: signal.signal(sig, self.handle_exit) for sig in SHUTDOWN_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in original_handlers.items():
                signal.signal(sig, handler)
        if self.should_exit:
            logger.info("server stopped")


def build_server(settings: Settings) -> Server:
    """Create the uvicorn server for ``settings``."""
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=HOST,
        port=settings.http.port,
        http="h11",
        lifespan="on",
        h11_max_incomplete_event_size=settings.http.max_header_size,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_TIMEOUT,
        log_config=None,
    )
    return Server(config)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the ReadyRead API server.")
    parser.add_argument("--config-path", default=None, help="YAML config file (default: $CONFIG_PATH or config/config.yml)")
    parser.add_argument("--dotenv-path", default=None, help="dotenv file (default: .env)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the server until a shutdown signal arrives.

    Returns the process exit code: 0 after a graceful shutdown, 1 when
    the configuration cannot be loaded or the application fails to
    start (for instance when the database is unreachable).
    """
    args = parse_args(argv)
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(args.config_path, args.dotenv_path)
    except ConfigError as e:
        logger.error("failed to load configuration: %s", e)
        return 1

    server = build_server(settings)
    logger.info("starting server on %s:%s", HOST, settings.http.port)
    server.run()
    if not server.started:
        logger.error("server failed to start")
        return 1
    return 0
