"""Entry point for the ReadyRead API.

Loads ``.env`` and ``config/config.yml`` from the current directory
and serves the API with uvicorn.  It is intended to be executed from
the project root, for example under Docker, where you only specify a
single Python file to run.

Usage:
    python run.py [--config-path config/config.yml] [--dotenv-path .env]
"""
import sys

from readyread_api.app.server import main


if __name__ == "__main__":
    sys.exit(main())
