"""Entry point for the MarketBarrio Textual app."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from marketbarrio.config import DB_PATH, DEBUG_LOG_PATH
from marketbarrio.persistence import SqliteKeyValueStore
from marketbarrio.session import StorefrontSession
from marketbarrio.storefront_app import StorefrontApp

logger = logging.getLogger(__name__)


def configure_logging(log_path: str | Path = DEBUG_LOG_PATH, level: int = logging.DEBUG) -> None:
    """Send package logs to a file; the terminal belongs to the TUI.

    An unwritable log location leaves logging unconfigured instead of
    stopping the app.
    """
    try:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    package_logger = logging.getLogger("marketbarrio")
    package_logger.setLevel(level)
    package_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marketbarrio", description="MarketBarrio terminal storefront")
    parser.add_argument("--db", default=DB_PATH, help=f"SQLite file for cart and order history (default: {DB_PATH})")
    parser.add_argument("--log", default=DEBUG_LOG_PATH, help="debug log file")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log)

    store = SqliteKeyValueStore(args.db)
    store.bootstrap_schema()
    session = StorefrontSession.load(store)
    logger.info("app_start db=%s", args.db)
    StorefrontApp(session).run()


if __name__ == "__main__":
    main()
