"""Entry point for the pricecard Textual app."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pricecard.bootstrap import Location, SyncController
from pricecard.config import LOG_LEVEL, LOG_PATH, SHARE_BASE_URL
from pricecard.persistence import InMemoryCache, SqliteCache
from pricecard.receipt_app import PriceCardApp


def configure_logging(log_path: str = LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Send logs to a file; the terminal belongs to the TUI."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=path,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pricecard", description="Priced menu editor and quote calculator.")
    parser.add_argument("link", nargs="?", default=None, help="share link (full URL or bare token)")
    parser.add_argument("--edit", action="store_true", help="open in editor mode even when a link is given")
    parser.add_argument("--no-cache", action="store_true", help="do not read or write the local cache")
    parser.add_argument("--base-url", default=SHARE_BASE_URL, help="page address share links are built on")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    args = build_parser().parse_args(argv)
    configure_logging()
    cache = InMemoryCache() if args.no_cache else SqliteCache()
    controller = SyncController(cache, Location.from_link(args.link, args.base_url))
    PriceCardApp(controller, force_edit=args.edit).run()


if __name__ == "__main__":
    main()
