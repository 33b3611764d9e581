from __future__ import annotations

import argparse
import json
import logging
import os

from fichajes.domain.competitions import DEFAULT_COMPETITION, supported_competitions
from fichajes.domain.errors import TransferError
from fichajes.services.transfers import TransferService, make_provider


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape LaLiga.com transfers and print them as JSON."
    )
    parser.add_argument(
        "--comp",
        default=DEFAULT_COMPETITION,
        choices=supported_competitions(),
        help="Competition to scrape.",
    )
    parser.add_argument(
        "--provider",
        default=None,
        choices=("browser", "http"),
        help="Page provider (default: PAGE_PROVIDER or 'browser').",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log strategy outcomes to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log_level = "DEBUG" if args.verbose else os.getenv("API_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s [cli] %(levelname)s: %(message)s",
    )

    service = TransferService(provider=make_provider(args.provider))
    try:
        records = service.get_transfers(args.comp, use_cache=False)
    except TransferError as exc:
        print(f"Error: {exc}")
        return 1

    print(json.dumps([r.as_dict() for r in records], ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
