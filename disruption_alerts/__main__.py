"""Command-line entry point: ``python -m disruption_alerts [--news-only]``."""

from __future__ import annotations

import argparse

from .config import CITIES
from .workflows.alert_pipeline import run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fetch disruptions and update hotel alerts.")
    parser.add_argument(
        "--news-only",
        action="store_true",
        help="skip the Grok scout and only read the news feed",
    )
    parser.add_argument(
        "--city",
        action="append",
        dest="cities",
        help="city to scout (repeatable); defaults to all configured cities",
    )
    args = parser.parse_args(argv)
    run(news_only=args.news_only, cities=args.cities or CITIES)


if __name__ == "__main__":
    main()
