"""Command line entry point that runs the bot and its scheduler."""

from __future__ import annotations

import argparse
import os
from functools import partial
from typing import Optional, Sequence

from .bot import RainBot, TelegramApi
from .database import SqliteUserStore
from .scheduler import DEFAULT_ALERT_HOUR, Scheduler
from .weather import fetch_weather

DEFAULT_DB = "tg_users.db"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rainbot", description="Telegram bot sending morning rain alerts."
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("RAINBOT_TOKEN"),
        help="Telegram bot token (default: $RAINBOT_TOKEN)",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("RAINBOT_WEATHER_HOST"),
        help="weather API host (default: $RAINBOT_WEATHER_HOST)",
    )
    parser.add_argument(
        "--target",
        default=os.environ.get("RAINBOT_WEATHER_TARGET"),
        help="weather API request path (default: $RAINBOT_WEATHER_TARGET)",
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite file of subscribers")
    parser.add_argument(
        "--alert-hour",
        type=int,
        default=DEFAULT_ALERT_HOUR,
        choices=range(24),
        metavar="HOUR",
        help="local hour at which the forecast is checked",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    for name in ("token", "host", "target"):
        if not getattr(args, name):
            parser.error(f"--{name} is required")

    with SqliteUserStore(args.db) as store:
        bot = RainBot(TelegramApi(args.token), store)
        scheduler = Scheduler(
            bot, partial(fetch_weather, args.host, args.target), args.alert_hour
        )
        scheduler.start()
        try:
            bot.start()
        finally:
            scheduler.stop()
    return 0