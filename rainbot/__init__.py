"""Telegram bot that keeps SQLite subscribers and sends them a daily rain alert."""

__version__ = "0.1.0"