"""Storage of subscribed Telegram chat ids."""

from __future__ import annotations

import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from .logger import LogLevel, get_logger

_CREATE_TABLES = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        tg_id INTEGER NOT NULL UNIQUE
    );
"""


class UserStore(ABC):
    """Interface of a store of subscribed users."""

    @abstractmethod
    def user_exists(self, tg_id: int) -> bool:
        """Return whether the chat id is subscribed."""

    @abstractmethod
    def add_user(self, tg_id: int) -> bool:
        """Subscribe the chat id; return whether it succeeded."""

    @abstractmethod
    def remove_user(self, tg_id: int) -> bool:
        """Unsubscribe the chat id; return whether it succeeded."""

    @abstractmethod
    def all_users(self) -> list[int]:
        """Return every subscribed chat id."""


class SqliteUserStore(UserStore):
    """User store kept in an SQLite file."""

    def __init__(self, path: str | Path) -> None:
        self._log = get_logger()
        self._lock = threading.Lock()
        self._log.log(LogLevel.INFO, "Создание объекта sqlite db, попытка открыть бд")
        try:
            self._conn = sqlite3.connect(
                str(path), check_same_thread=False, isolation_level=None
            )
        except sqlite3.Error as exc:
            self._log.log(LogLevel.ERROR, f"Не получилось открыть sqite db: {exc}")
            raise
        self._log.log(LogLevel.INFO, "Успешное открытие sqlite db")
        self._closed = False
        if self._create_tables():
            self._log.log(LogLevel.INFO, "Успешное создание таблиц после открытия бд")
        else:
            self._log.log(LogLevel.ERROR, "Не удалось создать таблицы")

    def _create_tables(self) -> bool:
        try:
            with self._lock:
                self._conn.executescript(_CREATE_TABLES)
        except sqlite3.Error as exc:
            self._log.log(LogLevel.ERROR, f"Ошибка при создании таблиц: {exc}")
            return False
        return True

    def _execute(self, query: str, params: tuple) -> bool:
        try:
            with self._lock:
                self._conn.execute(query, params)
        except sqlite3.Error as exc:
            self._log.log(LogLevel.ERROR, f"Ошибка при выполнении sql запроса: {exc}")
            return False
        return True

    def user_exists(self, tg_id: int) -> bool:
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT COUNT(*) FROM users WHERE tg_id = ?", (tg_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            self._log.log(
                LogLevel.ERROR,
                "Ошибка при при подготовке запроса на существование пользователя: "
                f"{tg_id}{exc}",
            )
            return False
        return row is not None and row[0] > 0

    def add_user(self, tg_id: int) -> bool:
        self._log.log(LogLevel.INFO, f"Попытка добавить пользователя: {tg_id}")
        ok = self._execute("INSERT INTO users (tg_id) VALUES (?)", (tg_id,))
        if ok:
            self._log.log(LogLevel.INFO, f"Пользователь: {tg_id} добавлен")
        else:
            self._log.log(LogLevel.ERROR, f"Ошибка при попытке добавить пользователя: {tg_id}")
        return ok

    def remove_user(self, tg_id: int) -> bool:
        self._log.log(LogLevel.INFO, f"Попытка удалить пользователя: {tg_id}")
        ok = self._execute("DELETE FROM users WHERE tg_id = ?", (tg_id,))
        if ok:
            self._log.log(LogLevel.INFO, f"Пользователь: {tg_id} удален")
        else:
            self._log.log(LogLevel.ERROR, f"Ошибка при попытке удалить пользователя: {tg_id}")
        return ok

    def all_users(self) -> list[int]:
        try:
            with self._lock:
                rows = self._conn.execute("SELECT tg_id FROM users").fetchall()
        except sqlite3.Error as exc:
            self._log.log(
                LogLevel.ERROR,
                f"Ошибка при подготовке запроса на получение всех пользователей: {exc}",
            )
            return []
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        if not self._closed:
            self._closed = True
            self._conn.close()
            self._log.log(
                LogLevel.INFO, "Закрытие приложения, вызываю декструктор sqlite db"
            )

    def __enter__(self) -> "SqliteUserStore":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()