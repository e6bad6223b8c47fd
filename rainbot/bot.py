"""Telegram bot that manages subscriptions and sends rain alerts."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .database import UserStore
from .logger import LogLevel, get_logger

API_URL = "https://api.telegram.org"

START_REPLY = (
    "Привет! Я отправляю подписанным пользователям предупреждения о дожде,"
    " чтобы подписаться на уведомления, отправьте команду /subscribe "
)
ALREADY_SUBSCRIBED = "Вы уже подписаны на уведомления"
SUBSCRIBED = (
    "Вы подписались на уведомления,"
    " для того, чтобы отписаться, отправьте команду /reject"
)
NOT_SUBSCRIBED = "Вы не были подписаны, желаете подписаться? /subscribe"
UNSUBSCRIBED = (
    "Уведомления больше не будут приходить,"
    " для того чтобы снова получать уведомления, отправьте /subscribe"
)
RAIN_ALERT = "Ожидается дождь"


class TelegramError(Exception):
    """Raised when the Telegram Bot API reports a failure."""


class TelegramApi:
    """Minimal client of the Telegram Bot API."""

    def __init__(self, token: str, session: Optional[requests.Session] = None) -> None:
        self._base = f"{API_URL}/bot{token}"
        self._session = session or requests.Session()

    def _call(self, method: str, payload: Mapping[str, Any], timeout: float) -> Any:
        try:
            response = self._session.post(
                f"{self._base}/{method}", json=dict(payload), timeout=timeout
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise TelegramError(f"{method}: {exc}") from exc
        if not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description") if isinstance(data, dict) else data
            raise TelegramError(f"{method}: {description}")
        return data.get("result")

    def send_message(self, chat_id: int, text: str) -> Any:
        """Send a text message to a chat and return the sent message."""
        return self._call("sendMessage", {"chat_id": chat_id, "text": text}, 30)

    def get_updates(self, offset: Optional[int] = None, timeout: int = 10) -> list:
        """Long-poll for updates starting at ``offset``."""
        payload: dict[str, Any] = {"timeout": timeout}
        if offset is not None:
            payload["offset"] = offset
        return list(self._call("getUpdates", payload, timeout + 10) or [])


def _command_of(text: str) -> Optional[str]:
    if not text.startswith("/"):
        return None
    word = text[1:].split(maxsplit=1)[0] if text[1:].strip() else ""
    return word.split("@", 1)[0] or None


class RainBot:
    """Answers subscription commands and broadcasts rain alerts."""

    def __init__(self, api: TelegramApi, store: UserStore) -> None:
        self.api = api
        self.store = store
        self._offset: Optional[int] = None
        self._log = get_logger()

    def handle_message(self, message: Mapping[str, Any]) -> Optional[str]:
        """Answer a command message; return the reply sent, or None if ignored."""
        command = _command_of(message.get("text") or "")
        chat = message.get("chat") or {}
        chat_id = chat.get("id")
        if command is None or chat_id is None:
            return None

        if command == "start":
            reply = START_REPLY
        elif command == "subscribe":
            if self.store.user_exists(chat_id):
                reply = ALREADY_SUBSCRIBED
            else:
                self.store.add_user(chat_id)
                reply = SUBSCRIBED
        elif command == "reject":
            if not self.store.user_exists(chat_id):
                reply = NOT_SUBSCRIBED
            else:
                self.store.remove_user(chat_id)
                reply = UNSUBSCRIBED
        else:
            return None

        self.api.send_message(chat_id, reply)
        return reply

    def handle_update(self, update: Mapping[str, Any]) -> Optional[str]:
        """Dispatch the message carried by an update, if any."""
        message = update.get("message")
        if not message:
            return None
        return self.handle_message(message)

    def send_alert_to_all_users(self) -> list[int]:
        """Send the rain alert to every subscriber and return their ids."""
        users = self.store.all_users()
        if not users:
            self._log.log(LogLevel.INFO, "Список пользователей для рассылки пуст")
        self._log.log(LogLevel.INFO, "Рассылаю уведомление")
        for user_id in users:
            self.api.send_message(user_id, RAIN_ALERT)
        return users

    def poll_once(self, timeout: int = 10) -> int:
        """Fetch and handle one batch of updates; return how many were handled."""
        updates = self.api.get_updates(self._offset, timeout)
        for update in updates:
            update_id = update.get("update_id")
            if update_id is not None:
                self._offset = update_id + 1
            self.handle_update(update)
        return len(updates)

    def start(self) -> None:
        """Long-poll until an error stops the bot; the error is logged."""
        try:
            self._log.log(LogLevel.INFO, "Бот запущен в режиме long-poll")
            while True:
                self.poll_once()
        except TelegramError as exc:
            self._log.log(LogLevel.ERROR, f"Ошибка в работе бота: {exc}")
        except Exception as exc:  # the bot stops on any failure, as a top-level loop
            self._log.log(LogLevel.CRITICAL, f"Неизвестная ошибка: {exc}")