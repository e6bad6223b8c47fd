"""Retrieval of the weather forecast over HTTP."""

from __future__ import annotations

from typing import Any

import requests

from .logger import LogLevel, get_logger

USER_AGENT = "rainbot"
DEFAULT_TIMEOUT = 30.0


def fetch_weather(host: str, target: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """Fetch ``target`` from ``host`` on port 80 and return the decoded JSON body.

    Any network or decoding failure is logged and an empty dict is returned.
    """
    log = get_logger()
    log.log(LogLevel.INFO, "Начало получения данных о погоде")
    url = f"http://{host}:80{target}"
    try:
        log.log(LogLevel.DEBUG, f"Попытка подключения к {host}")
        log.log(LogLevel.DEBUG, f"Отправка запроса: {target}")
        response = requests.get(
            url,
            headers={"Host": host, "User-Agent": USER_AGENT},
            timeout=timeout,
        )
        log.log(LogLevel.INFO, f"Успешное подключение к {host}")
        log.log(LogLevel.DEBUG, "Попытка парсинга JSON ответа")
        data = response.json()
    except requests.RequestException as exc:
        log.log(LogLevel.ERROR, f"Системная ошибка: {exc}")
        return {}
    except ValueError as exc:
        log.log(LogLevel.ERROR, f"Ошибка парсинга JSON: {exc}")
        return {}

    if not data:
        log.log(LogLevel.WARNING, "Получен пустой JSON ответ")
    else:
        log.log(LogLevel.INFO, "Успешно получены данные о погоде")
    return data