"""Background check of the forecast at a fixed hour of the day."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional

from .boundaries import day_boundaries
from .logger import LogLevel, get_logger
from .parser import is_rain

CHECK_INTERVAL = 30 * 60
ALERT_COOLDOWN = 60 * 60
DEFAULT_ALERT_HOUR = 5
_FMT = "%Y-%m-%d %H:%M:%S"


def format_rain_result(boundaries: tuple[int, int], rain: bool) -> str:
    """Describe the checked time range and whether rain was found."""
    start, end = boundaries
    return (
        f"Диапазон времени: {time.strftime(_FMT, time.localtime(start))} - "
        f"{time.strftime(_FMT, time.localtime(end))}"
        f" | Наличие дождя: {'Да' if rain else 'Нет'}"
    )


class Scheduler:
    """Checks for rain once a day at ``alert_hour`` and alerts the bot's users."""

    def __init__(
        self,
        bot: Any,
        fetch: Callable[[], Any],
        alert_hour: int = DEFAULT_ALERT_HOUR,
    ) -> None:
        self.bot = bot
        self.fetch = fetch
        self.alert_hour = alert_hour
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._log = get_logger()
        self._log.log(LogLevel.INFO, "Планировщик создан")

    def is_running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """Start the background thread; return False if it was already running."""
        if self._running:
            self._log.log(LogLevel.INFO, "Попытка запустить уже работающий планировщик")
            return False
        self._running = True
        self._stop.clear()
        try:
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        except RuntimeError as exc:
            self._running = False
            self._log.log(
                LogLevel.ERROR, f"Ошибка при запуске потока планировщика: {exc}"
            )
            return False
        self._log.log(LogLevel.INFO, "Планировщик успешно запущен в отдельном потоке")
        return True

    def _run(self) -> None:
        self._log.log(LogLevel.INFO, "Поток планировщика начал работу")
        try:
            while not self._stop.is_set():
                if self._stop.wait(self.tick()):
                    break
        except Exception:  # a failing check ends the thread quietly
            pass
        finally:
            self._running = False

    def tick(self, now: Optional[float] = None) -> int:
        """Run one check; return the number of seconds to wait before the next."""
        if now is None:
            now = time.time()
        if time.localtime(now).tm_hour != self.alert_hour:
            return CHECK_INTERVAL
        if self.is_rain_expected():
            self._log.log(LogLevel.INFO, "Обнаружен дождь")
            self.bot.send_alert_to_all_users()
        return ALERT_COOLDOWN + CHECK_INTERVAL

    def is_rain_expected(self) -> bool:
        """Fetch the forecast and check it for rain within today's range."""
        forecast = self.fetch()
        boundaries = day_boundaries()
        rain = is_rain(forecast, boundaries)
        self._log.log(LogLevel.INFO, format_rain_result(boundaries, rain))
        return rain

    def stop(self) -> None:
        """Signal the thread to finish and wait for it."""
        self._log.log(LogLevel.INFO, "Запущена остановка планировщика")
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread.is_alive():
            self._log.log(LogLevel.DEBUG, "Поток планировщика joinable, выполняю join")
            thread.join()
            self._log.log(LogLevel.INFO, "Поток планировщика успешно остановлен")
        else:
            self._log.log(
                LogLevel.WARNING,
                "Попытка остановить неjoinable поток (уже завершён или никогда не запускался)",
            )
        self._running = False

    def __enter__(self) -> "Scheduler":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()