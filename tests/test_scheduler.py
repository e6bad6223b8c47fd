import time

from rainbot.boundaries import day_boundaries
from rainbot.scheduler import (
    ALERT_COOLDOWN,
    CHECK_INTERVAL,
    Scheduler,
    format_rain_result,
)


class FakeBot:
    def __init__(self):
        self.alerts = 0

    def send_alert_to_all_users(self):
        self.alerts += 1
        return []


def rainy():
    start, _ = day_boundaries()
    return {"list": [{"dt": start, "weather": [{"main": "Rain"}]}]}


def at_hour(hour):
    t = time.localtime()
    return time.mktime((t.tm_year, t.tm_mon, t.tm_mday, hour, 10, 0, 0, 0, -1))


def test_tick_at_alert_hour_with_rain():
    bot = FakeBot()
    sched = Scheduler(bot, rainy, alert_hour=5)
    assert sched.tick(at_hour(5)) == ALERT_COOLDOWN + CHECK_INTERVAL
    assert bot.alerts == 1


def test_tick_other_hour_does_not_fetch():
    calls = []
    bot = FakeBot()
    sched = Scheduler(bot, lambda: calls.append(1) or rainy(), alert_hour=5)
    assert sched.tick(at_hour(12)) == CHECK_INTERVAL
    assert calls == []
    assert bot.alerts == 0


def test_tick_without_rain_sends_nothing():
    bot = FakeBot()
    sched = Scheduler(bot, lambda: {}, alert_hour=5)
    assert sched.tick(at_hour(5)) == ALERT_COOLDOWN + CHECK_INTERVAL
    assert bot.alerts == 0


def test_is_rain_expected():
    assert Scheduler(FakeBot(), rainy).is_rain_expected() is True
    assert Scheduler(FakeBot(), lambda: {"list": []}).is_rain_expected() is False


def test_format_rain_result():
    boundaries = day_boundaries()
    yes = format_rain_result(boundaries, True)
    no = format_rain_result(boundaries, False)
    assert yes.startswith("Диапазон времени: ")
    assert yes.endswith(" | Наличие дождя: Да")
    assert no.endswith(" | Наличие дождя: Нет")
    assert time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(boundaries[0])) in yes


def test_start_and_stop():
    hour = (time.localtime().tm_hour + 12) % 24
    sched = Scheduler(FakeBot(), lambda: {}, alert_hour=hour)
    assert sched.start() is True
    assert sched.is_running() is True
    assert sched.start() is False
    sched.stop()
    assert sched.is_running() is False


def test_stop_without_start():
    sched = Scheduler(FakeBot(), lambda: {})
    sched.stop()
    assert sched.is_running() is False