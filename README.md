# rainbot

A small Telegram bot that tells its subscribers when rain is on the way.

A background scheduler looks at the local clock every 30 minutes. When the
hour equals the alert hour (5, that is 05:00–05:59 local time, by default),
it downloads a weather forecast, checks whether any forecast entry between
06:00 and the following midnight of the current day is marked as rain, and if
so sends every subscriber the message "Ожидается дождь" ("Rain is expected").
After a check it waits 90 minutes, so an alert goes out at most once a day.

Subscribers are kept in an SQLite database (`tg_users.db` by default), and
the bot appends its activity log to `output.log` in the working directory.

## Chat commands

| Command      | Effect                                                      |
|--------------|-------------------------------------------------------------|
| `/start`     | Greets the user and explains how to subscribe.              |
| `/subscribe` | Adds the chat to the subscriber list (once only).           |
| `/reject`    | Removes the chat from the subscriber list.                  |

Commands addressed as `/command@botname` are recognised too; any other text
is ignored.

## Installation

```console
pip install .
```

To run the test suite as well:

```console
pip install ".[test]"
pytest
```

## Running the bot

The package installs a `rainbot` command. It opens the subscriber database,
starts the scheduler in a background thread and then long-polls Telegram for
commands. When polling fails the error is written to the log, the scheduler
is stopped and the command exits.

```console
rainbot --token token --host weather.example.com --target "/forecast?q=city"
```

| Option          | Default                     | Meaning                                   |
|-----------------|-----------------------------|-------------------------------------------|
| `--token`       | `$RAINBOT_TOKEN`            | Telegram bot token                        |
| `--host`        | `$RAINBOT_WEATHER_HOST`     | host of the weather service               |
| `--target`      | `$RAINBOT_WEATHER_TARGET`   | request path, including its query string  |
| `--db`          | `tg_users.db`               | SQLite file of subscribers                |
| `--alert-hour`  | `5`                         | local hour (0–23) of the daily check      |

`--token`, `--host` and `--target` must be given, either as options or
through the environment variables.

The forecast is requested with a plain HTTP `GET` on port 80 of the host.
The response must be JSON with a `list` of entries, each having a `dt` Unix
timestamp and a `weather` list of objects with a `main` field; a forecast
counts as rain when some entry in the window has `"main": "Rain"`. A network
or decoding failure is logged and treated as an empty forecast (no rain).

## Using it from Python

The pieces can also be put together by hand:

```python
import requests

from rainbot.bot import RainBot, TelegramApi
from rainbot.database import SqliteUserStore
from rainbot.scheduler import Scheduler
from rainbot.weather import fetch_weather

with SqliteUserStore("tg_users.db") as store:
    api = TelegramApi("token", requests.Session())
    bot = RainBot(api, store)

    scheduler = Scheduler(
        bot,
        lambda: fetch_weather("weather.example.com", "/forecast?q=city", 10),
        5,
    )
    scheduler.start()
    try:
        bot.start()
    finally:
        scheduler.stop()
```

- `rainbot.database.UserStore` is the abstract subscriber store
  (`user_exists`, `add_user`, `remove_user`, `all_users`);
  `SqliteUserStore` implements it and is a context manager.
- `rainbot.bot.TelegramApi` offers `send_message` and `get_updates` and
  raises `TelegramError` when the Bot API reports a failure.
- `RainBot.handle_update` / `handle_message` answer one command and return
  the reply sent; `poll_once` handles one batch of updates;
  `send_alert_to_all_users` sends the alert and returns the ids it went to.
- `Scheduler.tick(now)` runs one check and returns the seconds to wait
  before the next; `is_rain_expected` fetches and checks the forecast.
- `rainbot.logger.get_logger()` returns the shared `Logger`, which writes
  lines of the form `YYYY-MM-DD HH:MM:SS [LEVEL] message`.

The forecast check itself is a plain function:

```python
from rainbot.boundaries import day_boundaries
from rainbot.parser import is_rain

forecast = {"list": [{"dt": 1_700_000_000, "weather": [{"main": "Rain"}]}]}
print(is_rain(forecast, (1_699_990_000, 1_700_010_000)))  # True
```

`day_boundaries(now)` returns the window the scheduler uses: from 06:00
after local midnight of the day of `now` up to the following midnight, both
ends inclusive.

## What it does not do

The bot talks to Telegram only by long polling; there is no webhook server.
The weather request goes over plain HTTP to a fixed port, with no API key
handling of its own beyond what is put into `--target`. The log file name
and the alert text are fixed.