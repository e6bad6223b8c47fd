import os
import time

import pytest

from rainbot.boundaries import day_boundaries, local_midnight


@pytest.fixture
def utc():
    old = os.environ.get("TZ")
    os.environ["TZ"] = "UTC"
    time.tzset()
    yield
    if old is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = old
    time.tzset()


def test_local_midnight_is_at_zero_hour():
    now = time.time()
    midnight = local_midnight(now)
    t = time.localtime(midnight)
    assert (t.tm_hour, t.tm_min, t.tm_sec) == (0, 0, 0)
    assert midnight <= now


def test_local_midnight_same_day():
    now = time.time()
    assert time.localtime(local_midnight(now)).tm_mday == time.localtime(now).tm_mday


def test_local_midnight_idempotent():
    midnight = local_midnight(time.time())
    assert local_midnight(midnight) == midnight


def test_utc_midnight(utc):
    day_start = 1_700_000_000 - 1_700_000_000 % 86400
    assert local_midnight(day_start + 12345) == day_start


def test_utc_boundaries(utc):
    day_start = 1_700_000_000 - 1_700_000_000 % 86400
    left, right = day_boundaries(day_start + 100)
    assert left == day_start + 6 * 3600
    assert right == day_start + 24 * 3600


def test_boundaries_relative_to_midnight():
    now = time.time()
    left, right = day_boundaries(now)
    midnight = local_midnight(now)
    assert left - midnight == 6 * 3600
    assert right - midnight == 24 * 3600


def test_default_now_matches_explicit_now():
    explicit = day_boundaries(time.time())
    assert day_boundaries() == explicit