import pytest

from rainbot.parser import is_rain


def _entry(dt, *mains):
    return {"dt": dt, "weather": [{"main": m} for m in mains]}


def test_rain_inside_range():
    forecast = {"list": [_entry(150, "Rain")]}
    assert is_rain(forecast, (100, 200)) is True


def test_rain_outside_range_ignored():
    forecast = {"list": [_entry(50, "Rain"), _entry(250, "Rain"), _entry(150, "Clouds")]}
    assert is_rain(forecast, (100, 200)) is False


@pytest.mark.parametrize("dt", [100, 200])
def test_boundaries_are_inclusive(dt):
    assert is_rain({"list": [_entry(dt, "Rain")]}, (100, 200)) is True


def test_rain_among_several_conditions():
    forecast = {"list": [_entry(150, "Clouds", "Rain")]}
    assert is_rain(forecast, (100, 200)) is True


def test_other_precipitation_is_not_rain():
    forecast = {"list": [_entry(150, "Snow"), _entry(160, "Drizzle")]}
    assert is_rain(forecast, (100, 200)) is False


@pytest.mark.parametrize("forecast", [None, {}, {"list": []}])
def test_empty_forecast(forecast):
    assert is_rain(forecast, (0, 10**10)) is False


def test_entry_without_weather():
    assert is_rain({"list": [{"dt": 150}]}, (100, 200)) is False


def test_entry_without_dt_raises():
    with pytest.raises(KeyError):
        is_rain({"list": [{"weather": [{"main": "Rain"}]}]}, (100, 200))