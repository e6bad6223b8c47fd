import pytest
import requests
import responses

from rainbot.weather import fetch_weather

HOST = "weather.example.com"
URL = f"http://{HOST}:80/forecast"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_returns_decoded_json(mocked):
    body = {"list": [{"dt": 1, "weather": [{"main": "Rain"}]}]}
    mocked.add(responses.GET, URL, json=body)
    assert fetch_weather(HOST, "/forecast") == body


def test_sends_host_and_user_agent(mocked):
    mocked.add(responses.GET, URL, json={"a": 1})
    fetch_weather(HOST, "/forecast")
    request = mocked.calls[0].request
    assert request.headers["Host"] == HOST
    assert request.headers["User-Agent"] == "rainbot"


def test_invalid_json_gives_empty_dict(mocked):
    mocked.add(responses.GET, URL, body="not json")
    assert fetch_weather(HOST, "/forecast") == {}


def test_connection_error_gives_empty_dict(mocked):
    mocked.add(responses.GET, URL, body=requests.ConnectionError("down"))
    assert fetch_weather(HOST, "/forecast") == {}


def test_empty_json_returned_as_is(mocked):
    mocked.add(responses.GET, URL, json={})
    assert fetch_weather(HOST, "/forecast") == {}