import pytest
import requests
from loguru import logger

from retryget.backoff import BackoffSchedule


def make_response(status_code, body="", url="https://example.com/", reason=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    response.reason = reason
    return response


class FakeClock:
    """Monotonic clock that only advances when the engine sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class StubEndpoint:
    """Counts hits and answers every GET with the same status."""

    def __init__(self, status_code, body=""):
        self.status_code = status_code
        self.body = body
        self.hits = 0

    def get(self, url, **kwargs):
        self.hits += 1
        return make_response(self.status_code, self.body, url=url)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def schedule():
    return BackoffSchedule()


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["level"].name + " " + message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def stub_endpoint(monkeypatch):
    """Route requests.get to a StubEndpoint; call with the status to serve."""

    def _install(status_code, body=""):
        endpoint = StubEndpoint(status_code, body)
        monkeypatch.setattr("retryget.fetchers.requests_fetcher.requests.get", endpoint.get)
        return endpoint

    return _install
