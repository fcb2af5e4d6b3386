import pytest
import requests

from home_finder.data_gathering.features.fetch_executor.fetch_executor import SearchClient
from home_finder.data_gathering.providers.zillow_api import SearchConfig


class FakeResponse:
    def __init__(self, payload=None, status_code=200, body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.body_error is not None:
            raise self.body_error
        return self.payload


class FakeSession:
    """Records every GET and replays a canned response or exception."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture()
def config():
    return SearchConfig(api_key="test-key", timeout=12.0)


@pytest.fixture()
def make_client(config):
    def _make(payload=None, status_code=200, exc=None, body_error=None):
        session = FakeSession(FakeResponse(payload, status_code, body_error), exc)
        return SearchClient(config, session=session), session
    return _make
