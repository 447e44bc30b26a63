"""Shared fixtures: a scripted requests.Session and response builders."""

import json

import pytest
import requests

from sms_reactor import HttpTransport, SMSReactorClient

BASE_URL = "http://api.test/v1"


class FakeSession(requests.Session):
    """Replays scripted responses (or raises scripted exceptions) in order."""

    def __init__(self, outcomes):
        super().__init__()
        self.outcomes = list(outcomes)
        self.calls = []
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome.url is None:
            outcome.url = url
        return outcome


def make_response(status: int, body=b"", headers=None, url=None, reason=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.headers.update(headers or {})
    response.url = url
    response.reason = reason
    return response


def redirect(location: str, status: int = 302) -> requests.Response:
    return make_response(status, headers={"Location": location})


@pytest.fixture
def fake_session():
    def _build(*outcomes):
        return FakeSession(outcomes)
    return _build


@pytest.fixture
def transport_for():
    def _build(session, timeout=10):
        return HttpTransport(timeout=timeout, session_factory=lambda: session)
    return _build


@pytest.fixture
def client_for(transport_for):
    def _build(session):
        return SMSReactorClient.from_login(
            "user@example.com", "secret", base_url=BASE_URL, transport=transport_for(session)
        )
    return _build
