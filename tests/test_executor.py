"""Tests for CommandExecutor: request building and failure classification."""

import json
from datetime import datetime, timezone

import pytest
import requests

from conftest import BASE_URL, make_response, redirect
from sms_reactor import (
    CommandExecutor,
    HttpMethod,
    Record,
    SMSReactorAPIError,
    SMSReactorCredentials,
    SMSReactorDecodeError,
    SMSReactorHTTPError,
)


@pytest.fixture
def executor_for(transport_for):
    def _build(session, base_url=BASE_URL):
        credentials = SMSReactorCredentials(email="user@example.com", password="secret")
        return CommandExecutor(base_url, credentials, transport=transport_for(session))
    return _build


class TestRequestBuilding:
    def test_url_auth_and_headers(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(200, {"id": 1}))

        executor_for(session, base_url=BASE_URL + "/").run("signatures", HttpMethod.GET)

        call = session.calls[0]
        assert call["url"] == "http://api.test/v1/signatures.json"
        assert call["auth"] == ("user@example.com", "secret")
        assert call["headers"] == {"Content-Type": "application/json"}
        assert call["data"] is None

    def test_params_are_serialized_as_json(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(201, {"id": 2}))

        executor_for(session).run("signatures", "post", {"signature": {"name": "Shop"}})

        call = session.calls[0]
        assert call["method"] == "POST"
        assert json.loads(call["data"]) == {"signature": {"name": "Shop"}}


class TestSuccess:
    def test_result_is_translated(self, fake_session, executor_for) -> None:
        body = {"id": 1, "status": "queued", "created_at": "2020-01-01T00:00:00Z"}
        session = fake_session(make_response(200, body))

        result = executor_for(session).run("messages/1", HttpMethod.GET)

        assert isinstance(result, Record)
        assert result.id == 1
        assert result.created_at == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_list_result(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(200, [{"id": 1}, {"id": 2}]))

        result = executor_for(session).run("signatures", HttpMethod.GET)

        assert [record.id for record in result] == [1, 2]

    def test_malformed_success_body_is_a_decode_failure(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(200, "<html>oops</html>"))

        with pytest.raises(SMSReactorDecodeError) as exc_info:
            executor_for(session).run("user", HttpMethod.GET)

        assert not isinstance(exc_info.value, SMSReactorAPIError)
        assert exc_info.value.response_text == "<html>oops</html>"

    def test_follows_redirect_to_success(self, fake_session, executor_for) -> None:
        session = fake_session(redirect("https://api.test/v1/user.json", 301), make_response(200, {"id": 5}))

        result = executor_for(session).run("user", HttpMethod.GET)

        assert result.id == 5


class TestClientErrors:
    def test_json_array_is_joined(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(422, ["error1", "error2"]))

        with pytest.raises(SMSReactorAPIError) as exc_info:
            executor_for(session).run("messages", HttpMethod.POST, {"message": {}})

        err = exc_info.value
        assert err.message == "error1, error2"
        assert str(err) == "error1, error2"
        assert err.errors == ["error1", "error2"]
        assert err.status_code == 422

    def test_non_json_body_is_used_verbatim(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(400, "oops"))

        with pytest.raises(SMSReactorAPIError) as exc_info:
            executor_for(session).run("messages", HttpMethod.POST)

        assert exc_info.value.message == "oops"
        assert exc_info.value.errors == ["oops"]

    def test_json_object_messages_are_flattened(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(422, {"phone": ["is invalid"], "text": "can't be blank"}))

        with pytest.raises(SMSReactorAPIError) as exc_info:
            executor_for(session).run("messages", HttpMethod.POST)

        assert exc_info.value.message == "phone is invalid, text can't be blank"

    def test_unauthorized(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(401, "HTTP Basic: Access denied.\n"))

        with pytest.raises(SMSReactorAPIError, match="Access denied"):
            executor_for(session).run("user", HttpMethod.GET)

    @pytest.mark.parametrize("body", [b"", b"  \n"])
    def test_empty_body_falls_back_to_status(self, fake_session, executor_for, body) -> None:
        session = fake_session(make_response(404, body, reason="Not Found"))

        with pytest.raises(SMSReactorAPIError) as exc_info:
            executor_for(session).run("messages/99", HttpMethod.GET)

        assert exc_info.value.message == "404 Not Found"
        assert exc_info.value.errors == []
        assert exc_info.value.status_code == 404


class TestTransportFailures:
    def test_server_error_is_not_an_api_error(self, fake_session, executor_for) -> None:
        session = fake_session(make_response(503, "maintenance"))

        with pytest.raises(SMSReactorHTTPError) as exc_info:
            executor_for(session).run("user", HttpMethod.GET)

        assert exc_info.value.status_code == 503
        assert exc_info.value.response_text == "maintenance"

    def test_network_fault_propagates(self, fake_session, executor_for) -> None:
        fault = requests.ConnectionError("host unreachable")
        session = fake_session(fault)

        with pytest.raises(SMSReactorHTTPError) as exc_info:
            executor_for(session).run("user", HttpMethod.GET)

        assert exc_info.value.response is None
        assert exc_info.value.__cause__ is fault

    def test_redirect_exhaustion_propagates(self, fake_session, executor_for) -> None:
        hops = [redirect(f"http://api.test/loop{i}") for i in range(11)]
        session = fake_session(*hops)

        with pytest.raises(SMSReactorHTTPError, match="Redirection limit exceeded"):
            executor_for(session).run("user", HttpMethod.GET)

        assert len(session.calls) == 11
