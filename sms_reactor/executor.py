"""
Command executor

Composes the HTTP transport, JSON decoding and response translation into a
single call that either returns one translated result or raises one typed
error.
"""
import json
import logging
from typing import Any, List, Optional

from .data_models import HttpMethod, RawResponse, SMSReactorCredentials
from .exceptions import SMSReactorAPIError, SMSReactorDecodeError, SMSReactorHTTPError
from .transport import DEFAULT_REDIRECT_LIMIT, HttpTransport
from .translator import translate

logger = logging.getLogger("sms_reactor.executor")

JSON_HEADERS = {'Content-Type': 'application/json'}


class CommandExecutor:
    """Runs API commands against ``<base_url>/<path>.json``."""

    def __init__(self, base_url: str, credentials: SMSReactorCredentials,
                 transport: Optional[HttpTransport] = None,
                 redirect_limit: int = DEFAULT_REDIRECT_LIMIT):
        self.base_url = base_url.rstrip('/')
        self.credentials = credentials
        self.transport = transport or HttpTransport()
        self.redirect_limit = redirect_limit

    def build_url(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path.strip('/')}.json"

    def run(self, relative_path: str, method, params: Optional[dict] = None) -> Any:
        """
        Executes an API command and returns its translated result.

        Raises:
            SMSReactorHTTPError: on network or HTTP error
            SMSReactorAPIError: when the service rejects the request (4xx)
            SMSReactorDecodeError: when a success response is not valid JSON
        """
        method_name = method.value if isinstance(method, HttpMethod) else str(method).upper()
        body = json.dumps(params) if params is not None else None

        try:
            response = self.transport.send(
                self.build_url(relative_path),
                method,
                body=body,
                auth=self.credentials.as_auth(),
                headers=dict(JSON_HEADERS),
                redirect_limit=self.redirect_limit,
            )
        except SMSReactorHTTPError as http_err:
            logger.error(f"Transport failure while requesting {method_name} {relative_path}: {http_err}")
            raise

        if response.is_client_error:
            raise self._api_error(response, method_name, relative_path)
        if not response.is_success:
            logger.error(f"Unexpected HTTP status {response.status_code} while requesting "
                         f"{method_name} {relative_path}")
            raise SMSReactorHTTPError(
                f"Server error while requesting {method_name} {relative_path}", response=response)

        try:
            document = json.loads(response.content)
        except ValueError as json_err:
            logger.error(f"Failed to decode JSON from response. URL: {response.url}, "
                         f"Response Text: {response.text[:500]}")
            raise SMSReactorDecodeError(
                f"JSON parse error while requesting {method_name} {relative_path}: {json_err}",
                response_text=response.text,
            ) from json_err

        return translate(document)

    def _api_error(self, response: RawResponse, method_name: str, relative_path: str) -> SMSReactorAPIError:
        if not response.text.strip():
            message = f"{response.status_code} {response.reason or ''}".rstrip()
            errors = []
        else:
            errors = _error_messages(response.text)
            message = ', '.join(errors) if errors is not None else response.text
        logger.error(f"API error {response.status_code} while requesting {method_name} {relative_path}: {message}")
        return SMSReactorAPIError(message, errors=errors, status_code=response.status_code)


def _error_messages(text: str) -> Optional[List[str]]:
    """Error strings from a JSON error body, or None when the body is not JSON."""
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if isinstance(payload, list):
        return [str(item) for item in payload]
    if isinstance(payload, dict):
        # {"field": ["message", ...]} as rendered by Rails validations
        messages = []
        for field, value in payload.items():
            for item in value if isinstance(value, list) else [value]:
                messages.append(f"{field} {item}")
        return messages
    return [str(payload)]
