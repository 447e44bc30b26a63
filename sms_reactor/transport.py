"""
HTTP transport for the SMS Reactor client.

Performs one logical HTTP exchange on top of ``requests``: a single attempt per
hop with a fixed timeout, manual redirect following bounded by a redirect
budget, and normalization of every network fault into SMSReactorHTTPError.
"""
import logging
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urljoin, urlparse

import requests

from .data_models import HttpMethod, RawResponse
from .exceptions import SMSReactorHTTPError

logger = logging.getLogger("sms_reactor.transport")

DEFAULT_TIMEOUT = 10
DEFAULT_REDIRECT_LIMIT = 10


class HttpTransport:
    """Issues HTTP requests and follows redirects up to a budget."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 session_factory: Callable[[], requests.Session] = requests.Session):
        self.timeout = timeout
        self._session_factory = session_factory

    def execute(self, url: str, method, body: Optional[str] = None,
                auth: Optional[Tuple[str, str]] = None, headers: Optional[Dict[str, str]] = None,
                redirect_limit: int = DEFAULT_REDIRECT_LIMIT) -> bytes:
        """Returns the body of a successful response, raises SMSReactorHTTPError otherwise."""
        response = self.send(url, method, body, auth, headers, redirect_limit)
        if not response.is_success:
            raise SMSReactorHTTPError(f"Server error: {response.status_code} {response.reason or ''}".rstrip(),
                                      response=response)
        return response.content

    def send(self, url: str, method, body: Optional[str] = None,
             auth: Optional[Tuple[str, str]] = None, headers: Optional[Dict[str, str]] = None,
             redirect_limit: int = DEFAULT_REDIRECT_LIMIT) -> RawResponse:
        """
        Performs the request and returns the final non-redirect response, whatever its status.

        Raises:
            SMSReactorHTTPError: on network faults, timeouts, malformed URLs,
                unknown methods or when more than ``redirect_limit`` redirects
                are received.
        """
        try:
            http_method = HttpMethod.coerce(method)
        except ValueError as err:
            raise SMSReactorHTTPError(f"Unknown http method '{method}'", url=url) from err

        redirects_left = redirect_limit
        with self._session_factory() as session:
            while True:
                response = self._attempt(session, http_method, url, body, auth, headers)
                if not response.is_redirect:
                    return response
                if redirects_left <= 0:
                    logger.error(f"Redirection limit of {redirect_limit} exceeded at {url}")
                    raise SMSReactorHTTPError("Redirection limit exceeded", url=url)
                redirects_left -= 1

                next_url = urljoin(url, response.location)
                http_method, body = _redirect_method(response.status_code, http_method, body)
                if auth is not None and urlparse(next_url).hostname != urlparse(url).hostname:
                    logger.debug(f"Dropping credentials on redirect to another host: {next_url}")
                    auth = None
                logger.debug(f"Following {response.status_code} redirect to {next_url} "
                             f"({redirects_left} redirects left)")
                url = next_url

    def _attempt(self, session: requests.Session, method: HttpMethod, url: str, body: Optional[str],
                 auth: Optional[Tuple[str, str]], headers: Optional[Dict[str, str]]) -> RawResponse:
        REQUEST_ID_MODULO = 10000
        request_id = f"{method.value}_{hash(url) % REQUEST_ID_MODULO}"
        logger.debug(f"[{request_id}] Making HTTP request: {method.value} {url}")
        try:
            response = session.request(
                method.value,
                url,
                data=body.encode('utf-8') if body else None,
                headers=headers,
                auth=auth,
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.RequestException as req_err:
            logger.error(f"[{request_id}] Network error: {req_err}")
            raise SMSReactorHTTPError(f"{req_err}, url={url}", url=url) from req_err

        logger.debug(f"[{request_id}] Response status: {response.status_code}")
        return RawResponse.from_response(response)


def _redirect_method(status_code: int, method: HttpMethod, body: Optional[str]) -> Tuple[HttpMethod, Optional[str]]:
    """Method and body to use for the next hop of a redirect chain."""
    if status_code == 303:
        return HttpMethod.GET, None
    if status_code in (301, 302) and method is HttpMethod.POST:
        return HttpMethod.GET, None
    return method, body
