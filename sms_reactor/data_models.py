from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, SecretStr


class SMSReactorCredentials(BaseModel):
    """Data model for the credentials required to configure the SMSReactorClient."""
    model_config = ConfigDict(frozen=True)

    email: str
    password: SecretStr

    def as_auth(self) -> tuple:
        """Returns the (user, password) pair used for HTTP Basic Auth."""
        return self.email, self.password.get_secret_value()


class HttpMethod(str, Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'

    @classmethod
    def coerce(cls, value: Union[str, "HttpMethod"]) -> "HttpMethod":
        """Accepts an HttpMethod or a case-insensitive method name, raises ValueError otherwise."""
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


class ResponseKind(str, Enum):
    success = 'success'
    client_error = 'client_error'
    redirect = 'redirect'
    other = 'other'


@dataclass(frozen=True)
class RawResponse:
    """Status classification, body and redirect target of one HTTP exchange."""
    url: str
    status_code: int
    kind: ResponseKind
    content: bytes = b''
    location: Optional[str] = None
    reason: Optional[str] = None

    @property
    def text(self) -> str:
        return self.content.decode('utf-8', errors='replace')

    @property
    def is_success(self) -> bool:
        return self.kind is ResponseKind.success

    @property
    def is_client_error(self) -> bool:
        return self.kind is ResponseKind.client_error

    @property
    def is_redirect(self) -> bool:
        return self.kind is ResponseKind.redirect

    @classmethod
    def from_response(cls, response: requests.Response) -> "RawResponse":
        status = response.status_code
        if 200 <= status < 300:
            kind = ResponseKind.success
        elif 400 <= status < 500:
            kind = ResponseKind.client_error
        elif response.is_redirect:
            kind = ResponseKind.redirect
        else:
            kind = ResponseKind.other
        return cls(
            url=response.url,
            status_code=status,
            kind=kind,
            content=response.content or b'',
            location=response.headers.get('location'),
            reason=response.reason,
        )


class Record(BaseModel):
    """
    Immutable record built from a JSON object.

    The field set is exactly the key set of the source object, in source order.
    Fields are reachable as attributes (``record.status``) or items
    (``record['status']``); item access also works for keys that clash with
    model methods.
    """
    model_config = ConfigDict(extra='allow', frozen=True)

    def __getitem__(self, key: str) -> Any:
        return _values(self)[key]

    def __contains__(self, key: object) -> bool:
        return key in _values(self)

    def __len__(self) -> int:
        return len(_values(self))

    def keys(self) -> List[str]:
        return list(_values(self))

    def get(self, key: str, default: Any = None) -> Any:
        return _values(self).get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Returns a plain dict, converting nested records recursively."""
        return {key: _plain(value) for key, value in _values(self).items()}


def _plain(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _values(record: Record) -> Dict[str, Any]:
    return record.__pydantic_extra__ or {}
