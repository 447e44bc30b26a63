"""
SMS Reactor client

Client for the sms-reactor.ru API v1: sender signatures, messages, the current
user and bulk mailings.
"""
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .data_models import HttpMethod, Record, SMSReactorCredentials
from .endpoints import _EndpointManager
from .exceptions import SMSReactorError
from .executor import CommandExecutor
from .settings import DEFAULT_BASE_URL, SMSReactorSettings
from .transport import DEFAULT_REDIRECT_LIMIT, DEFAULT_TIMEOUT, HttpTransport

logger = logging.getLogger("sms_reactor.client")

MAILING_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# A bare identifier or anything exposing an ``id`` (a Record, a mapping, ...).
Identifiable = Union[int, str, Record, Mapping]


class SMSReactorClient(BaseModel):
    """
    The primary client for interacting with the SMS Reactor API. It holds the
    credentials and delegates every call to the command executor.

    Every API method raises SMSReactorHTTPError on network or HTTP error,
    SMSReactorAPIError when the service rejects the request and
    SMSReactorDecodeError when a success response cannot be decoded.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    credentials: SMSReactorCredentials
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_REDIRECT_LIMIT
    transport: Optional[HttpTransport] = Field(default=None, exclude=True)
    endpoints: Optional[_EndpointManager] = Field(default=None, exclude=True)
    executor: Optional[CommandExecutor] = Field(default=None, exclude=True)

    @model_validator(mode='after')
    def initialize_client(self) -> "SMSReactorClient":
        """Builds the transport, endpoint manager and executor after Pydantic validation."""
        if self.transport is None:
            self.transport = HttpTransport(timeout=self.timeout)
        elif 'timeout' in self.model_fields_set:
            logger.debug(f"Ignoring timeout={self.timeout}: the given transport uses timeout={self.transport.timeout}.")
        self.endpoints = _EndpointManager()
        self.executor = CommandExecutor(
            self.base_url,
            self.credentials,
            transport=self.transport,
            redirect_limit=self.max_redirects,
        )
        logger.info(f"SMSReactorClient initialized for {self.base_url} as {self.credentials.email}.")
        return self

    @classmethod
    def from_login(cls, email: str, password: str, **kwargs) -> "SMSReactorClient":
        return cls(credentials=SMSReactorCredentials(email=email, password=password), **kwargs)

    @classmethod
    def from_settings(cls, settings: Optional[SMSReactorSettings] = None, **kwargs) -> "SMSReactorClient":
        """Creates a client from SMS_REACTOR_* environment settings."""
        settings = settings or SMSReactorSettings()
        if not settings.email or settings.password is None:
            raise ValueError("SMS_REACTOR_EMAIL and SMS_REACTOR_PASSWORD must be set")
        credentials = SMSReactorCredentials(email=settings.email, password=settings.password)
        return cls(
            credentials=credentials,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            max_redirects=settings.max_redirects,
            **kwargs
        )

    def _api_call(self, endpoint_key: str, method: HttpMethod, params: Optional[dict] = None, **path_args) -> Any:
        """Builds the endpoint and runs the command with unified logging."""
        endpoint = self.endpoints.build_endpoint(endpoint_key, **path_args)
        logger.debug(f"API call '{endpoint_key}': {method.value} {endpoint}")
        try:
            result = self.executor.run(endpoint, method, params)
        except SMSReactorError as e:
            logger.error(f"SMS Reactor error during '{endpoint_key}': {e}")
            raise
        logger.info(f"API call '{endpoint_key}' succeeded.")
        return result

    # === Signatures ===

    def get_signatures(self) -> List[Record]:
        """Gets the list of sender signatures."""
        return self._api_call('list_signatures', HttpMethod.GET)

    def add_signature(self, name: str) -> Record:
        """Submits a new signature for approval."""
        return self._api_call('create_signature', HttpMethod.POST, {'signature': {'name': name}})

    def get_signature(self, signature: Identifiable) -> Record:
        """Gets a signature (and its approval status) by signature or id."""
        return self._api_call('get_signature', HttpMethod.GET, signature_id=resolve_id(signature))

    # === Messages ===

    def send_message(self, text: str, phone: str, signature_name: str = "TEST",
                     client_ident: Optional[str] = None, validity_period: Optional[int] = None) -> Record:
        """
        Sends a message immediately.

        Args:
            text: message text
            phone: destination phone number
            signature_name: name of an approved signature
            client_ident: client side identifier of the message
            validity_period: message validity period in seconds
        """
        params = {
            'message': {
                'text': text,
                'phone': phone,
                'signature_name': signature_name,
                'client_ident': client_ident,
                'validity_period': validity_period,
            }
        }
        return self._api_call('send_message', HttpMethod.POST, params)

    def get_message(self, message: Identifiable) -> Record:
        return self._api_call('get_message', HttpMethod.GET, message_id=resolve_id(message))

    def get_message_status(self, message: Identifiable) -> Record:
        """Gets a message record holding only its status info."""
        return self._api_call('get_message_status', HttpMethod.GET, message_id=resolve_id(message))

    def get_message_parts(self, text: str) -> int:
        """Returns the number of parts the text would be split into."""
        result = self._api_call('get_message_parts', HttpMethod.POST, {'message': {'text': text}})
        return result.parts

    # === User ===

    def get_user(self) -> Record:
        """Gets the current user info."""
        return self._api_call('get_user', HttpMethod.GET)

    # === Mailings ===

    def create_mailing(self, name: str, text: str, signature_name: str, scheduled_at: Any = None) -> Record:
        """
        Creates a new mailing.

        ``scheduled_at`` may be a datetime (or anything with ``strftime``), a
        preformatted string, or None to start sending immediately.
        """
        if hasattr(scheduled_at, 'strftime'):
            scheduled_at = scheduled_at.strftime(MAILING_DATE_FORMAT)
        params = {
            'mailing': {
                'name': name,
                'text': text,
                'signature_name': signature_name,
                'scheduled_at': scheduled_at,
            }
        }
        return self._api_call('create_mailing', HttpMethod.POST, params)

    def get_mailing(self, mailing: Identifiable) -> Record:
        return self._api_call('get_mailing', HttpMethod.GET, mailing_id=resolve_id(mailing))

    def get_mailing_status(self, mailing: Identifiable) -> Record:
        """Gets a mailing record holding only its status."""
        return self._api_call('get_mailing_status', HttpMethod.GET, mailing_id=resolve_id(mailing))

    def add_mailing_phones(self, mailing: Identifiable, phones: Union[str, Sequence[str]]) -> Any:
        """Adds phone numbers to a mailing; ``phones`` is a comma separated string or a list."""
        if isinstance(phones, (list, tuple)):
            phones = ','.join(str(phone) for phone in phones)
        return self._api_call('add_mailing_phones', HttpMethod.POST, {'phones': phones},
                              mailing_id=resolve_id(mailing))

    def get_mailing_messages(self, mailing: Identifiable) -> List[Record]:
        """Gets the messages of a mailing."""
        return self._api_call('list_mailing_messages', HttpMethod.GET, mailing_id=resolve_id(mailing))

    def start_mailing(self, mailing: Identifiable) -> Any:
        return self._api_call('start_mailing', HttpMethod.GET, mailing_id=resolve_id(mailing))

    def stop_mailing(self, mailing: Identifiable) -> Any:
        """Stops a mailing; it may be started again."""
        return self._api_call('stop_mailing', HttpMethod.GET, mailing_id=resolve_id(mailing))

    def abort_mailing(self, mailing: Identifiable) -> Any:
        """Aborts a mailing; it can not be started again."""
        return self._api_call('abort_mailing', HttpMethod.GET, mailing_id=resolve_id(mailing))


def resolve_id(entity: Identifiable) -> Any:
    """Returns ``entity.id`` (or ``entity['id']``) when present, otherwise ``int(entity)``."""
    identifier = getattr(entity, 'id', None)
    if identifier is None and isinstance(entity, Mapping):
        identifier = entity.get('id')
    return identifier if identifier is not None else int(entity)
