"""
SMS Reactor SDK Package

This package provides a client for interacting with the sms-reactor.ru SMS API.
"""

from .client import SMSReactorClient, resolve_id
from .data_models import HttpMethod, RawResponse, Record, ResponseKind, SMSReactorCredentials
from .exceptions import SMSReactorAPIError, SMSReactorDecodeError, SMSReactorError, SMSReactorHTTPError
from .executor import CommandExecutor
from .settings import SMSReactorSettings, configure_logging
from .translator import translate
from .transport import HttpTransport

# This controls what is available when someone does `from sms_reactor import *`
__all__ = [
    "SMSReactorClient",
    "SMSReactorCredentials",
    "SMSReactorSettings",
    "SMSReactorError",
    "SMSReactorHTTPError",
    "SMSReactorAPIError",
    "SMSReactorDecodeError",
    "CommandExecutor",
    "HttpTransport",
    "HttpMethod",
    "RawResponse",
    "ResponseKind",
    "Record",
    "configure_logging",
    "resolve_id",
    "translate",
]

__version__ = "0.1.0"
