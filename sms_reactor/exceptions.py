from typing import List, Optional


class SMSReactorError(Exception):
    """Base class for every error raised by the SMS Reactor client."""


class SMSReactorHTTPError(SMSReactorError):
    """Network or HTTP level failure, optionally carrying the raw response."""

    def __init__(self, message: str, response=None, url: Optional[str] = None):
        self.response = response
        self.url = url or (response.url if response is not None else None)
        full_message = f"{message}"
        if response is not None:
            full_message += f" | Status Code: {response.status_code}"
            if response.text:
                full_message += f" | Response: {response.text[:250]}..."
        super().__init__(full_message)

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    @property
    def response_text(self) -> Optional[str]:
        return self.response.text if self.response is not None else None


class SMSReactorAPIError(SMSReactorError):
    """The service rejected the request; the message is the service's own error text."""

    def __init__(self, message: str, errors: Optional[List[str]] = None, status_code: Optional[int] = None):
        self.message = message
        self.errors = errors if errors is not None else [message]
        self.status_code = status_code
        super().__init__(message)


class SMSReactorDecodeError(SMSReactorError):
    """A success response could not be decoded."""

    def __init__(self, message: str, response_text: Optional[str] = None):
        self.response_text = response_text
        full_message = f"{message}"
        if response_text:
            full_message += f" | Response: {response_text[:250]}..."
        super().__init__(full_message)
