"""
Configuration for the SMS Reactor client.

Values are read from ``SMS_REACTOR_*`` environment variables or a local
``.env`` file.
"""
import logging
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .transport import DEFAULT_REDIRECT_LIMIT, DEFAULT_TIMEOUT

DEFAULT_BASE_URL = "http://sms-reactor.ru/api/v1"


class SMSReactorSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SMS_REACTOR_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    email: Optional[str] = Field(default=None, description="Account email used for HTTP Basic Auth.")
    password: Optional[SecretStr] = Field(default=None, description="Account password used for HTTP Basic Auth.")
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1, description="API base URL.")
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout (seconds).")
    max_redirects: int = Field(default=DEFAULT_REDIRECT_LIMIT, ge=0, description="Redirect budget per request.")
    log_level: str = Field(default="WARNING", description="Level used by configure_logging().")


def configure_logging(level: Optional[str] = None) -> None:
    """Sets up a console handler for the ``sms_reactor`` loggers.

    The library itself never installs handlers; scripts may call this.
    """
    if level is None:
        level = SMSReactorSettings().log_level
    level_value = getattr(logging, str(level).upper(), None)
    if not isinstance(level_value, int):
        raise ValueError(f"Invalid log level: {level}")

    package_logger = logging.getLogger("sms_reactor")
    package_logger.setLevel(level_value)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        package_logger.addHandler(handler)
