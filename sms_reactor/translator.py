import logging
from datetime import datetime
from typing import Any

from .data_models import Record
from .exceptions import SMSReactorDecodeError

logger = logging.getLogger("sms_reactor.translator")

# Keys containing this marker hold timestamps, e.g. created_at, scheduled_at.
TIMESTAMP_MARKER = '_at'


def translate(value: Any) -> Any:
    """
    Translates a parsed JSON value into the client's result types.

    Lists become lists (element-wise), objects become ``Record`` instances and
    scalars are returned unchanged.
    """
    if isinstance(value, list):
        return [translate(item) for item in value]
    if isinstance(value, dict):
        return _to_record(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise TypeError(f"Unsupported type {type(value).__name__}")


def parse_timestamp(value: str) -> datetime:
    """Parses an ISO 8601 timestamp such as ``2020-01-01T00:00:00Z`` or ``2020-01-01 12:00:00+0300``."""
    try:
        return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError as err:
        logger.error(f"Failed to parse timestamp value '{value}': {err}")
        raise SMSReactorDecodeError(f"Invalid timestamp value '{value}'") from err


def _to_record(source: dict) -> Record:
    fields = {}
    for key, value in source.items():
        if TIMESTAMP_MARKER in key and isinstance(value, str):
            fields[key] = parse_timestamp(value)
        else:
            fields[key] = translate(value)
    return Record(**fields)
