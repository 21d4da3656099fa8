import logging
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)

# Date-time literal accepted by encoded queries. Hours are always 24-hour.
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Type tags used when validating operands.
STRING = "string"
NUMBER = "number"
LIST = "list"
DATE = "date"


def type_tag(value: Any) -> Optional[str]:
    """
    Classify an operand into one of the tags understood by the builder.

    ``bool`` is deliberately not a number here even though it subclasses
    ``int``. ``datetime`` is checked through ``date`` since it subclasses it.

    Returns:
        The tag name, or None when the value fits none of them.
    """
    if isinstance(value, str):
        return STRING
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return NUMBER
    if isinstance(value, (list, tuple)):
        return LIST
    if isinstance(value, date):
        return DATE
    return None


def type_name(value: Any) -> str:
    """Name of the runtime type of ``value`` for error messages."""
    return type(value).__name__


def describe_types(types: Sequence[str]) -> str:
    """Render an allowed-type set for error messages."""
    if len(types) > 1:
        return "Expected one of: " + ", ".join(types)
    return "Expected: " + ", ".join(types)


def render_scalar(value: Any) -> str:
    """Render a single operand value the way the service spells literals."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def join_values(values: Iterable[Any]) -> str:
    """Comma-join list operands for IN / NOT IN conditions."""
    return ",".join(render_scalar(v) for v in values)


def to_utc(value: date) -> datetime:
    """
    Convert a date or datetime to an aware UTC datetime.

    Naive datetimes, and plain dates (taken at midnight), are interpreted in
    the host's local time zone, which is what ``datetime.astimezone`` does.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    return value.astimezone(timezone.utc)


def format_datetime_utc(value: date) -> str:
    """
    Convert a date/datetime to UTC and format it as an encoded-query literal.

    Args:
        value: A ``datetime.date`` or ``datetime.datetime`` (including
            subclasses such as ``pandas.Timestamp``).

    Returns:
        The value as ``YYYY-MM-DD HH:MM:SS`` in UTC.
    """
    if not isinstance(value, date):
        raise TypeError(f"Expected date or datetime, got {type_name(value)}")
    formatted = to_utc(value).strftime(DATETIME_FORMAT)
    logger.debug(f"Formatted {value!r} as UTC literal '{formatted}'")
    return formatted
