"""
Time normalization.

Two representations meet here:

- the *instant*, an aware ``datetime`` in UTC, used by entities;
- the *storage timestamp*, ``bson.datetime_ms.DatetimeMS``, which pymongo
  encodes natively as a BSON UTC datetime with millisecond precision.

Conversions between them are lossless to the millisecond. Documents exported
from other stores sometimes carry timestamps as plain ``{seconds,
nanoseconds}`` objects; those are recognized and rebuilt as storage
timestamps first.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from numbers import Real
from typing import Any

from bson.datetime_ms import DatetimeMS
from dateutil.parser import ParserError
from dateutil.parser import parse as parse_date

from ..constants import (
    EPOCH,
    MAX_TIMESTAMP_MILLIS,
    MILLIS_PER_SECOND,
    MIN_TIMESTAMP_MILLIS,
    NANOS_PER_MILLI,
    NANOS_PER_SECOND,
    TIMESTAMP_NANOSECONDS_FIELDS,
    TIMESTAMP_SECONDS_FIELDS,
)
from ..exceptions import InvalidArgumentError
from .absent import ABSENT

_MILLISECOND = timedelta(milliseconds=1)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _first_field(value: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        if isinstance(value, Mapping):
            if name in value:
                return value[name]
        elif hasattr(value, name):
            return getattr(value, name)
    return None


def datetime_to_millis(value: datetime) -> int:
    """
    Return epoch milliseconds for a datetime, flooring sub-millisecond parts.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _MILLISECOND


def millis_to_instant(millis: int) -> datetime:
    """Return the UTC instant ``millis`` milliseconds after the epoch."""
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as e:
        raise InvalidArgumentError("Epoch milliseconds out of range", argument=millis) from e


def is_timestamp_like(value: Any, value_if_instance: bool = True) -> bool:
    """
    Return True if ``value`` looks like a storage timestamp.

    A ``DatetimeMS`` instance answers ``value_if_instance``. Anything else
    qualifies when it exposes numeric seconds and nanoseconds, either as
    mapping entries or attributes (``seconds``/``nanoseconds`` or the
    ``_seconds``/``_nanoseconds`` spelling).
    """
    if isinstance(value, DatetimeMS):
        return value_if_instance
    if value is None or isinstance(value, (str, bytes, Real, date)):
        return False
    seconds = _first_field(value, TIMESTAMP_SECONDS_FIELDS)
    nanoseconds = _first_field(value, TIMESTAMP_NANOSECONDS_FIELDS)
    return _is_number(seconds) and _is_number(nanoseconds)


def _check_millis(millis: Any) -> int:
    if not _is_number(millis) or not math.isfinite(millis):
        raise InvalidArgumentError("Value cannot be converted to a timestamp", argument=millis)
    millis = math.floor(millis)
    if not MIN_TIMESTAMP_MILLIS <= millis <= MAX_TIMESTAMP_MILLIS:
        raise InvalidArgumentError("Timestamp out of range", argument=millis)
    return millis


def timestamp_from_parts(seconds: int | float, nanoseconds: int) -> DatetimeMS:
    """
    Build a storage timestamp from seconds and nanoseconds since the epoch.

    Nanoseconds below millisecond granularity are dropped.

    Raises:
        InvalidArgumentError: If nanoseconds fall outside [0, 1e9) or the
            result is out of range
    """
    if not _is_number(nanoseconds) or not 0 <= nanoseconds < NANOS_PER_SECOND:
        raise InvalidArgumentError(
            "Timestamp nanoseconds must be in [0, 999999999]", argument=nanoseconds
        )
    if not _is_number(seconds) or not math.isfinite(seconds):
        raise InvalidArgumentError("Timestamp seconds must be a finite number", argument=seconds)
    millis = math.floor(seconds * MILLIS_PER_SECOND) + int(nanoseconds) // NANOS_PER_MILLI
    return DatetimeMS(_check_millis(millis))


def timestamp_from_document(plain: Any) -> DatetimeMS | None:
    """Rebuild a storage timestamp from a timestamp-shaped plain object."""
    if plain is None:
        return None
    return timestamp_from_parts(
        _first_field(plain, TIMESTAMP_SECONDS_FIELDS),
        _first_field(plain, TIMESTAMP_NANOSECONDS_FIELDS),
    )


def to_storage_timestamp(value: Any) -> DatetimeMS:
    """
    Return the given value as a storage timestamp.

    Accepts a ``DatetimeMS`` (returned unchanged), a timestamp-shaped object,
    a ``datetime`` (naive means UTC), a ``date`` (midnight UTC), or epoch
    milliseconds.

    Raises:
        InvalidArgumentError: If the value cannot be converted to a valid
            timestamp (NaN, infinities, strings, out-of-range values, ...)
    """
    if isinstance(value, DatetimeMS):
        return value
    if is_timestamp_like(value):
        return timestamp_from_document(value)

    if isinstance(value, datetime):
        value = datetime_to_millis(value)
    elif isinstance(value, date):
        value = datetime_to_millis(datetime(value.year, value.month, value.day))

    return DatetimeMS(_check_millis(value))


def _parse(value: Any) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if _is_number(value):
        return millis_to_instant(_check_millis(value))
    if isinstance(value, str):
        try:
            return _parse(parse_date(value))
        except (ParserError, ValueError, OverflowError) as e:
            raise InvalidArgumentError("Value cannot be parsed as a time", argument=value) from e
    raise InvalidArgumentError("Value cannot be converted to an instant", argument=value)


def to_instant(value: Any) -> Any:
    """
    Return the given value as a UTC instant.

    ``None`` and ``ABSENT`` come back unchanged. Timestamp-shaped objects and
    storage timestamps are converted to epoch milliseconds first; everything
    else goes through the general parse path (epoch milliseconds, datetimes,
    dates, and date strings).

    Raises:
        InvalidArgumentError: If the value cannot be parsed as an instant
    """
    if value is None or value is ABSENT:
        return value
    if is_timestamp_like(value, value_if_instance=False):
        value = timestamp_from_document(value)
    if isinstance(value, DatetimeMS):
        value = int(value)
    return _parse(value)
