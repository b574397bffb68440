"""
Constants for MDB_MAPPER.

This module contains the shared constants used across the mapping layer and
repositories to avoid magic numbers and strings.
"""

from datetime import datetime, timezone
from typing import Final

# ============================================================================
# TIME CONSTANTS
# ============================================================================

EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
"""Unix epoch as an aware UTC datetime."""

NANOS_PER_MILLI: Final[int] = 1_000_000
"""Nanoseconds in one millisecond."""

NANOS_PER_SECOND: Final[int] = 1_000_000_000
"""Nanoseconds in one second."""

MILLIS_PER_SECOND: Final[int] = 1000
"""Milliseconds in one second."""

MIN_TIMESTAMP_MILLIS: Final[int] = -62135596800000
"""Smallest storable timestamp: 0001-01-01T00:00:00.000Z (epoch millis)."""

MAX_TIMESTAMP_MILLIS: Final[int] = 253402300799999
"""Largest storable timestamp: 9999-12-31T23:59:59.999Z (epoch millis)."""

TIMESTAMP_SECONDS_FIELDS: Final[tuple[str, ...]] = ("seconds", "_seconds")
"""Field names recognized as the seconds part of a timestamp-shaped object."""

TIMESTAMP_NANOSECONDS_FIELDS: Final[tuple[str, ...]] = ("nanoseconds", "_nanoseconds")
"""Field names recognized as the nanoseconds part of a timestamp-shaped object."""

# ============================================================================
# CONVERTER CACHE NAMES
# ============================================================================

NOOP_CONVERTER: Final[str] = "noop"
STRING_CONVERTER: Final[str] = "string"
FLOAT_CONVERTER: Final[str] = "float"
INT_CONVERTER: Final[str] = "int"
BOOLEAN_CONVERTER: Final[str] = "boolean"
INSTANT_CONVERTER: Final[str] = "instant"
ENUM_CONVERTER_PREFIX: Final[str] = "enum:"

# ============================================================================
# DOCUMENT CONSTANTS
# ============================================================================

PERIOD_TYPE_FIELD: Final[str] = "type"
"""Field holding the concrete period variant name in a period document."""

PERIOD_BEGIN_FIELD: Final[str] = "begin"
PERIOD_END_FIELD: Final[str] = "end"

# ============================================================================
# REPOSITORY CONSTANTS
# ============================================================================

DEFAULT_ID_ATTRIBUTE: Final[str] = "_id"
"""Entity attribute (and document field) holding the identifier."""

PRIVATE_FIELD_PREFIX: Final[str] = "_"
"""Prefix of private entity fields, also used for stored field names."""

DOCUMENT_PATH_SEPARATOR: Final[str] = "/"
"""Separator used when building document paths."""

DEFAULT_SET_OPTIONS: Final[dict[str, bool]] = {"merge": True}
"""Default write options: merge into an existing document."""

# ============================================================================
# MESSAGING CONSTANTS
# ============================================================================

CORRELATION_ID_ATTRIBUTE: Final[str] = "correlation_id"
"""Message attribute (and log record field) carrying the correlation ID."""
