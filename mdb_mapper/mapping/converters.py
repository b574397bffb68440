"""
Field converters.

A field converter is a function ``(key, source, getter_prefix) -> value``
that reads ``getter_prefix + key`` from ``source`` and returns the converted
value, or ``ABSENT`` when the field should not be set.

How a field is converted is described by a small closed set of variants:

- ``Identity()``: copy the value (lists are shallow-copied)
- ``Scalar(kind)``: string, float, integer, boolean or instant coercion
- ``Enumeration(enum_class)``: lookup by member name or ordinal
- ``Custom(fn)``: a user-supplied field converter

``DocumentMapper`` turns variants into cached field converters.
"""

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Any, Union

from ..exceptions import InvalidArgumentError, UnrecognizedEnumerationValueError
from .absent import ABSENT
from .properties import read_field
from .time import to_instant

FieldConverter = Callable[[str, Any, str], Any]

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


class ScalarKind(str, Enum):
    """Scalar coercions a field converter can apply."""

    STRING = "string"
    FLOAT = "float"
    INTEGER = "int"
    BOOLEAN = "boolean"
    INSTANT = "instant"


@dataclass(frozen=True)
class Identity:
    """Copy the field unchanged."""


@dataclass(frozen=True)
class Scalar:
    """Coerce the field to a scalar kind."""

    kind: ScalarKind


@dataclass(frozen=True)
class Enumeration:
    """Look the field up in an enumeration."""

    enum_class: type[Enum]


@dataclass(frozen=True)
class Custom:
    """Convert the field with a user-supplied field converter."""

    fn: FieldConverter


Converter = Union[Identity, Scalar, Enumeration, Custom]
CONVERTER_TYPES = (Identity, Scalar, Enumeration, Custom)


def is_enumeration_class(value: Any) -> bool:
    """Return True if ``value`` is an Enum class with at least one member."""
    return isinstance(value, type) and issubclass(value, Enum) and len(value) > 0


# ============================================================================
# ELEMENT CONVERSIONS
# ============================================================================


def identity(value: Any) -> Any:
    return value


def to_string(value: Any) -> Any:
    return None if value is None else str(value)


def to_boolean(value: Any) -> bool:
    return bool(value)


def _nan_or_raise(value: Any, kind: str, strict: bool) -> float:
    if strict:
        raise InvalidArgumentError(f"Value cannot be parsed as {kind}", argument=value)
    return math.nan


def to_float(value: Any, strict: bool = False) -> Any:
    """
    Parse ``value`` as a float, reading the longest numeric prefix of strings.

    Returns NaN for unparseable input (``None`` included), or raises
    InvalidArgumentError when ``strict`` is set.
    """
    if isinstance(value, (Real, Decimal)) and not isinstance(value, bool):
        return float(value)
    match = _FLOAT_PREFIX.match(value) if isinstance(value, str) else None
    if match is None:
        return _nan_or_raise(value, "float", strict)
    return float(match.group(1).replace("Infinity", "inf"))


def to_int(value: Any, strict: bool = False) -> Any:
    """
    Parse ``value`` as an integer, truncating toward zero.

    Strings are read up to the first non-digit. Returns NaN for unparseable
    input (``None`` included), or raises InvalidArgumentError when ``strict``
    is set.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, (Real, Decimal)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return _nan_or_raise(value, "integer", strict)
        return int(value)
    match = _INT_PREFIX.match(value) if isinstance(value, str) else None
    if match is None:
        return _nan_or_raise(value, "integer", strict)
    return int(match.group(1))


def enum_member(enum_class: type[Enum], value: Any) -> Any:
    """
    Return the member of ``enum_class`` stored as ``value``.

    ``value`` may be a member, a member name, or an ordinal (0-based position
    in definition order). ``None`` is returned unchanged.

    Raises:
        UnrecognizedEnumerationValueError: If no member matches
    """
    if value is None or isinstance(value, enum_class):
        return value
    if isinstance(value, str):
        member = enum_class.__members__.get(value)
        if member is not None:
            return member
    elif isinstance(value, int) and not isinstance(value, bool):
        members = list(enum_class)
        if 0 <= value < len(members):
            return members[value]
    raise UnrecognizedEnumerationValueError(enum_class, value)


def enum_ordinal(member: Enum) -> int:
    """Return the 0-based position of ``member`` in its enumeration."""
    return list(type(member)).index(member)


# ============================================================================
# FIELD CONVERTERS
# ============================================================================


def field_converter(convert: Callable[[Any], Any], skip_none: bool = False) -> FieldConverter:
    """
    Wrap an element conversion into a field converter.

    The returned function reads the prefixed field, returns ABSENT for a
    missing field (or for ``None`` when ``skip_none`` is set), converts lists
    and tuples element-wise into a new list, and converts anything else
    directly.
    """

    def convert_field(key: str, source: Any, getter_prefix: str = "") -> Any:
        value = read_field(source, f"{getter_prefix}{key}")
        if value is ABSENT or (skip_none and value is None):
            return ABSENT
        if isinstance(value, (list, tuple)):
            return [convert(it) for it in value]
        return convert(value)

    return convert_field


def scalar_function(kind: ScalarKind, strict_numbers: bool = False) -> Callable[[Any], Any]:
    """Return the element conversion for a scalar kind."""
    if kind is ScalarKind.STRING:
        return to_string
    if kind is ScalarKind.FLOAT:
        return lambda it: to_float(it, strict_numbers)
    if kind is ScalarKind.INTEGER:
        return lambda it: to_int(it, strict_numbers)
    if kind is ScalarKind.BOOLEAN:
        return to_boolean
    if kind is ScalarKind.INSTANT:
        return to_instant
    raise InvalidArgumentError("Unknown scalar kind", argument=kind)
