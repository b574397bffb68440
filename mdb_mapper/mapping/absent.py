"""
The ABSENT marker.

Converters return ``ABSENT`` to say "do not set this field". It is distinct
from ``None``, which is a real (null) value and is written like any other.
"""

from typing import Any


class AbsentType:
    """Type of the ``ABSENT`` singleton."""

    _instance: "AbsentType | None" = None

    def __new__(cls) -> "AbsentType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "AbsentType":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "AbsentType":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = AbsentType()


def is_absent(value: Any) -> bool:
    """Return True if ``value`` is the ABSENT marker."""
    return value is ABSENT
