"""
Entity graph to document conversion.

Conversion runs in two phases:

1. ``to_tree`` walks the entity graph and returns a tree of plain
   containers, replacing enumeration members by their names and datetimes
   and dates by storage timestamps. Objects become dicts of their own
   fields; periods are kept for phase two.
2. ``to_storage_document`` walks that tree and returns the document to
   persist: periods become ``{type, begin?, end?}`` documents, and callables
   and ABSENT values are dropped from mappings.

Subclasses may override either phase, e.g. to flatten references in entity
graphs that are not trees.
"""

import copy
import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from bson import Decimal128, ObjectId, Regex, Timestamp
from bson.datetime_ms import DatetimeMS

from ..constants import PERIOD_BEGIN_FIELD, PERIOD_END_FIELD, PERIOD_TYPE_FIELD
from ..entities import DatePeriod, Period
from ..exceptions import InvalidArgumentError
from .absent import ABSENT
from .properties import own_field_names
from .time import to_storage_timestamp

DEFAULT_PERIOD_TYPES: dict[str, type[Period]] = {
    Period.__name__: Period,
    DatePeriod.__name__: DatePeriod,
}

# Leaves pymongo encodes natively; kept as-is in both phases
BSON_LEAF_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    Decimal,
    Decimal128,
    ObjectId,
    UUID,
    Regex,
    re.Pattern,
    Timestamp,
    DatetimeMS,
)


class DocumentConverter:
    """
    Converts entity graphs into documents safe to persist.

    The only non-plain leaf in a converted document is
    ``bson.datetime_ms.DatetimeMS``.

    Example:
        converter = DocumentConverter()
        doc = converter.to_document(order)
        await collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)
    """

    def __init__(self, period_types: Mapping[str, type[Period]] | None = None):
        """
        Initialize the converter.

        Args:
            period_types: Period variants by name, used when reading period
                documents. Defaults to Period and DatePeriod.
        """
        self.period_types = dict(period_types or DEFAULT_PERIOD_TYPES)

    # ------------------------------------------------------------------
    # Phase 1
    # ------------------------------------------------------------------

    def to_tree(self, entity: Any) -> Any:
        """
        Return a plain tree copy of the entity graph.

        Raises:
            InvalidArgumentError: If the graph contains a cycle
        """
        return self._to_tree(entity, set())

    def _to_tree(self, it: Any, visiting: set[int]) -> Any:
        if isinstance(it, Enum):
            return it.name
        if it is None or it is ABSENT or isinstance(it, BSON_LEAF_TYPES):
            return it
        if isinstance(it, (datetime, date)):
            return to_storage_timestamp(it)
        if isinstance(it, Period):
            return copy.copy(it)
        if callable(it):
            return it

        if id(it) in visiting:
            raise InvalidArgumentError(
                "Entity graph contains a cycle", context={"type": type(it).__name__}
            )
        visiting.add(id(it))
        try:
            if isinstance(it, (list, tuple, set, frozenset)):
                return [self._to_tree(e, visiting) for e in it]
            if isinstance(it, Mapping):
                return {
                    (k.name if isinstance(k, Enum) else k): self._to_tree(v, visiting)
                    for k, v in it.items()
                }
            names = own_field_names(it)
            if not names and not hasattr(it, "__dict__"):
                return it
            return {name: self._to_tree(getattr(it, name), visiting) for name in names}
        finally:
            visiting.discard(id(it))

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    def to_storage_document(self, it: Any) -> Any:
        """
        Convert a tree produced by ``to_tree`` into a storable document.

        Raises:
            InvalidArgumentError: If ``it`` is a callable
        """
        if callable(it):
            raise InvalidArgumentError("Functions cannot be converted to a document", argument=it)
        if isinstance(it, DatetimeMS):
            return it
        if it is ABSENT:
            # list placeholders keep their position
            return None
        if isinstance(it, list):
            return [self.to_storage_document(e) for e in it]
        if isinstance(it, Period):
            return self.to_period_document(it)
        if isinstance(it, Mapping):
            return {
                k: self.to_storage_document(v)
                for k, v in it.items()
                if not callable(v) and v is not ABSENT
            }
        return it

    def to_document(self, entity: Any) -> Any:
        """
        Extract the persistable state of an entity as a document.

        Raises:
            InvalidArgumentError: If the entity is a callable, contains a
                cycle, or holds an unconvertible time value
        """
        if callable(entity):
            raise InvalidArgumentError(
                "Functions cannot be converted to a document", argument=entity
            )
        return self.to_storage_document(self.to_tree(entity))

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------

    def to_period_document(self, period: Period) -> dict[str, Any]:
        """Return ``{type, begin?, end?}`` for a period, omitting unset bounds."""
        result: dict[str, Any] = {PERIOD_TYPE_FIELD: type(period).__name__}
        if period.begin is not None:
            result[PERIOD_BEGIN_FIELD] = to_storage_timestamp(period.begin)
        if period.end is not None:
            result[PERIOD_END_FIELD] = to_storage_timestamp(period.end)
        return result

    def period_type(self, plain: Mapping[str, Any] | None, default: type[Period]) -> type[Period]:
        """
        Return the period variant a period document names.

        Raises:
            InvalidArgumentError: If the document names an unknown variant
        """
        name = plain.get(PERIOD_TYPE_FIELD) if plain else None
        if name is None:
            return default
        try:
            return self.period_types[name]
        except KeyError as e:
            raise InvalidArgumentError("Unknown period type", argument=name) from e
