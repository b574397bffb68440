"""
Object/document mapping layer.

Translates between in-memory entities (typed fields, instants, enumerations,
nested value objects) and plain documents for MongoDB.
"""

from .absent import ABSENT, AbsentType, is_absent
from .converters import (
    Converter,
    Custom,
    Enumeration,
    FieldConverter,
    Identity,
    Scalar,
    ScalarKind,
    enum_member,
    enum_ordinal,
    field_converter,
    is_enumeration_class,
    to_boolean,
    to_float,
    to_int,
    to_string,
)
from .documents import DocumentConverter
from .mapper import DocumentMapper
from .properties import (
    get_largest_list_among,
    grow_all_lists_to_largest_among,
    own_field_names,
    prop,
    read_field,
    write_field,
)
from .registry import MapperRegistry
from .time import (
    datetime_to_millis,
    is_timestamp_like,
    millis_to_instant,
    timestamp_from_document,
    timestamp_from_parts,
    to_instant,
    to_storage_timestamp,
)

__all__ = [
    # Mapper
    "DocumentMapper",
    "DocumentConverter",
    "MapperRegistry",
    # Converters
    "Converter",
    "Identity",
    "Scalar",
    "ScalarKind",
    "Enumeration",
    "Custom",
    "FieldConverter",
    "field_converter",
    "is_enumeration_class",
    "enum_member",
    "enum_ordinal",
    "to_string",
    "to_float",
    "to_int",
    "to_boolean",
    # Absent
    "ABSENT",
    "AbsentType",
    "is_absent",
    # Properties
    "prop",
    "read_field",
    "write_field",
    "own_field_names",
    "get_largest_list_among",
    "grow_all_lists_to_largest_among",
    # Time
    "to_instant",
    "to_storage_timestamp",
    "is_timestamp_like",
    "timestamp_from_parts",
    "timestamp_from_document",
    "datetime_to_millis",
    "millis_to_instant",
]
