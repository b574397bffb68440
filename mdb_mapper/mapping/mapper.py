"""
DocumentMapper

The mapping component a repository holds. It combines the converter cache,
the scalar/enumeration converters, the time normalizer, the property mapper
and the document converter behind one object.

Usage:
    from mdb_mapper.mapping import DocumentMapper, Scalar, ScalarKind

    mapper = DocumentMapper()

    # write path
    doc = mapper.to_document(person)

    # read path
    person = mapper.map_props(
        keys=["name", "day", "birthday"],
        source=doc,
        target=Person(),
        setter_prefix="_",
        converters={
            "day": DayOfWeek,
            "birthday": mapper.instant_converter(),
        },
    )
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from bson.datetime_ms import DatetimeMS

from ..config import MapperConfig
from ..constants import (
    BOOLEAN_CONVERTER,
    ENUM_CONVERTER_PREFIX,
    FLOAT_CONVERTER,
    INSTANT_CONVERTER,
    INT_CONVERTER,
    NOOP_CONVERTER,
    PERIOD_BEGIN_FIELD,
    PERIOD_END_FIELD,
    STRING_CONVERTER,
)
from ..entities import DatePeriod, Period
from ..exceptions import InvalidArgumentError
from .absent import ABSENT
from .converters import (
    CONVERTER_TYPES,
    Converter,
    Custom,
    Enumeration,
    FieldConverter,
    Identity,
    Scalar,
    ScalarKind,
    enum_member,
    field_converter,
    identity,
    is_enumeration_class,
    scalar_function,
)
from .documents import DocumentConverter
from .properties import own_field_names, write_field
from .registry import MapperRegistry
from .time import to_instant, to_storage_timestamp


ConverterSpec = Converter | FieldConverter | type[Enum] | None

_SCALAR_NAMES = {
    ScalarKind.STRING: STRING_CONVERTER,
    ScalarKind.FLOAT: FLOAT_CONVERTER,
    ScalarKind.INTEGER: INT_CONVERTER,
    ScalarKind.BOOLEAN: BOOLEAN_CONVERTER,
    ScalarKind.INSTANT: INSTANT_CONVERTER,
}


class DocumentMapper:
    """
    Maps entities to documents and documents back to entities.

    Field converters are built once per name and cached for the lifetime of
    the mapper, so a repository should hold on to a single instance.
    """

    def __init__(
        self,
        config: MapperConfig | None = None,
        registry: MapperRegistry | None = None,
        document_converter: DocumentConverter | None = None,
    ):
        """
        Initialize the mapper.

        Args:
            config: Mapper configuration (defaults to MapperConfig())
            registry: Converter cache (defaults to a new MapperRegistry)
            document_converter: Tree/document converter (defaults to a new
                DocumentConverter)
        """
        self.config = config or MapperConfig()
        self.registry = registry or MapperRegistry()
        self.document_converter = document_converter or DocumentConverter()

    # ------------------------------------------------------------------
    # Converters
    # ------------------------------------------------------------------

    def identity_converter(self) -> FieldConverter:
        return self.registry.get_or_create(lambda: field_converter(identity), NOOP_CONVERTER)

    def scalar_converter(self, kind: ScalarKind) -> FieldConverter:
        kind = ScalarKind(kind)
        strict = self.config.strict_numbers
        return self.registry.get_or_create(
            lambda: field_converter(
                scalar_function(kind, strict), skip_none=kind is ScalarKind.STRING
            ),
            _SCALAR_NAMES[kind],
        )

    def string_converter(self) -> FieldConverter:
        return self.scalar_converter(ScalarKind.STRING)

    def float_converter(self) -> FieldConverter:
        return self.scalar_converter(ScalarKind.FLOAT)

    def int_converter(self) -> FieldConverter:
        return self.scalar_converter(ScalarKind.INTEGER)

    def boolean_converter(self) -> FieldConverter:
        return self.scalar_converter(ScalarKind.BOOLEAN)

    def instant_converter(self) -> FieldConverter:
        return self.scalar_converter(ScalarKind.INSTANT)

    def enum_converter(self, enum_class: type[Enum]) -> FieldConverter:
        """Return the cached converter looking fields up in ``enum_class``."""
        if not is_enumeration_class(enum_class):
            raise InvalidArgumentError("Not an enumeration class", argument=enum_class)
        name = (
            f"{ENUM_CONVERTER_PREFIX}{enum_class.__module__}.{enum_class.__qualname__}"
            f"@{id(enum_class):x}"
        )
        return self.registry.get_or_create(
            lambda: field_converter(lambda it: enum_member(enum_class, it)), name
        )

    def resolve(self, spec: ConverterSpec) -> Converter:
        """
        Resolve a converter specification into a converter variant.

        Enumeration classes become ``Enumeration``, variants are returned
        as-is, other callables become ``Custom``, and anything else is
        ``Identity``.
        """
        if is_enumeration_class(spec):
            return Enumeration(spec)
        if isinstance(spec, CONVERTER_TYPES):
            return spec
        if callable(spec):
            return Custom(spec)
        return Identity()

    def converter_function(self, converter: Converter) -> FieldConverter:
        """Return the field converter for a converter variant."""
        if isinstance(converter, Identity):
            return self.identity_converter()
        if isinstance(converter, Scalar):
            return self.scalar_converter(converter.kind)
        if isinstance(converter, Enumeration):
            return self.enum_converter(converter.enum_class)
        if isinstance(converter, Custom):
            return converter.fn
        raise InvalidArgumentError("Unknown converter", argument=converter)

    # ------------------------------------------------------------------
    # Property mapping
    # ------------------------------------------------------------------

    def map_props(
        self,
        keys: str | list[str] | None = None,
        source: Any = None,
        target: Any = None,
        setter_prefix: str = "",
        getter_prefix: str = "",
        converters: ConverterSpec | Mapping[str, ConverterSpec] = None,
    ) -> Any:
        """
        Map top-level fields (non-recursively) from one object to another.

        Args:
            keys: Key or keys to map; defaults to the source's own fields
            source: Object or mapping to read from; defaults to ``{}``
            target: Object or mapping to write to; defaults to a new ``{}``
            setter_prefix: Prefix of the field names written on ``target``
            getter_prefix: Prefix of the field names read from ``source``
            converters: One converter for every key, converters by key, or an
                enumeration class; defaults to identity with list copying

        Returns:
            ``target``

        A converter returning ABSENT leaves the target field untouched. A
        converter raising aborts the call; fields mapped before it stay set.
        """
        source = {} if source is None else source
        target = {} if target is None else target
        setter_prefix = setter_prefix or ""
        getter_prefix = getter_prefix or ""

        if keys is None:
            keys = own_field_names(source)
            if getter_prefix:
                keys = [k[len(getter_prefix) :] for k in keys if k.startswith(getter_prefix)]
        elif isinstance(keys, str):
            keys = [keys]

        for key in keys:
            if isinstance(converters, Mapping):
                spec = converters.get(key)
            else:
                spec = converters
            convert = self.converter_function(self.resolve(spec))

            value = convert(key, source, getter_prefix)
            if value is not ABSENT:
                write_field(target, f"{setter_prefix}{key}", value)

        return target

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def to_storage_timestamp(self, value: Any) -> DatetimeMS:
        return to_storage_timestamp(value)

    def to_instant(self, value: Any) -> datetime | None:
        return to_instant(value)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def to_tree(self, entity: Any) -> Any:
        return self.document_converter.to_tree(entity)

    def to_document(self, entity: Any) -> Any:
        """Return the persistable document for an entity."""
        return self.document_converter.to_document(entity)

    def to_period_document(self, period: Period) -> dict[str, Any]:
        return self.document_converter.to_period_document(period)

    def from_period_document(
        self,
        plain: Mapping[str, Any] | None,
        entity: Period | None = None,
        setter_prefix: str = "",
        default_type: type[Period] = Period,
    ) -> Period:
        """
        Rebuild a period from its document.

        The variant named by the document's ``type`` is created unless an
        entity to fill is given. Bounds missing from the document keep the
        entity's current value. Through the public setters both bounds are
        replaced together.
        """
        if entity is None:
            entity = self.document_converter.period_type(plain, default_type)()
        if not plain:
            return entity

        bounds = self.map_props(
            keys=[PERIOD_BEGIN_FIELD, PERIOD_END_FIELD],
            source=plain,
            converters=self.instant_converter(),
        )
        if not setter_prefix and isinstance(entity, Period):
            return entity.set_bounds(
                bounds.get(PERIOD_BEGIN_FIELD, entity.begin),
                bounds.get(PERIOD_END_FIELD, entity.end),
            )
        return self.map_props(source=bounds, target=entity, setter_prefix=setter_prefix)

    def from_date_period_document(
        self,
        plain: Mapping[str, Any] | None,
        entity: DatePeriod | None = None,
        setter_prefix: str = "",
    ) -> Period:
        return self.from_period_document(
            plain, entity=entity, setter_prefix=setter_prefix, default_type=DatePeriod
        )

    def period_converter(self, default_type: type[Period] = Period) -> FieldConverter:
        """Return a field converter reading period documents."""

        def convert_period(key: str, source: Any, getter_prefix: str = "") -> Any:
            value = self.identity_converter()(key, source, getter_prefix)
            if value is ABSENT or value is None:
                return value
            if isinstance(value, list):
                return [self.from_period_document(it, default_type=default_type) for it in value]
            return self.from_period_document(value, default_type=default_type)

        return self.registry.get_or_create(
            lambda: convert_period, f"period:{default_type.__name__}"
        )
