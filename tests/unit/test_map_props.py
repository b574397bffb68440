"""
Unit tests for DocumentMapper.map_props.

Tests property mapping including:
- Default identity mapping and list copying
- Getter and setter prefixes
- Custom, per-key and enumeration converters
- Setters on richer targets
"""

import pytest
from sample_entities import DayOfWeek

from mdb_mapper.exceptions import UnrecognizedEnumerationValueError
from mdb_mapper.mapping import ABSENT, Custom, Identity, Scalar, ScalarKind, prop

SETTER_PREFIXES = ["", "_"]


class To:
    """Target with a counting property setter."""

    sets = 0

    @property
    def string(self):
        return self._string

    @string.setter
    def string(self, value):
        To.sets += 1
        self._string = value


class TestMapPropsBasics:
    """Test identity mapping of basic properties."""

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_maps_scalars(self, mapper, setter_prefix):
        """Test that strings, numbers and booleans are copied."""
        source = {"string": "s", "number": 1, "boolean": True}

        target = mapper.map_props(source=source, setter_prefix=setter_prefix)

        assert target[prop("string", setter_prefix)] == "s"
        assert target[prop("number", setter_prefix)] == 1
        assert target[prop("boolean", setter_prefix)] is True
        assert len(target) == 3

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_identity_copies_lists(self, mapper, setter_prefix):
        """Test that mutating the source list does not change the target."""
        source = {"array": [1, 2, 3]}

        target = mapper.map_props(source=source, setter_prefix=setter_prefix)
        mapped = target[prop("array", setter_prefix)]
        assert mapped == [1, 2, 3]
        assert mapped is not source["array"]

        for i in range(len(source["array"])):
            source["array"][i] += 1
        assert mapped == [1, 2, 3]

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_custom_converter_function(self, mapper, setter_prefix):
        """Test a single custom converter used for every key."""
        source = {"array": [1, 2, 3]}

        target = mapper.map_props(
            source=source,
            setter_prefix=setter_prefix,
            converters=lambda key, src, getter_prefix: list(src[f"{getter_prefix}{key}"]),
        )
        assert target[prop("array", setter_prefix)] == [1, 2, 3]

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_custom_converter_copies_nested(self, mapper, setter_prefix):
        """Test a custom converter that copies a nested object."""
        source = {"nested": {"value": "nested"}}

        def copy_nested(key, src, getter_prefix):
            return {"value": src[f"{getter_prefix}{key}"]["value"]}

        target = mapper.map_props(
            source=source, setter_prefix=setter_prefix, converters=copy_nested
        )
        assert target[prop("nested", setter_prefix)]["value"] == "nested"

        source["nested"]["value"] += "x"
        assert target[prop("nested", setter_prefix)]["value"] == "nested"

    def test_defaults(self, mapper):
        """Test that no arguments yields an empty dict."""
        assert mapper.map_props() == {}

    def test_single_key_is_wrapped(self, mapper):
        """Test that a single key string maps just that key."""
        target = mapper.map_props(keys="a", source={"a": 1, "b": 2})
        assert target == {"a": 1}

    def test_does_not_mutate_source(self, mapper):
        """Test that the source is left untouched."""
        source = {"a": [1, 2], "day": 2}
        mapper.map_props(source=source, converters={"day": DayOfWeek})
        assert source == {"a": [1, 2], "day": 2}

    def test_missing_keys_are_skipped(self, mapper):
        """Test that keys missing from the source leave the target untouched."""
        target = mapper.map_props(keys=["a", "missing"], source={"a": 1}, target={"missing": 0})
        assert target == {"a": 1, "missing": 0}

    def test_none_is_written(self, mapper):
        """Test that an explicit None is a value, not a skip."""
        assert mapper.map_props(source={"a": None}) == {"a": None}

    def test_absent_result_is_not_written(self, mapper):
        """Test that converters returning ABSENT leave the field untouched."""
        target = mapper.map_props(
            source={"a": 1, "b": 2},
            target={"a": "kept"},
            converters={"a": lambda key, src, prefix: ABSENT},
        )
        assert target == {"a": "kept", "b": 2}


class TestMapPropsPrefixes:
    """Test getter and setter prefixes."""

    @pytest.mark.parametrize(
        "getter_prefix,setter_prefix", [("", ""), ("", "_"), ("_", ""), ("_", "_")]
    )
    def test_reads_getter_and_writes_setter_prefix(self, mapper, getter_prefix, setter_prefix):
        """Test that keys are read with one prefix and written with the other."""
        source = {f"{getter_prefix}name": "Alice"}

        target = mapper.map_props(
            keys=["name"],
            source=source,
            getter_prefix=getter_prefix,
            setter_prefix=setter_prefix,
        )
        assert target == {f"{setter_prefix}name": "Alice"}

    def test_default_keys_strip_getter_prefix(self, mapper):
        """Test that default keys are the source fields named with the getter prefix."""
        source = {"_name": "Alice", "_age": 30, "type": "ignored"}

        target = mapper.map_props(source=source, getter_prefix="_")
        assert target == {"name": "Alice", "age": 30}


class TestMapPropsEnumerations:
    """Test enumeration converters."""

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_enumeration_class_for_all_keys(self, mapper, setter_prefix):
        """Test an enumeration class used as the converter for every key."""
        source = {"enumeration": 2, "enumerations": ["MONDAY", 3]}

        target = mapper.map_props(
            source=source, setter_prefix=setter_prefix, converters=DayOfWeek
        )
        assert target[prop("enumeration", setter_prefix)] is DayOfWeek.TUESDAY
        assert target[prop("enumerations", setter_prefix)] == [
            DayOfWeek.MONDAY,
            DayOfWeek.WEDNESDAY,
        ]

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_enumeration_class_by_key(self, mapper, setter_prefix):
        """Test enumeration classes given per key."""
        source = {"enumeration": 2, "enumerations": ["MONDAY", 3]}

        target = mapper.map_props(
            source=source,
            setter_prefix=setter_prefix,
            converters={"enumeration": DayOfWeek, "enumerations": DayOfWeek},
        )
        assert target[prop("enumeration", setter_prefix)] is DayOfWeek.TUESDAY
        assert target[prop("enumerations", setter_prefix)] == [
            DayOfWeek.MONDAY,
            DayOfWeek.WEDNESDAY,
        ]

    def test_unrecognized_value_raises(self, mapper):
        """Test that an unknown stored value aborts the mapping."""
        target = {}
        with pytest.raises(UnrecognizedEnumerationValueError):
            mapper.map_props(
                keys=["name", "day"],
                source={"name": "Alice", "day": "FUNDAY"},
                target=target,
                converters={"day": DayOfWeek},
            )
        assert target == {"name": "Alice"}

    def test_alice_round_trip(self, mapper):
        """Test the entity -> document -> entity scenario with an enumeration."""
        entity = mapper.map_props(
            source={"name": "Alice", "enumeration": 2},
            converters={"enumeration": DayOfWeek},
        )
        assert entity == {"name": "Alice", "enumeration": DayOfWeek.TUESDAY}

        document = mapper.to_document(entity)
        assert document == {"name": "Alice", "enumeration": "TUESDAY"}

        restored = mapper.map_props(source=document, converters={"enumeration": DayOfWeek})
        assert restored == {"name": "Alice", "enumeration": DayOfWeek.TUESDAY}


class TestMapPropsVariants:
    """Test converter variants."""

    def test_scalar_variants(self, mapper):
        """Test scalar variants given per key."""
        source = {"s": 12, "f": "1.5kg", "i": "42", "b": 0, "x": "kept"}

        target = mapper.map_props(
            source=source,
            converters={
                "s": Scalar(ScalarKind.STRING),
                "f": Scalar(ScalarKind.FLOAT),
                "i": Scalar(ScalarKind.INTEGER),
                "b": Scalar(ScalarKind.BOOLEAN),
                "x": Identity(),
            },
        )
        assert target == {"s": "12", "f": 1.5, "i": 42, "b": False, "x": "kept"}

    def test_custom_variant(self, mapper):
        """Test the Custom variant."""
        target = mapper.map_props(
            source={"a": 2},
            converters=Custom(lambda key, src, prefix: src[key] * 10),
        )
        assert target == {"a": 20}

    def test_resolve(self, mapper):
        """Test converter resolution order."""

        def fn(key, src, prefix):
            return None

        assert mapper.resolve(DayOfWeek).enum_class is DayOfWeek
        assert mapper.resolve(fn) == Custom(fn)
        assert mapper.resolve(Identity()) == Identity()
        assert mapper.resolve(None) == Identity()
        assert mapper.resolve("not a converter") == Identity()


class TestMapPropsObjects:
    """Test mapping into and out of objects."""

    @pytest.mark.parametrize("setter_prefix", SETTER_PREFIXES)
    def test_setter_runs_once(self, mapper, setter_prefix):
        """Test that a property setter on the target runs exactly once."""
        To.sets = 0
        source = {
            "string": "s",
            "number": 1,
            "boolean": True,
            "array": [1, 2, 3],
            "nested": {"value": "nested"},
            "enumeration": 2,
            "enumerations": ["MONDAY", 3],
        }

        target = mapper.map_props(
            source=source,
            target=To(),
            setter_prefix=setter_prefix,
            converters={
                "nested": lambda key, src, prefix: {"value": src[f"{prefix}{key}"]["value"]},
                "enumeration": DayOfWeek,
                "enumerations": DayOfWeek,
            },
        )

        assert getattr(target, prop("string", setter_prefix)) == "s"
        assert target.string == "s"
        assert target._string == "s"
        assert getattr(target, prop("number", setter_prefix)) == 1
        assert getattr(target, prop("boolean", setter_prefix)) is True
        assert getattr(target, prop("array", setter_prefix)) == [1, 2, 3]

        source["array"][0] = 100
        source["nested"]["value"] += "x"
        assert getattr(target, prop("array", setter_prefix)) == [1, 2, 3]
        assert getattr(target, prop("nested", setter_prefix)) == {"value": "nested"}

        assert To.sets == (1 if setter_prefix == "" else 0)
        assert getattr(target, prop("enumeration", setter_prefix)) is DayOfWeek.TUESDAY
        assert getattr(target, prop("enumerations", setter_prefix)) == [
            DayOfWeek.MONDAY,
            DayOfWeek.WEDNESDAY,
        ]

    def test_object_source_default_keys(self, mapper, alice):
        """Test that an object source contributes its own instance fields."""
        target = mapper.map_props(keys=["name", "day"], source=alice, getter_prefix="_")
        assert target == {"name": "Alice", "day": DayOfWeek.TUESDAY}
