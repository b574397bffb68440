"""
Sample entities shared by the MDB_MAPPER tests.
"""

from enum import Enum

from mdb_mapper.repositories import DocumentRepository


class DayOfWeek(Enum):
    SUNDAY = "sun"
    MONDAY = "mon"
    TUESDAY = "tue"
    WEDNESDAY = "wed"
    THURSDAY = "thu"
    FRIDAY = "fri"
    SATURDAY = "sat"


class Person:
    """Entity with private fields behind validating properties."""

    def __init__(self, name=None, day=None, birthday=None, vacation=None):
        self._id = None
        self._name = name
        self._day = day
        self._birthday = birthday
        self._vacation = vacation
        self.name_sets = 0

    @property
    def id(self):
        return self._id

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        self.name_sets += 1
        self._name = value

    @property
    def day(self):
        return self._day

    @property
    def birthday(self):
        return self._birthday

    @property
    def vacation(self):
        return self._vacation

    def greet(self):
        return f"Hello, {self._name}"


class PersonRepository(DocumentRepository[Person]):
    """Concrete repository reading Person documents."""

    def from_document(self, plain, entity=None, setter_prefix="", getter_prefix=""):
        entity = entity or Person()
        self.mapper.map_props(
            keys=["id", "name", "day", "birthday", "vacation"],
            source=plain,
            target=entity,
            setter_prefix=setter_prefix,
            getter_prefix=getter_prefix,
            converters={
                "day": DayOfWeek,
                "birthday": self.mapper.instant_converter(),
                "vacation": self.mapper.period_converter(),
            },
        )
        return entity
