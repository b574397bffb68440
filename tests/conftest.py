"""
Pytest configuration and shared fixtures for MDB_MAPPER tests.

This module provides:
- Sample entity and repository fixtures (see sample_entities.py)
- Mapper and store fixtures
- Mock Motor collection and topic fixtures
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from motor.motor_asyncio import AsyncIOMotorCollection
from sample_entities import DayOfWeek, Person, PersonRepository

from mdb_mapper.config import MapperConfig
from mdb_mapper.entities import Period
from mdb_mapper.mapping import DocumentMapper
from mdb_mapper.observability import clear_correlation_id
from mdb_mapper.repositories import InMemoryDocumentStore

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def clean_correlation_id():
    """Clear any correlation ID a test left in the context."""
    yield
    clear_correlation_id()


@pytest.fixture
def mapper() -> DocumentMapper:
    """Create a mapper with default configuration."""
    return DocumentMapper(config=MapperConfig(strict_numbers=False, merge_on_set=True))


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Create an empty in-memory document store."""
    return InMemoryDocumentStore("test.people")


@pytest.fixture
def person_repository(memory_store, mapper) -> PersonRepository:
    """Create a PersonRepository over the in-memory store."""
    return PersonRepository(memory_store, mapper=mapper)


@pytest.fixture
def alice() -> Person:
    """Create a sample person."""
    return Person(
        name="Alice",
        day=DayOfWeek.TUESDAY,
        birthday=datetime(1990, 5, 17, 8, 30, 15, 123456, tzinfo=timezone.utc),
        vacation=Period(begin=datetime(2020, 1, 1, tzinfo=timezone.utc)),
    )


@pytest.fixture
def mock_collection() -> MagicMock:
    """Create a mock Motor collection."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.full_name = "test_db.people"
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock(
        return_value=MagicMock(modified_count=0, upserted_id="test_id")
    )
    collection.replace_one = AsyncMock(
        return_value=MagicMock(modified_count=1, upserted_id=None)
    )
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


@pytest.fixture
def mock_topic() -> MagicMock:
    """Create a mock message topic."""
    topic = MagicMock()
    topic.publish = AsyncMock(return_value="message-id-1")
    return topic
