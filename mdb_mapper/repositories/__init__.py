"""
MDB Mapper Repository Pattern

Provides the document repository base and the stores it persists through.

Usage:
    from mdb_mapper.repositories import DocumentRepository, MongoDocumentStore

    class PersonRepository(DocumentRepository[Person]):
        def from_document(self, plain, entity=None, setter_prefix="", getter_prefix=""):
            ...

    people = PersonRepository(MongoDocumentStore(db["people"]))
    person = await people.get_by_id("42")
"""

from .base import DocumentRepository, DocumentStore, InMemoryDocumentStore
from .mongo import MongoDocumentStore

__all__ = [
    "DocumentRepository",
    "DocumentStore",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
]
