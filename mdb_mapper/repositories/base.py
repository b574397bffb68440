"""
Document Repository Pattern

Defines the document store capability repositories persist through, an
in-memory store for tests, and the repository base that uses a
DocumentMapper to turn entities into documents and back.
"""

import copy
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from ..config import MapperConfig
from ..constants import DOCUMENT_PATH_SEPARATOR, PRIVATE_FIELD_PREFIX
from ..exceptions import MethodNotImplementedError, ObjectExistsError, ObjectNotFoundError
from ..mapping import DocumentMapper
from ..mapping.properties import read_field, write_field
from ..observability import get_logger, log_operation, repository_context

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class DocumentStore(ABC):
    """
    Storage capability of a document repository.

    Implementations address documents by id within a single collection.
    """

    @property
    @abstractmethod
    def path(self) -> str:
        """Path of the collection this store writes to."""

    @abstractmethod
    async def get(self, id: str) -> dict[str, Any] | None:
        """
        Get a document by ID.

        Args:
            id: Document ID

        Returns:
            The stored document, or None if there is none
        """

    @abstractmethod
    async def set(self, id: str, document: dict[str, Any], merge: bool = True) -> None:
        """
        Write a document.

        Args:
            id: Document ID
            document: Document to store
            merge: Merge into an existing document instead of replacing it
        """

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """
        Delete a document by ID.

        Returns:
            True if a document was deleted
        """


class InMemoryDocumentStore(DocumentStore):
    """
    In-memory document store for testing.

    Stores deep copies of documents in a dictionary, useful for unit tests
    without database dependencies.
    """

    def __init__(self, path: str = "memory"):
        self._path = path
        self._documents: dict[str, dict[str, Any]] = {}

    @property
    def path(self) -> str:
        return self._path

    async def get(self, id: str) -> dict[str, Any] | None:
        document = self._documents.get(id)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, id: str, document: dict[str, Any], merge: bool = True) -> None:
        document = copy.deepcopy(document)
        if merge and id in self._documents:
            self._documents[id].update(document)
        else:
            self._documents[id] = document

    async def delete(self, id: str) -> bool:
        return self._documents.pop(id, None) is not None

    def clear(self) -> None:
        """Clear all documents (useful for test setup)."""
        self._documents.clear()

    def __len__(self) -> int:
        return len(self._documents)


class DocumentRepository(Generic[T]):
    """
    Repository base persisting entities as documents.

    Holds a DocumentMapper and a DocumentStore. Concrete repositories
    implement ``from_document`` with ``mapper.map_props`` and the mapper's
    converters; the write path works for any entity the mapper can convert.

    Example:
        class PersonRepository(DocumentRepository[Person]):
            def from_document(self, plain, entity=None, setter_prefix="", getter_prefix=""):
                return self.mapper.map_props(
                    keys=["id", "name", "day"],
                    source=plain,
                    target=entity or Person(),
                    setter_prefix=setter_prefix,
                    getter_prefix=getter_prefix,
                    converters={"day": DayOfWeek},
                )

        people = PersonRepository(MongoDocumentStore(db.people))
        await people.upsert(person)
        same = await people.get_by_id(person.id)
    """

    def __init__(
        self,
        store: DocumentStore,
        mapper: DocumentMapper | None = None,
        config: MapperConfig | None = None,
    ):
        """
        Initialize the repository.

        Args:
            store: Document store to persist through
            mapper: Document mapper (defaults to a new one using ``config``)
            config: Configuration (defaults to the mapper's, or MapperConfig())
        """
        self.config = config or (mapper.config if mapper else MapperConfig())
        self.config.validate()
        self.store = store
        self.mapper = mapper or DocumentMapper(config=self.config)

    @property
    def id_attribute(self) -> str:
        return self.config.id_attribute

    @property
    def path(self) -> str:
        return self.store.path

    @property
    def set_options(self) -> dict[str, bool]:
        return self.config.set_options

    def docpath(self, *parts: Any) -> str:
        """Return the document path for the given id parts."""
        return DOCUMENT_PATH_SEPARATOR.join([self.path, *(str(it) for it in parts)])

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def entity_id(self, entity: Any) -> Any:
        """Return the entity's id, or None if it has none."""
        value = read_field(entity, self.id_attribute)
        return None if not value else value

    def to_document(self, entity: T) -> dict[str, Any]:
        """Extract the persistable state of an entity."""
        return self._try_sync(lambda: self.mapper.to_document(entity))

    def from_document(
        self,
        plain: Mapping[str, Any],
        entity: T | None = None,
        setter_prefix: str = "",
        getter_prefix: str = "",
    ) -> T:
        """
        Rebuild an entity from a stored document.

        The concrete entity type cannot be inferred from a plain document,
        so concrete repositories must override this.

        Raises:
            MethodNotImplementedError: Always, in the base implementation
        """
        raise MethodNotImplementedError(f"{type(self).__name__}.from_document")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def insert(self, entity: T, merge: bool | None = None) -> str:
        """
        Store a new entity.

        Raises:
            ObjectExistsError: If a document with the entity's id exists
        """
        id = self.entity_id(entity)
        if id and await self._try_async(lambda: self.store.get(id)) is not None:
            raise ObjectExistsError(self.docpath(id), context={"type": type(entity).__name__})
        return await self.upsert(entity, merge=merge)

    async def upsert(self, entity: T, merge: bool | None = None) -> str:
        """
        Store an entity, creating or updating its document.

        An id is generated if the entity has none.

        Returns:
            The entity's id
        """
        id = self.entity_id(entity)
        if not id:
            id = str(uuid.uuid4())
            write_field(entity, self.id_attribute, id)

        merge = self.set_options["merge"] if merge is None else merge
        document = self.to_document(entity)

        with repository_context(self.path, document_id=id):
            started = time.perf_counter()
            await self._try_async(lambda: self.store.set(id, document, merge=merge))
            log_operation(
                logger,
                "repository.upsert",
                started=started,
                entity_type=type(entity).__name__,
                merge=merge,
            )
        return id

    async def find_by_id(self, id: str | None) -> T | None:
        """
        Find an entity by id.

        Returns:
            The entity, or None if the id is empty or no document exists
        """
        if not id:
            return None

        with repository_context(self.path, document_id=id):
            plain = await self._try_async(lambda: self.store.get(id))
            if plain is None:
                logger.debug(f"No document at {self.docpath(id)}")
                return None
            return self.from_document(
                plain, setter_prefix=PRIVATE_FIELD_PREFIX, getter_prefix=PRIVATE_FIELD_PREFIX
            )

    async def get_by_id(self, id: str | None) -> T:
        """
        Get an entity by id.

        Raises:
            ObjectNotFoundError: If no document exists for the id
        """
        entity = await self.find_by_id(id)
        if entity is None:
            raise ObjectNotFoundError(self.docpath(id))
        return entity

    async def exists(self, id: str | None) -> bool:
        """Check if a document exists for the id."""
        if not id:
            return False
        return await self._try_async(lambda: self.store.get(id)) is not None

    async def delete(self, id: str) -> bool:
        """
        Delete the document for the id.

        Returns:
            True if a document was deleted
        """
        with repository_context(self.path, document_id=id):
            started = time.perf_counter()
            deleted = await self._try_async(lambda: self.store.delete(id))
            log_operation(logger, "repository.delete", started=started, deleted=deleted)
        return deleted

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _translate_error(self, e: Exception) -> Exception:
        # TODO: map pymongo errors onto datastore-agnostic MapperError subclasses
        return e

    def _try_sync(self, fn: Callable[[], R]) -> R:
        try:
            return fn()
        except Exception as e:
            translated = self._translate_error(e)
            if translated is e:
                raise
            raise translated from e

    async def _try_async(self, fn: Callable[[], Awaitable[R]]) -> R:
        try:
            return await fn()
        except Exception as e:
            translated = self._translate_error(e)
            if translated is e:
                logger.warning(f"Store operation failed on {self.path}: {e}")
                raise
            raise translated from e
