"""
MongoDB Document Store

Implements the DocumentStore capability on top of a Motor collection.
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from .base import DocumentStore

logger = logging.getLogger(__name__)


class MongoDocumentStore(DocumentStore):
    """
    MongoDB implementation of the DocumentStore capability.

    Merging writes use ``$set`` with ``upsert=True``; non-merging writes
    replace the whole document.

    Example:
        store = MongoDocumentStore(db["people"])
        people = PersonRepository(store)
        await people.upsert(person)
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize the MongoDB document store.

        Args:
            collection: Motor collection holding the documents
        """
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self._collection

    @property
    def path(self) -> str:
        return self._collection.full_name

    async def get(self, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""
        return await self._collection.find_one({"_id": id})

    async def set(self, id: str, document: dict[str, Any], merge: bool = True) -> None:
        """Write a document, merging or replacing."""
        if merge:
            fields = {k: v for k, v in document.items() if k != "_id"}
            # an empty $set is rejected by the server
            update = {"$set": fields} if fields else {"$setOnInsert": {"_id": id}}
            result = await self._collection.update_one({"_id": id}, update, upsert=True)
        else:
            result = await self._collection.replace_one(
                {"_id": id}, {**document, "_id": id}, upsert=True
            )
        logger.debug(
            f"Wrote {self.path}/{id} (merge={merge}, "
            f"modified={result.modified_count}, upserted={result.upserted_id is not None})"
        )

    async def delete(self, id: str) -> bool:
        """Delete a document by ID."""
        result = await self._collection.delete_one({"_id": id})
        return result.deleted_count > 0
