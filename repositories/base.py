"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from abc import ABC
import logging

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.exceptions import ConflictError

ModelType = TypeVar("ModelType")

logger = logging.getLogger("mealplanner.repository")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations over one collection.
    Subclasses set ``collection_name`` and ``model`` (a class with ``from_document``).
    """

    collection_name: str
    model: Type[ModelType]
    duplicate_message = "Duplicate field value entered"

    def __init__(self, db: Database):
        self.db = db
        self.collection = db[self.collection_name]

    def _to_model(self, doc: Optional[Dict[str, Any]]) -> Optional[ModelType]:
        return self.model.from_document(doc) if doc else None

    def get_by_id(self, entity_id: ObjectId) -> Optional[ModelType]:
        """Get entity by ID"""
        return self._to_model(self.collection.find_one({"_id": entity_id}))

    def insert(self, doc: Dict[str, Any]) -> ModelType:
        """Insert a new document and return it as a model."""
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            logger.warning("Duplicate key on %s insert: %s", self.collection_name, exc)
            raise ConflictError(self.duplicate_message) from exc
        doc["_id"] = result.inserted_id
        return self._to_model(doc)


class OwnedRepository(BaseRepository[ModelType]):
    """
    Repository whose every query is scoped to the owning user.
    ``owner_field`` names the document field holding the owner's ObjectId.
    """

    owner_field: str
    default_sort: List[tuple]

    def _scope(self, owner_id: ObjectId, **extra) -> Dict[str, Any]:
        query = {self.owner_field: owner_id}
        query.update(extra)
        return query

    def get_owned(self, entity_id: ObjectId, owner_id: ObjectId) -> Optional[ModelType]:
        return self._to_model(
            self.collection.find_one(self._scope(owner_id, _id=entity_id))
        )

    def get_owned_document(
        self, entity_id: ObjectId, owner_id: ObjectId
    ) -> Optional[Dict[str, Any]]:
        """Raw stored document, for merging partial updates."""
        return self.collection.find_one(self._scope(owner_id, _id=entity_id))

    def list_owned(self, owner_id: ObjectId) -> List[ModelType]:
        cursor = self.collection.find(self._scope(owner_id)).sort(self.default_sort)
        return [self._to_model(doc) for doc in cursor]

    def list_owned_by_ids(
        self, ids: List[ObjectId], owner_id: ObjectId
    ) -> List[ModelType]:
        """Batch-load the owner's documents whose id is in ``ids``."""
        if not ids:
            return []
        cursor = self.collection.find(self._scope(owner_id, _id={"$in": list(ids)}))
        return [self._to_model(doc) for doc in cursor]

    def count_owned_by_ids(self, ids: List[ObjectId], owner_id: ObjectId) -> int:
        if not ids:
            return 0
        return self.collection.count_documents(
            self._scope(owner_id, _id={"$in": list(ids)})
        )

    def replace_owned(
        self, entity_id: ObjectId, owner_id: ObjectId, doc: Dict[str, Any]
    ) -> Optional[ModelType]:
        """Replace the stored document (already merged and validated)."""
        body = {k: v for k, v in doc.items() if k != "_id"}
        try:
            updated = self.collection.find_one_and_replace(
                self._scope(owner_id, _id=entity_id),
                body,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            logger.warning("Duplicate key on %s update: %s", self.collection_name, exc)
            raise ConflictError(self.duplicate_message) from exc
        return self._to_model(updated)

    def delete_owned(self, entity_id: ObjectId, owner_id: ObjectId) -> bool:
        """Delete entity by ID if owned; True when something was removed."""
        result = self.collection.delete_one(self._scope(owner_id, _id=entity_id))
        return result.deleted_count > 0
