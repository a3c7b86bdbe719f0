"""Base MongoDB repository with reusable patterns.

Provides common functionality for transaction-scoped MongoDB repositories:
- Collection handle bound to one client session
- Document mapping (domain ↔ MongoDB)
- Error logging

All concrete MongoDB repositories should inherit from MongoBaseRepository.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Every operation runs with the client session of the owning unit of work,
    so reads and writes join its multi-document transaction.

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Example:
        class MongoUserRepository(MongoBaseRepository[User]):
            @property
            def collection_name(self) -> str:
                return "users"
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase[Dict[str, Any]],
        session: Optional[AsyncIOMotorClientSession] = None,
    ):
        """
        Initialize repository.

        Args:
            db: Motor database
            session: Client session of the current transaction
        """
        self._db = db
        self._session = session
        self._collection = db[self.collection_name]

    # ============================================================
    # Abstract Properties/Methods (must be implemented)
    # ============================================================

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        """Convert domain entity to MongoDB document."""
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """Convert MongoDB document to domain entity."""
        pass

    # ============================================================
    # Protected Utility Methods (for subclasses)
    # ============================================================

    @property
    def collection(self) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Get MongoDB collection handle."""
        return self._collection

    async def _find_one(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find single document.

        Raises:
            PyMongoError: If MongoDB operation fails (logged and re-raised)
        """
        try:
            doc: Optional[Dict[str, Any]] = await self._collection.find_one(
                filter_dict, session=self._session
            )
            return doc
        except Exception as e:
            logger.error(
                f"Error in find_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents.

        Raises:
            PyMongoError: If MongoDB operation fails (logged and re-raised)
        """
        try:
            cursor = self._collection.find(filter_dict, session=self._session)
            if sort:
                cursor = cursor.sort(sort)
            documents: List[Dict[str, Any]] = await cursor.to_list(length=None)
            return documents
        except Exception as e:
            logger.error(
                f"Error in find_many: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        upsert: bool = False,
    ) -> int:
        """
        Update single document.

        Returns:
            Number of documents modified (0 or 1)

        Raises:
            PyMongoError: If MongoDB operation fails (logged and re-raised)
        """
        try:
            result = await self._collection.update_one(
                filter_dict, update_dict, upsert=upsert, session=self._session
            )
            return int(result.modified_count)
        except Exception as e:
            logger.error(
                f"Error in update_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise
