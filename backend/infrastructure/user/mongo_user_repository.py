"""MongoDB User Repository implementation."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from domain.user.core.entities.user import User, UserPersistenceData
from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.user_id import UserId
from infrastructure.persistence.mongodb.base import MongoBaseRepository


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """BSON dates carry no zone; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def ensure_session_open(
    session: Optional[AsyncIOMotorClientSession], operation: str
) -> None:
    """Reject repository use after the owning unit of work has closed."""
    if session is not None and session.has_ended:
        raise DatabaseError(f"Failed to {operation}: transaction is not active")


class MongoUserRepository(MongoBaseRepository[User], IUserRepository):
    """MongoDB implementation of User repository.

    Document shape (``users`` collection):
    - _id: User UUID
    - email: Normalized email (unique index)
    - password_hash: bcrypt hash
    - created_at: Set on first insert only
    - updated_at: Last write timestamp
    - last_login: Last successful authentication (nullable)

    Examples:
        >>> async with MongoUnitOfWork(client, db) as uow:
        ...     await uow.users.save(user)
        ...     found = await uow.users.find_by_email(Email.create("a@b.io"))
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase[Dict[str, Any]],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> None:
        super().__init__(db, session)

    @property
    def collection_name(self) -> str:
        return "users"

    def to_document(self, entity: User) -> Dict[str, Any]:
        state = entity.get_internal_state()
        return {
            "_id": state.id,
            "email": state.email,
            "password_hash": state.password_hash,
            "created_at": state.created_at,
            "updated_at": state.updated_at,
            "last_login": state.last_login,
        }

    def from_document(self, doc: Dict[str, Any]) -> User:
        """Rebuild a user from its document.

        Raises:
            InvalidEmailError, InvalidPasswordError: Corrupt email or hash
            DatabaseError: Missing timestamps or an invalid stored id
        """
        created_at = as_utc(doc.get("created_at"))
        updated_at = as_utc(doc.get("updated_at"))
        if created_at is None or updated_at is None:
            raise DatabaseError(f"Failed to load user {doc.get('_id')!r}: missing timestamps")

        data = UserPersistenceData(
            id=str(doc["_id"]),
            email=doc.get("email", ""),
            password_hash=doc.get("password_hash", ""),
            created_at=created_at,
            updated_at=updated_at,
            last_login=as_utc(doc.get("last_login")),
        )
        try:
            return User.from_persistence(data)
        except ValueError as e:
            raise DatabaseError(f"Failed to load user {data.id!r}: {e}", e) from e

    async def save(self, user: User) -> User:
        """Upsert user by id.

        created_at goes through $setOnInsert so an update never rewrites it.

        Raises:
            DatabaseError: On any MongoDB failure, including a duplicate email
        """
        ensure_session_open(self._session, "save user")
        document = self.to_document(user)
        user_id = document.pop("_id")
        created_at = document.pop("created_at")

        try:
            await self._update_one(
                {"_id": user_id},
                {"$set": document, "$setOnInsert": {"created_at": created_at}},
                upsert=True,
            )
        except PyMongoError as e:
            raise DatabaseError(f"Failed to save user: {e}", e) from e

        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        ensure_session_open(self._session, "find user by ID")
        try:
            doc = await self._find_one({"_id": str(user_id)})
        except PyMongoError as e:
            raise DatabaseError(f"Failed to find user by ID: {e}", e) from e

        return self.from_document(doc) if doc else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        ensure_session_open(self._session, "find user by email")
        try:
            doc = await self._find_one({"email": str(email)})
        except PyMongoError as e:
            raise DatabaseError(f"Failed to find user by email: {e}", e) from e

        return self.from_document(doc) if doc else None
