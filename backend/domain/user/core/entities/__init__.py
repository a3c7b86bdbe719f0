"""User entities."""

from .user import User, UserPersistenceData

__all__ = ["User", "UserPersistenceData"]
