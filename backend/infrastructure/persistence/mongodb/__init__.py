"""MongoDB repository base classes."""

from .base import MongoBaseRepository

__all__ = ["MongoBaseRepository"]
