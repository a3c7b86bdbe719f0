"""User domain ports."""

from .event_repository import IEventRepository
from .unit_of_work import IUnitOfWork, UnitOfWorkFactory, run_in_transaction
from .user_repository import IUserRepository

__all__ = [
    "IEventRepository",
    "IUnitOfWork",
    "IUserRepository",
    "UnitOfWorkFactory",
    "run_in_transaction",
]
