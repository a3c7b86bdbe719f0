"""User domain exceptions."""

from .user_errors import (
    DatabaseError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidPasswordError,
    UserAlreadyExistsError,
    UserDomainError,
    UserNotFoundError,
)

__all__ = [
    "DatabaseError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidPasswordError",
    "UserAlreadyExistsError",
    "UserDomainError",
    "UserNotFoundError",
]
