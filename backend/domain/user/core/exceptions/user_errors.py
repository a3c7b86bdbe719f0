"""User domain exceptions.

Every error carries a stable ``code`` and the ``http_status`` a boundary layer
should answer with. ``to_response()`` builds a transport-neutral error body
that never contains internal causes.
"""

from typing import Any, Dict, Optional


class UserDomainError(Exception):
    """Base exception for User domain errors."""

    code: str = "USER_DOMAIN_ERROR"
    http_status: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        """Build the public error body.

        Examples:
            >>> UserNotFoundError().to_response()
            {'error': {'message': 'User not found', 'code': 'USER_NOT_FOUND'}}
        """
        body: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return {"error": body}


class InvalidEmailError(UserDomainError):
    """Email is missing or malformed."""

    code = "INVALID_EMAIL"
    http_status = 400

    def __init__(self, message: str = "Invalid email format"):
        super().__init__(message)


class InvalidPasswordError(UserDomainError):
    """Password fails length constraints, or a stored hash is empty."""

    code = "INVALID_PASSWORD"
    http_status = 400

    def __init__(self, message: str = "Invalid password format"):
        super().__init__(message)


class InvalidCredentialsError(UserDomainError):
    """Authentication failed.

    Deliberately generic: raised for a malformed email, an unknown user and a
    wrong password alike.
    """

    code = "INVALID_CREDENTIALS"
    http_status = 401

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UserNotFoundError(UserDomainError):
    """User was not found in the repository."""

    code = "USER_NOT_FOUND"
    http_status = 404

    def __init__(self, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__("User not found")


class UserAlreadyExistsError(UserDomainError):
    """User with given email already exists."""

    code = "USER_EXISTS"
    http_status = 409

    def __init__(self, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__("User already exists")


class DatabaseError(UserDomainError):
    """Persistence I/O failed.

    The underlying exception is kept in ``cause`` (and chained as
    ``__cause__`` by callers using ``raise ... from``) for server-side
    logging only.
    """

    code = "DATABASE_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str = "Database operation failed",
        cause: Optional[BaseException] = None,
    ):
        self.cause = cause
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        return {"error": {"message": "Database operation failed", "code": self.code}}
