"""Result type for expected business outcomes.

Application services return a ``Result`` when a failure is a normal,
anticipated outcome (bad input, unknown user, duplicate email). Infrastructure
faults are not wrapped: they propagate as exceptions.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value.

    Examples:
        >>> result = Success(42)
        >>> result.is_success
        True
        >>> result.unwrap()
        42
    """

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome carrying the error.

    Examples:
        >>> result = Failure(ValueError("boom"))
        >>> result.is_failure
        True
    """

    error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the carried error when it is an exception.

        Raises:
            The carried exception, or ValueError if the error is not one.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Cannot unwrap failed result: {self.error!r}")


Result = Union[Success[T], Failure[E]]
