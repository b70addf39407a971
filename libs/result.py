"""Result type shared by use cases

Use cases never raise for expected failures. They return either
``Return.ok(value)`` or ``Return.err(Error(...))`` and the HTTP layer
decides how to present the error.
"""

from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class Error(BaseModel):
    """Machine-readable failure returned by a use case"""

    code: str = Field(..., description="Stable error code (e.g., DOCUMENT_NOT_FOUND)")
    message: str = Field(..., description="Human readable message")
    reason: Optional[str] = Field(default=None, description="Underlying cause")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Structured context (field, item_index, ...)"
    )


class Result(Generic[T]):
    """Outcome of a use case: exactly one of value or error is set"""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Optional[Error]:
        return self._error

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result(error={self._error.code})"
        return f"Result(value={self._value!r})"


class Return:
    """Constructors for Result"""

    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)
