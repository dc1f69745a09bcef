"""
Error handling using Result[T, Error] pattern.

Every data-source call returns a Result so that tier fallback is explicit
at the call site instead of relying on exception propagation. The only
exception that is allowed to cross service boundaries is InvalidSymbolError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar, Generic, Any, Optional


class ErrorCode(Enum):
    """Error codes for categorizing failures."""

    RATELIMIT = "RATELIMIT"
    NODATA = "NODATA"
    INVALID = "INVALID"
    TIMEOUT = "TIMEOUT"
    EXTERNAL = "EXTERNAL"
    UNAVAILABLE = "UNAVAILABLE"  # every tier of a fallback chain failed


@dataclass
class AppError:
    """Application error with code, message, and context."""

    code: ErrorCode
    message: str
    context: Optional[dict] = None

    def __str__(self):
        ctx = f" | {self.context}" if self.context else ""
        return f"{self.code.value}: {self.message}{ctx}"


class InvalidSymbolError(ValueError):
    """Raised when a symbol fails syntactic validation."""

    def __init__(self, symbol: Any, reason: str = "invalid symbol format"):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Invalid symbol {symbol!r}: {reason}")


T = TypeVar('T')
E = TypeVar('E', bound=AppError)


@dataclass
class Result(Generic[T, E]):
    """
    Result type for functional error handling.

    A Result is either Ok(value) or Err(error), never both.

    Examples:
        result = await source.fetch_quote("AAPL")
        if result.is_ok:
            quote = result.value
        else:
            failures.append(result.error)
    """

    value: Optional[T] = None
    error: Optional[E] = None
    _is_ok: bool = True  # Track state explicitly to handle Ok(None)

    @classmethod
    def Ok(cls, value: T) -> 'Result[T, AppError]':
        """Create a successful result."""
        return Result(value=value, _is_ok=True)

    @classmethod
    def Err(cls, error: AppError) -> 'Result[T, AppError]':
        """Create an error result."""
        return Result(error=error, _is_ok=False)

    @property
    def is_ok(self) -> bool:
        """True if result is Ok."""
        return self._is_ok and self.error is None

    @property
    def is_err(self) -> bool:
        """True if result is Err."""
        return not self._is_ok or self.error is not None

    def unwrap(self) -> T:
        """
        Get the value or raise exception if error.
        Use only when you're certain result is Ok.
        """
        if self.is_err:
            raise RuntimeError(str(self.error))
        return self.value


# Convenience aliases
Ok = Result.Ok
Err = Result.Err
