"""Explicit fetch results for GitHub API calls.

Every remote call produces a ``FetchResult``: either a value (which may be a
legitimately empty collection) or a ``FetchFailure`` describing why nothing
came back. Failures never raise past the client boundary.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class FailureKind(Enum):
    """Why a fetch produced no value."""

    MISSING_TOKEN = "missing_token"  # No credential configured
    TRANSPORT = "transport"  # DNS, TLS, timeout, connection errors
    HTTP_STATUS = "http_status"  # Non-2xx response
    NOT_JSON = "not_json"  # Success status but body is not JSON
    SHAPE = "shape"  # JSON lacks an expected field


@dataclass(frozen=True)
class FetchFailure:
    """Details of a failed fetch."""

    kind: FailureKind
    detail: str
    status_code: int | None = None


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a single fetch: a value or a failure, never both."""

    value: T | None = None
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        """True when the fetch produced a value."""
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        kind: FailureKind,
        detail: str,
        status_code: int | None = None,
    ) -> FetchResult[T]:
        return cls(failure=FetchFailure(kind=kind, detail=detail, status_code=status_code))

    def map(self, fn: Callable[[T], U]) -> FetchResult[U]:
        """Transform the value, turning malformed payloads into SHAPE failures.

        Args:
            fn: Mapper applied to the value of a successful result.

        Returns:
            Mapped result, the original failure, or a SHAPE failure when the
            mapper hits a missing key or an unexpected type.
        """
        if self.failure is not None:
            return FetchResult(failure=self.failure)
        try:
            return FetchResult(value=fn(self.value))  # type: ignore[arg-type]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            return FetchResult.fail(FailureKind.SHAPE, f"Unexpected response shape: {e!r}")

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` when the fetch failed."""
        if self.failure is not None:
            return default
        return self.value  # type: ignore[return-value]
