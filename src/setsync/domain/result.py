"""Typed success/failure values passed between the reconciliation layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Never


class SyncErrorKind(StrEnum):
    LOOKUP = "lookup"  # remote read gave no definitive found/not-found answer
    WRITE = "write"  # remote create/update/delete was rejected
    LOCAL = "local"  # payload construction, configuration, taxonomy access


@dataclass(frozen=True, slots=True)
class SyncError:
    kind: SyncErrorKind
    operation: str
    retailer_id: str | None
    message: str
    code: int | None = None
    retryable: bool = False
    exception: BaseException | None = None

    @property
    def error_class(self) -> str:
        if self.exception is None:
            return type(self).__name__
        return type(self.exception).__name__

    def describe(self) -> str:
        return (
            f"{self.kind} failure during {self.operation}"
            f" (retailer_id={self.retailer_id}, code={self.code},"
            f" class={self.error_class}, retryable={self.retryable}): {self.message}"
        )


class SyncFailedError(RuntimeError):
    """Raised by ``Err.unwrap`` for callers that prefer exceptions."""

    def __init__(self, error: SyncError) -> None:
        super().__init__(error.describe())
        self.error = error


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    error: SyncError

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Never:
        raise SyncFailedError(self.error) from self.error.exception


type Result[T] = Ok[T] | Err
