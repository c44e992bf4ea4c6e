"""Taxonomy mutation handlers.

The host event bus calls these methods directly. They never raise: a category
create, update or delete must not fail because the remote sync did.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from setsync.config.logging import log_context

from .result import Err, Ok
from .types import CategoryChange, CategoryIdentity, ChangeKind, LocalCategory

if TYPE_CHECKING:
    from .reconciler import Reconciler
    from .result import SyncError
    from .types import SyncOutcome

log = getLogger(__name__)


@dataclass(slots=True)
class EventAdapter:
    reconciler: Reconciler

    def on_category_created(self, category: LocalCategory) -> SyncOutcome | None:
        return self.dispatch(CategoryChange.created(category))

    def on_category_updated(self, category: LocalCategory) -> SyncOutcome | None:
        return self.dispatch(CategoryChange.updated(category))

    def on_category_deleted(self, identity: CategoryIdentity) -> SyncOutcome | None:
        return self.dispatch(CategoryChange.deleted(identity))

    def dispatch(self, change: CategoryChange) -> SyncOutcome | None:
        """Apply ``change``; return the outcome, or ``None`` when sync failed."""

        try:
            match change:
                case CategoryChange(
                    kind=ChangeKind.DELETED, identity=CategoryIdentity() as identity
                ):
                    result = self.reconciler.delete(identity)
                case CategoryChange(
                    kind=ChangeKind.CREATED | ChangeKind.UPDATED,
                    category=LocalCategory() as category,
                ):
                    result = self.reconciler.upsert(category)
                case _:
                    raise ValueError(f"Incomplete {change.kind} category change")
        except Exception:  # noqa: BLE001
            log.exception("Unexpected product set sync failure for %s change", change.kind)
            return None

        match result:
            case Ok(value=outcome):
                return outcome
            case Err(error=error):
                _log_failure(change, error)
                return None


def _log_failure(change: CategoryChange, error: SyncError) -> None:
    log.error(
        "Product set sync exception: exception_code: %s; exception_class: %s;"
        " exception_message: %s",
        error.code,
        error.error_class,
        error.message,
        extra=log_context(
            change=change.kind,
            kind=error.kind,
            operation=error.operation,
            retailer_id=error.retailer_id,
            retryable=error.retryable,
        ),
        exc_info=error.exception,
    )
