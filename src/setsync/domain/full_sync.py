"""Throttled full reconciliation pass over every local category.

Two states: idle (no throttle flag) and throttled (flag present until its TTL
expires). The flag is taken before any category is processed, so a slow or
crashed pass still blocks a second pass within the same window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from setsync.config.logging import log_context
from setsync.config.sync import SyncConfig

from .result import Err, Ok, SyncError, SyncErrorKind
from .types import FullSyncResult, retailer_id_for

if TYPE_CHECKING:
    from setsync.domain.ports.taxonomy import CategorySource
    from setsync.domain.ports.throttle import ThrottleStore

    from .reconciler import Reconciler
    from .result import Result
    from .types import LocalCategory, SyncOutcome

log = getLogger(__name__)

THROTTLE_FLAG_VALUE = "yes"


@dataclass(slots=True)
class FullSync:
    reconciler: Reconciler
    categories: CategorySource
    throttle: ThrottleStore
    config: SyncConfig = field(default_factory=SyncConfig)

    def on_daily_tick(self) -> FullSyncResult:
        """Scheduler entry point."""
        return self.run()

    def is_throttled(self) -> bool:
        return self.throttle.get(self.config.throttle_key) == THROTTLE_FLAG_VALUE

    def run(self, *, force: bool = False) -> FullSyncResult:
        """Run one pass unless another ran within the throttle window.

        ``force`` skips the throttle check but still (re)arms the flag.
        """

        key = self.config.throttle_key
        ttl = self.config.throttle_ttl_seconds
        try:
            if force:
                log.info("Forcing product set sync; throttle flag %s reset", key)
                self.throttle.set(key, THROTTLE_FLAG_VALUE, ttl)
            elif not self.throttle.acquire(key, THROTTLE_FLAG_VALUE, ttl):
                log.info(
                    "Product set sync throttled: already ran within the last %s seconds", ttl
                )
                return FullSyncResult(throttled=True)
        except Exception as exc:  # noqa: BLE001
            log.exception("Could not take the product set sync throttle flag %s", key)
            return FullSyncResult(
                error=SyncError(
                    kind=SyncErrorKind.LOCAL,
                    operation="throttle",
                    retailer_id=None,
                    message=str(exc),
                    exception=exc,
                )
            )

        log.debug("Throttle flag %s set for %s seconds", key, ttl)
        return self._sync_all()

    def _sync_all(self) -> FullSyncResult:
        result = FullSyncResult()
        try:
            categories = sorted(self.categories.list_categories(), key=lambda c: c.category_id)
        except Exception as exc:  # noqa: BLE001
            log.exception("Could not enumerate local categories")
            result.error = SyncError(
                kind=SyncErrorKind.LOCAL,
                operation="list_categories",
                retailer_id=None,
                message=str(exc),
                exception=exc,
            )
            return result

        log.info("Syncing %d categories to product sets", len(categories))
        log.debug(
            "Found categories",
            extra=log_context(
                count=len(categories),
                categories=[
                    {
                        "category_id": category.category_id,
                        "name": category.name,
                        "retailer_id": retailer_id_for(category),
                    }
                    for category in categories
                ],
            ),
        )

        for category in categories:
            result.visited += 1
            log.debug("Processing category: %s (ID: %d)", category.name, category.category_id)
            match self._upsert(category):
                case Ok(value=outcome):
                    result.outcomes.append(outcome)
                case Err(error=error):
                    log.error(
                        "Error syncing category: %s (ID: %d): %s",
                        category.name,
                        category.category_id,
                        error.describe(),
                        extra=log_context(
                            category_id=category.category_id,
                            retailer_id=error.retailer_id,
                            kind=error.kind,
                        ),
                    )
                    result.failures[category.category_id] = error

        log.info(
            "Finished product set sync: visited=%s, created=%s, updated=%s, failed=%s",
            result.visited,
            result.created,
            result.updated,
            result.failed,
        )
        return result

    def _upsert(self, category: LocalCategory) -> Result[SyncOutcome]:
        try:
            return self.reconciler.upsert(category)
        except Exception as exc:  # noqa: BLE001
            log.exception("Unexpected failure syncing category %s", category.category_id)
            return Err(
                SyncError(
                    kind=SyncErrorKind.LOCAL,
                    operation="upsert",
                    retailer_id=retailer_id_for(category),
                    message=str(exc),
                    exception=exc,
                )
            )
