"""Per-category reconciliation against the remote catalog.

Read-before-write is the only duplicate-prevention mechanism: a product set is
created solely when the lookup for the category's retailer id succeeds and
returns nothing. A failed lookup is reported as an error and never treated as
"not found".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from setsync.config.errors import ConfigurationError
from setsync.config.logging import log_context
from setsync.domain.ports.catalog import CatalogAPIError

from .locks import RetailerLocks
from .payload import build_sync_payload
from .result import Err, Ok, SyncError, SyncErrorKind
from .types import SyncAction, SyncOutcome, retailer_id_for

if TYPE_CHECKING:
    from setsync.domain.ports.catalog import CatalogClient, CatalogIdentityProvider

    from .result import Result
    from .types import CatalogId, CategoryIdentity, LocalCategory, RemoteSetId, SyncPayload

log = getLogger(__name__)


def _api_error(
    kind: SyncErrorKind,
    operation: str,
    retailer_id: str,
    exc: CatalogAPIError,
) -> SyncError:
    return SyncError(
        kind=kind,
        operation=operation,
        retailer_id=retailer_id,
        message=str(exc),
        code=exc.code,
        retryable=exc.retryable,
        exception=exc,
    )


@dataclass(slots=True)
class Reconciler:
    """Apply the minimal create/update/delete for one category."""

    client: CatalogClient
    catalog: CatalogIdentityProvider
    force_delete: bool = True
    locks: RetailerLocks = field(default_factory=RetailerLocks)

    def upsert(self, category: LocalCategory) -> Result[SyncOutcome]:
        """Create the category's product set, or fully replace the existing one."""

        retailer_id = retailer_id_for(category)
        with self.locks.hold(retailer_id):
            catalog_id = self._catalog_id(retailer_id, operation="upsert")
            if isinstance(catalog_id, Err):
                return catalog_id

            match self.resolve(catalog_id.value, retailer_id):
                case Err() as failure:
                    return failure
                case Ok(value=None):
                    payload = build_sync_payload(category)
                    return self._create(catalog_id.value, payload)
                case Ok(value=remote_set_id):
                    payload = build_sync_payload(category)
                    return self._update(catalog_id.value, remote_set_id, payload)

    def delete(self, identity: CategoryIdentity) -> Result[SyncOutcome]:
        """Delete the product set linked to an already-deleted category.

        Only a failed lookup is returned as an error. A rejected delete is logged
        and absorbed since the local deletion has already happened.
        """

        retailer_id = retailer_id_for(identity)
        with self.locks.hold(retailer_id):
            catalog_id = self._catalog_id(retailer_id, operation="delete")
            if isinstance(catalog_id, Err):
                return catalog_id

            match self.resolve(catalog_id.value, retailer_id):
                case Err() as failure:
                    return failure
                case Ok(value=None):
                    log.debug(
                        "No product set linked to retailer id %s; nothing to delete",
                        retailer_id,
                    )
                    return Ok(SyncOutcome(retailer_id=retailer_id, action=SyncAction.NOT_LINKED))
                case Ok(value=remote_set_id):
                    return Ok(self._delete(catalog_id.value, retailer_id, remote_set_id))

    def resolve(self, catalog_id: CatalogId, retailer_id: str) -> Result[RemoteSetId | None]:
        """Look up the product set id currently linked to ``retailer_id``."""

        log.debug(
            "Reading product set",
            extra=log_context(retailer_id=retailer_id, catalog_id=catalog_id),
        )
        try:
            remote_set_id = self.client.read(catalog_id, retailer_id)
        except CatalogAPIError as exc:
            log.error(
                "There was an error trying to get product set data in catalog %s: %s",
                catalog_id,
                exc,
                extra=log_context(retailer_id=retailer_id, catalog_id=catalog_id),
                exc_info=exc,
            )
            return Err(_api_error(SyncErrorKind.LOOKUP, "read", retailer_id, exc))

        log.debug(
            "Read product set",
            extra=log_context(retailer_id=retailer_id, product_set_id=remote_set_id),
        )
        return Ok(remote_set_id or None)

    def _catalog_id(self, retailer_id: str, *, operation: str) -> Result[CatalogId]:
        try:
            return Ok(self.catalog.get_product_catalog_id())
        except ConfigurationError as exc:
            log.error("Catalog id unavailable for %s: %s", operation, exc, exc_info=exc)
            return Err(
                SyncError(
                    kind=SyncErrorKind.LOCAL,
                    operation=operation,
                    retailer_id=retailer_id,
                    message=str(exc),
                    exception=exc,
                )
            )

    def _create(self, catalog_id: CatalogId, payload: SyncPayload) -> Result[SyncOutcome]:
        context = log_context(catalog_id=catalog_id, product_set_data=payload.as_form())
        log.debug("Creating product set", extra=context)
        try:
            remote_set_id = self.client.create(catalog_id, payload)
        except CatalogAPIError as exc:
            log.error(
                "There was an error trying to create product set: %s",
                exc,
                extra=context,
                exc_info=exc,
            )
            return Err(_api_error(SyncErrorKind.WRITE, "create", payload.retailer_id, exc))

        log.info(
            "Created product set %s for retailer id %s", remote_set_id, payload.retailer_id
        )
        return Ok(
            SyncOutcome(
                retailer_id=payload.retailer_id,
                action=SyncAction.CREATED,
                remote_set_id=remote_set_id,
            )
        )

    def _update(
        self,
        catalog_id: CatalogId,
        remote_set_id: RemoteSetId,
        payload: SyncPayload,
    ) -> Result[SyncOutcome]:
        context = log_context(
            catalog_id=catalog_id,
            product_set_id=remote_set_id,
            product_set_data=payload.as_form(),
        )
        log.debug("Updating product set", extra=context)
        try:
            self.client.update(remote_set_id, payload)
        except CatalogAPIError as exc:
            log.error(
                "There was an error trying to update product set: %s",
                exc,
                extra=context,
                exc_info=exc,
            )
            return Err(_api_error(SyncErrorKind.WRITE, "update", payload.retailer_id, exc))

        log.info("Updated product set %s for retailer id %s", remote_set_id, payload.retailer_id)
        return Ok(
            SyncOutcome(
                retailer_id=payload.retailer_id,
                action=SyncAction.UPDATED,
                remote_set_id=remote_set_id,
            )
        )

    def _delete(
        self,
        catalog_id: CatalogId,
        retailer_id: str,
        remote_set_id: RemoteSetId,
    ) -> SyncOutcome:
        try:
            self.client.delete(remote_set_id, force=self.force_delete)
        except CatalogAPIError as exc:
            log.error(
                "There was an error trying to delete product set in catalog %s: %s",
                catalog_id,
                exc,
                extra=log_context(
                    retailer_id=retailer_id,
                    product_set_id=remote_set_id,
                    code=exc.code,
                ),
                exc_info=exc,
            )
            return SyncOutcome(
                retailer_id=retailer_id,
                action=SyncAction.DELETE_FAILED,
                remote_set_id=remote_set_id,
            )

        log.info("Deleted product set %s for retailer id %s", remote_set_id, retailer_id)
        return SyncOutcome(
            retailer_id=retailer_id,
            action=SyncAction.DELETED,
            remote_set_id=remote_set_id,
        )
