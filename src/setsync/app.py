"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from setsync.adapters.graph import GraphCatalogClient
from setsync.adapters.sqlalchemy import SqlAlchemyThrottleStore, is_started, startup
from setsync.adapters.taxonomy_file import JsonTaxonomySource
from setsync.config import ConfigurationError, get_catalog_config, get_sync_config
from setsync.domain import EventAdapter, FullSync, Reconciler

if TYPE_CHECKING:
    from pathlib import Path

    from setsync.config import CatalogConfig, SyncConfig
    from setsync.domain import CategoryIdentity, FullSyncResult, Result, SyncOutcome
    from setsync.domain.ports import (
        CatalogClient,
        CatalogIdentityProvider,
        CategorySource,
        ThrottleStore,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class SyncService:
    """The wired reconciliation components for one catalog."""

    reconciler: Reconciler
    events: EventAdapter
    full_sync: FullSync
    categories: CategorySource


def build_sync_service(
    *,
    taxonomy_path: Path | None = None,
    catalog_config: CatalogConfig | None = None,
    catalog_client: CatalogClient | None = None,
    catalog: CatalogIdentityProvider | None = None,
    categories: CategorySource | None = None,
    throttle_store: ThrottleStore | None = None,
    sync_config: SyncConfig | None = None,
) -> SyncService:
    """Wire configuration and adapters; every collaborator may be injected."""

    effective_sync_config = sync_config or get_sync_config()

    if catalog_client is None or catalog is None:
        effective_catalog_config = catalog_config or get_catalog_config()
        catalog_client = catalog_client or GraphCatalogClient(config=effective_catalog_config)
        catalog = catalog or effective_catalog_config

    if categories is None:
        path = taxonomy_path or effective_sync_config.taxonomy_file
        if path is None:
            raise ConfigurationError(
                "No taxonomy source: pass --taxonomy-file or set SETSYNC_TAXONOMY_FILE"
            )
        categories = JsonTaxonomySource(path)

    if throttle_store is None:
        if not is_started():
            startup()
        throttle_store = SqlAlchemyThrottleStore()

    reconciler = Reconciler(
        client=catalog_client,
        catalog=catalog,
        force_delete=effective_sync_config.force_delete,
    )
    return SyncService(
        reconciler=reconciler,
        events=EventAdapter(reconciler=reconciler),
        full_sync=FullSync(
            reconciler=reconciler,
            categories=categories,
            throttle=throttle_store,
            config=effective_sync_config,
        ),
        categories=categories,
    )


def sync_all_product_sets(
    *,
    service: SyncService | None = None,
    force: bool = False,
) -> FullSyncResult:
    """Run the throttled full reconciliation pass."""

    effective_service = service or build_sync_service()
    log.info("Starting product set sync (force=%s)", force)
    return effective_service.full_sync.run(force=force)


def sync_category(category_id: int, *, service: SyncService | None = None) -> Result[SyncOutcome]:
    """Upsert the product set of a single category."""

    effective_service = service or build_sync_service()
    category = effective_service.categories.get_category(category_id)
    if category is None:
        raise LookupError(f"Category {category_id} not found in taxonomy source")
    return effective_service.reconciler.upsert(category)


def delete_category(
    identity: CategoryIdentity,
    *,
    service: SyncService | None = None,
) -> Result[SyncOutcome]:
    """Remove the product set linked to a deleted category."""

    effective_service = service or build_sync_service()
    return effective_service.reconciler.delete(identity)


def clear_sync_throttle(*, service: SyncService | None = None) -> None:
    effective_service = service or build_sync_service()
    effective_service.full_sync.throttle.clear(effective_service.full_sync.config.throttle_key)
    log.info("Cleared product set sync throttle")
