"""Ports for the remote product catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from setsync.domain.types import CatalogId, RemoteSetId, RetailerId, SyncPayload


class CatalogAPIError(RuntimeError):
    """Raised by catalog clients when a remote call fails.

    ``retryable`` marks failures that may succeed when repeated later (network
    errors, throttling, transient server errors).
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable
        self.status_code = status_code


@runtime_checkable
class CatalogClient(Protocol):
    """CRUD operations on remote product sets."""

    def read(self, catalog_id: CatalogId, retailer_id: RetailerId) -> RemoteSetId | None: ...

    def create(self, catalog_id: CatalogId, payload: SyncPayload) -> RemoteSetId: ...

    def update(self, remote_set_id: RemoteSetId, payload: SyncPayload) -> None: ...

    def delete(self, remote_set_id: RemoteSetId, *, force: bool) -> None: ...


@runtime_checkable
class CatalogIdentityProvider(Protocol):
    """Supplies the id of the catalog that product sets live in."""

    def get_product_catalog_id(self) -> CatalogId: ...
