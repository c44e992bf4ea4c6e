"""HTTP client for product sets on the Graph API catalog edge."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import BaseModel, ValidationError

from setsync.adapters.http_resilience import ResilientClient
from setsync.domain.ports.catalog import CatalogAPIError

from .schema import (
    CreatedResponse,
    GraphErrorResponse,
    ProductSetListResponse,
    SuccessResponse,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from setsync.config.catalog import CatalogConfig
    from setsync.config.http_resilience import ResilienceConfig
    from setsync.domain.types import CatalogId, RemoteSetId, RetailerId, SyncPayload

log = getLogger(__name__)

# Graph API throttling / temporary-unavailability error codes.
RETRYABLE_ERROR_CODES: Final[frozenset[int]] = frozenset({1, 2, 4, 17, 32, 341, 613, 80004})


def _is_retryable_status(status_code: int) -> bool:
    return status_code == httpx.codes.TOO_MANY_REQUESTS or status_code >= 500


def _decode_json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None


class GraphCatalogClient:
    """Catalog client backed by the Graph API product set endpoints."""

    def __init__(
        self,
        *,
        config: CatalogConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = replace(
            config.resilience,
            default_headers={
                **(config.resilience.default_headers or {}),
                "Authorization": f"Bearer {config.access_token}",
            },
        )
        self._client_factory = client_factory or ResilientClient

    def read(self, catalog_id: CatalogId, retailer_id: RetailerId) -> RemoteSetId | None:
        response = asyncio.run(
            self._request(
                "GET",
                f"{catalog_id}/product_sets",
                ProductSetListResponse,
                params={"retailer_id": retailer_id, "fields": "id"},
            )
        )
        if not response.data:
            return None
        if len(response.data) > 1:
            log.warning(
                "Catalog %s has %d product sets for retailer id %s; using the first",
                catalog_id,
                len(response.data),
                retailer_id,
            )
        return response.data[0].id

    def create(self, catalog_id: CatalogId, payload: SyncPayload) -> RemoteSetId:
        response = asyncio.run(
            self._request(
                "POST",
                f"{catalog_id}/product_sets",
                CreatedResponse,
                data=payload.as_form(),
            )
        )
        return response.id

    def update(self, remote_set_id: RemoteSetId, payload: SyncPayload) -> None:
        response = asyncio.run(
            self._request("POST", remote_set_id, SuccessResponse, data=payload.as_form())
        )
        if not response.success:
            raise CatalogAPIError(f"Graph API refused to update product set {remote_set_id}")

    def delete(self, remote_set_id: RemoteSetId, *, force: bool) -> None:
        params = {"allow_live_product_set_deletion": "true"} if force else None
        response = asyncio.run(
            self._request("DELETE", remote_set_id, SuccessResponse, params=params)
        )
        if not response.success:
            raise CatalogAPIError(f"Graph API refused to delete product set {remote_set_id}")

    def _url(self, path: str) -> str:
        return f"/{self._config.api_version}/{path}"

    async def _request[TModel: BaseModel](
        self,
        method: str,
        path: str,
        model: type[TModel],
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> TModel:
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.request(
                    method,
                    self._url(path),
                    params=params,
                    data=data,
                )
            except httpx.HTTPError as exc:
                raise CatalogAPIError(
                    f"Graph API {method} {path} failed: {exc}", retryable=True
                ) from exc

        payload = _decode_json(response)
        if isinstance(payload, dict) and "error" in payload:
            raise self._error_from_payload(payload, response)

        if response.is_error:
            raise CatalogAPIError(
                f"Graph API {method} {path} returned HTTP {response.status_code}",
                retryable=_is_retryable_status(response.status_code),
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            raise CatalogAPIError(f"Unexpected Graph API response payload for {method} {path}")

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise CatalogAPIError(
                f"Unexpected Graph API response payload for {method} {path}"
            ) from exc

    def _error_from_payload(self, payload: object, response: httpx.Response) -> CatalogAPIError:
        try:
            detail = GraphErrorResponse.model_validate(payload).error
        except ValidationError:
            return CatalogAPIError(
                f"Unparseable Graph API error (HTTP {response.status_code})",
                retryable=_is_retryable_status(response.status_code),
                status_code=response.status_code,
            )
        log.error(
            "Graph API error %s (subcode %s, trace %s): %s",
            detail.code,
            detail.error_subcode,
            detail.fbtrace_id,
            detail.message,
        )
        retryable = (
            detail.is_transient
            or (detail.code is not None and detail.code in RETRYABLE_ERROR_CODES)
            or _is_retryable_status(response.status_code)
        )
        return CatalogAPIError(
            detail.message,
            code=detail.code,
            retryable=retryable,
            status_code=response.status_code,
        )
