"""Public interface for the Graph API catalog adapter."""

from __future__ import annotations

from .client import RETRYABLE_ERROR_CODES, GraphCatalogClient
from .schema import (
    CreatedResponse,
    GraphErrorDetail,
    GraphErrorResponse,
    ProductSetListResponse,
    SuccessResponse,
)

__all__ = [
    "RETRYABLE_ERROR_CODES",
    "CreatedResponse",
    "GraphCatalogClient",
    "GraphErrorDetail",
    "GraphErrorResponse",
    "ProductSetListResponse",
    "SuccessResponse",
]
