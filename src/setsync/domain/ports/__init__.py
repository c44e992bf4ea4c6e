"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogAPIError, CatalogClient, CatalogIdentityProvider
from .taxonomy import CategorySource
from .throttle import Clock, ThrottleStore, utcnow

__all__ = [
    "CatalogAPIError",
    "CatalogClient",
    "CatalogIdentityProvider",
    "CategorySource",
    "Clock",
    "ThrottleStore",
    "utcnow",
]
