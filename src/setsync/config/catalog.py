"""Remote catalog (Graph API) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GRAPH_BASE_URL = "https://graph.facebook.com"
DEFAULT_GRAPH_API_VERSION = "v21.0"
GRAPH_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Identity of the remote catalog and how to reach it."""

    catalog_id: str
    access_token: str
    api_version: str
    resilience: ResilienceConfig

    def get_product_catalog_id(self) -> str:
        return self.catalog_id


def get_catalog_config(*, resilience: ResilienceConfig | None = None) -> CatalogConfig:
    values = require_env_vars(("SETSYNC_CATALOG_ID", "SETSYNC_ACCESS_TOKEN"))
    base_url = optional_env_var("SETSYNC_GRAPH_BASE_URL") or DEFAULT_GRAPH_BASE_URL
    api_version = optional_env_var("SETSYNC_GRAPH_API_VERSION") or DEFAULT_GRAPH_API_VERSION
    return CatalogConfig(
        catalog_id=values["SETSYNC_CATALOG_ID"],
        access_token=values["SETSYNC_ACCESS_TOKEN"],
        api_version=api_version,
        resilience=resilience
        or ResilienceConfig(
            name="graph",
            base_url=base_url,
            timeout_seconds=GRAPH_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
    )
