"""Synchronization defaults for product set reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError

DAY_IN_SECONDS: Final[int] = 24 * 60 * 60
PRODUCT_SETS_SYNC_THROTTLE_KEY: Final[str] = "productSetsSyncThrottle"
PRODUCT_SETS_SYNC_THROTTLE_TTL_SECONDS: Final[int] = DAY_IN_SECONDS - 1


@dataclass(frozen=True, slots=True)
class SyncConfig:
    throttle_key: str = PRODUCT_SETS_SYNC_THROTTLE_KEY
    throttle_ttl_seconds: int = PRODUCT_SETS_SYNC_THROTTLE_TTL_SECONDS
    force_delete: bool = True
    taxonomy_file: Path | None = None

    def __post_init__(self) -> None:
        if self.throttle_ttl_seconds <= 0:
            raise ConfigurationError(
                "Throttle TTL must be a positive number of seconds,"
                f" got {self.throttle_ttl_seconds}"
            )


def get_sync_config() -> SyncConfig:
    taxonomy_file = optional_env_var("SETSYNC_TAXONOMY_FILE")
    return SyncConfig(
        taxonomy_file=Path(taxonomy_file) if taxonomy_file else None,
        throttle_ttl_seconds=optional_int_env_var(
            "SETSYNC_THROTTLE_TTL_SECONDS", PRODUCT_SETS_SYNC_THROTTLE_TTL_SECONDS
        ),
    )
