"""Ports for reading the local category taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from setsync.domain.types import LocalCategory


@runtime_checkable
class CategorySource(Protocol):
    """Read-only view of the taxonomy store."""

    def list_categories(self) -> Sequence[LocalCategory]:
        """Return every category, empty ones included, in ascending ``category_id``."""
        ...

    def get_category(self, category_id: int) -> LocalCategory | None: ...
