"""Value types shared by the reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .result import SyncError

type RemoteSetId = str
type RetailerId = str
type CatalogId = str


@dataclass(frozen=True, slots=True)
class LocalCategory:
    """A node of the local taxonomy, as read from the taxonomy store."""

    category_id: int
    taxonomy_instance_id: int
    name: str
    description: str = ""
    url: str = ""
    thumbnail_url: str | None = None
    parent_id: int | None = None

    @property
    def identity(self) -> CategoryIdentity:
        return CategoryIdentity(
            category_id=self.category_id,
            taxonomy_instance_id=self.taxonomy_instance_id,
            name=self.name,
        )


@dataclass(frozen=True, slots=True)
class CategoryIdentity:
    """What survives of a category once the taxonomy store has deleted it."""

    category_id: int
    taxonomy_instance_id: int
    name: str | None = None


def retailer_id_for(category: LocalCategory | CategoryIdentity) -> RetailerId:
    """Return the join key between a local category and its remote set.

    The taxonomy-instance id is stable across renames; the display name and the
    numeric category id are never used.
    """

    return str(category.taxonomy_instance_id)


@dataclass(frozen=True, slots=True)
class SyncPayload:
    """Full-replace body sent on product set create and update."""

    name: str
    filter: str
    retailer_id: RetailerId
    metadata: str

    def as_form(self) -> dict[str, str]:
        return {
            "name": self.name,
            "filter": self.filter,
            "retailer_id": self.retailer_id,
            "metadata": self.metadata,
        }


class ChangeKind(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class CategoryChange:
    """A normalized taxonomy mutation."""

    kind: ChangeKind
    category: LocalCategory | None = None
    identity: CategoryIdentity | None = None

    def __post_init__(self) -> None:
        if self.kind is ChangeKind.DELETED:
            if self.identity is None:
                raise ValueError("Deleted category changes require an identity")
        elif self.category is None:
            raise ValueError(f"{self.kind} category changes require a category")

    @classmethod
    def created(cls, category: LocalCategory) -> CategoryChange:
        return cls(kind=ChangeKind.CREATED, category=category)

    @classmethod
    def updated(cls, category: LocalCategory) -> CategoryChange:
        return cls(kind=ChangeKind.UPDATED, category=category)

    @classmethod
    def deleted(cls, identity: CategoryIdentity) -> CategoryChange:
        return cls(kind=ChangeKind.DELETED, identity=identity)


class SyncAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_LINKED = "not_linked"
    DELETE_FAILED = "delete_failed"


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Result of reconciling one category against the remote catalog."""

    retailer_id: RetailerId
    action: SyncAction
    remote_set_id: RemoteSetId | None = None


@dataclass(slots=True)
class FullSyncResult:
    """Summary of one full-sync trigger."""

    throttled: bool = False
    visited: int = 0
    outcomes: list[SyncOutcome] = field(default_factory=list["SyncOutcome"])
    failures: dict[int, SyncError] = field(default_factory=dict[int, "SyncError"])
    error: SyncError | None = None

    @property
    def created(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.action is SyncAction.CREATED)

    @property
    def updated(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.action is SyncAction.UPDATED)

    @property
    def failed(self) -> int:
        return len(self.failures)
