"""Category source backed by a JSON export of the taxonomy store."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from setsync.domain.types import LocalCategory

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


log = getLogger(__name__)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CategoryRecord(BaseModel):
    """One exported category. Accepts both our field names and term-style names."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    category_id: int = Field(validation_alias=AliasChoices("category_id", "term_id"))
    taxonomy_instance_id: int = Field(
        validation_alias=AliasChoices("taxonomy_instance_id", "term_taxonomy_id")
    )
    name: str
    description: str | None = None
    url: str | None = Field(default=None, validation_alias=AliasChoices("url", "link"))
    thumbnail_url: str | None = Field(
        default=None, validation_alias=AliasChoices("thumbnail_url", "image")
    )
    parent_id: int | None = Field(
        default=None, validation_alias=AliasChoices("parent_id", "parent")
    )

    _normalize_optional = field_validator(
        "description", "url", "thumbnail_url", mode="before"
    )(_blank_to_none)

    @field_validator("parent_id", mode="before")
    @classmethod
    def _root_parent(cls, value: object) -> object:
        if value in (0, "0", "", None):
            return None
        return value

    def to_domain(self) -> LocalCategory:
        return LocalCategory(
            category_id=self.category_id,
            taxonomy_instance_id=self.taxonomy_instance_id,
            name=self.name,
            description=self.description or "",
            url=self.url or "",
            thumbnail_url=self.thumbnail_url,
            parent_id=self.parent_id,
        )


_RECORDS = TypeAdapter(list[CategoryRecord])


class JsonTaxonomySource:
    """Read categories from a JSON file containing a list of category objects.

    The file is re-read on every call so that a long-running process sees edits.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def list_categories(self) -> Sequence[LocalCategory]:
        with self._path.open(encoding="utf-8") as handle:
            raw = json.load(handle)
        records = _RECORDS.validate_python(raw)
        categories = sorted((record.to_domain() for record in records), key=_by_id)
        log.debug("Loaded %d categories from %s", len(categories), self._path)
        return categories

    def get_category(self, category_id: int) -> LocalCategory | None:
        for category in self.list_categories():
            if category.category_id == category_id:
                return category
        return None


def _by_id(category: LocalCategory) -> int:
    return category.category_id
