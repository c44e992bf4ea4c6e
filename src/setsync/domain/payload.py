"""Build product set payloads from local categories."""

from __future__ import annotations

import html
import json
import re
from typing import TYPE_CHECKING

from .types import SyncPayload, retailer_id_for

if TYPE_CHECKING:
    from .types import LocalCategory

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_text(value: str | None) -> str:
    """Strip markup and entities from taxonomy text fields."""

    if not value:
        return ""
    without_tags = _TAG_PATTERN.sub(" ", value)
    unescaped = html.unescape(without_tags)
    return _WHITESPACE_PATTERN.sub(" ", unescaped).strip()


def build_filter(category_name: str) -> str:
    """Matching rule: product type contains the category name, case-insensitive."""

    rule = {"and": [{"product_type": {"i_contains": category_name}}]}
    return json.dumps(rule, separators=(",", ":"), ensure_ascii=False)


def build_metadata(category: LocalCategory) -> dict[str, str]:
    metadata: dict[str, str] = {}
    thumbnail_url = (category.thumbnail_url or "").strip()
    if thumbnail_url:
        metadata["cover_image_url"] = thumbnail_url
    description = clean_text(category.description)
    if description:
        metadata["description"] = description
    external_url = (category.url or "").strip()
    if external_url:
        metadata["external_url"] = external_url
    return metadata


def build_sync_payload(category: LocalCategory) -> SyncPayload:
    """Return the full-replace payload for ``category``. Pure; no I/O."""

    name = clean_text(category.name)
    return SyncPayload(
        name=name,
        filter=build_filter(name),
        retailer_id=retailer_id_for(category),
        metadata=json.dumps(build_metadata(category), separators=(",", ":"), ensure_ascii=False),
    )
