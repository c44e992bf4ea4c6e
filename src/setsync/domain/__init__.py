"""Reconciliation core: categories in, product set calls out."""

from __future__ import annotations

from .events import EventAdapter
from .full_sync import FullSync
from .payload import build_sync_payload
from .reconciler import Reconciler
from .result import Err, Ok, Result, SyncError, SyncErrorKind, SyncFailedError
from .types import (
    CategoryChange,
    CategoryIdentity,
    ChangeKind,
    FullSyncResult,
    LocalCategory,
    SyncAction,
    SyncOutcome,
    SyncPayload,
    retailer_id_for,
)

__all__ = [
    "CategoryChange",
    "CategoryIdentity",
    "ChangeKind",
    "Err",
    "EventAdapter",
    "FullSync",
    "FullSyncResult",
    "LocalCategory",
    "Ok",
    "Reconciler",
    "Result",
    "SyncAction",
    "SyncError",
    "SyncErrorKind",
    "SyncFailedError",
    "SyncOutcome",
    "SyncPayload",
    "build_sync_payload",
    "retailer_id_for",
]
